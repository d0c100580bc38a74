"""Locate local API credentials (lock file) and remote routing (log file)."""
from __future__ import annotations

import pathlib
import re
from typing import Final

from loguru import logger

from gstats.engine.errors import MalformedCredentials, NotFound, PatternNotFound
from gstats.engine.protocols import TextFileSource
from gstats.engine.session import ApiInfo, RoutingInfo

# Most recent remote game server host written by the game client.
# Region and shard are captured verbatim without further validation.
GLZ_HOST: Final = re.compile(r"https://glz-(.+?)-1\.(.+?)\.a\.pvp\.net")

MAX_PORT: Final = 65535


def parseLockFile(text: str) -> ApiInfo:
    """Parse ``username:pid:port:password:protocol``."""
    content = text.strip()
    fields = content.split(":")
    if len(fields) != 5:
        raise MalformedCredentials(content, f"expected 5 fields, got {len(fields)}")

    username, processId, port, password, protocol = fields
    try:
        info = ApiInfo(
            username=username,
            processId=int(processId),
            port=int(port),
            password=password,
            protocol=protocol,
        )
    except ValueError as e:
        raise MalformedCredentials(content, "process id and port must be integers") from e

    if info.processId < 0:
        raise MalformedCredentials(content, f"negative process id {info.processId}")

    if not 0 <= info.port <= MAX_PORT:
        raise MalformedCredentials(content, f"port {info.port} out of range")

    return info


def parseLogFile(text: str) -> RoutingInfo | None:
    """First glz host in the log, or None if nothing has connected yet."""
    if match := GLZ_HOST.search(text):
        return RoutingInfo(region=match.group(1), shard=match.group(2))

    return None


async def locate_credentials(path: pathlib.Path, files: TextFileSource) -> ApiInfo:
    """Read the lock file written by the running client.

    Raises NotFound when the file is absent (client not running) and
    MalformedCredentials when it cannot be parsed. Never retries.
    """
    if not await files.exists(path):
        logger.warning("[Locator] '{}' does not exist. Is the game open?", path.name)
        raise NotFound(path)

    return parseLockFile(await files.read_text(path))


async def locate_routing(path: pathlib.Path, files: TextFileSource) -> RoutingInfo:
    """Scan the full client log for the region/shard of the game servers.

    The log grows for the lifetime of the client; it is only read once per
    bootstrap, never polled.
    """
    if not await files.exists(path):
        logger.warning("[Locator] '{}' does not exist. Is the game open?", path.name)
        raise NotFound(path)

    routing = parseLogFile(await files.read_text(path))
    if routing is None:
        logger.error("[Locator] Failed to find the region and shard in '{}'", path.name)
        raise PatternNotFound(path)

    logger.info("[Locator] Region: {}, shard: {}", routing.region, routing.shard)
    return routing
