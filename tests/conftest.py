"""Shared test fixtures for the gstats test suite.

FakeTransport and FakeFiles stand in for the HTTP primitive and the
local disk so every component runs headless, without a game client.
"""

import json
import pathlib
from dataclasses import dataclass, field
from io import StringIO
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from loguru import logger

from gstats.engine.defaults import Settings
from gstats.engine.errors import NotFound
from gstats.engine.protocols import HttpResponse
from gstats.engine.session import (
    ApiInfo,
    DerivedIdentity,
    RoutingInfo,
    SessionContext,
)

LOCKFILE = pathlib.Path("/fake/Riot Games/Riot Client/Config/lockfile")
LOGFILE = pathlib.Path("/fake/VALORANT/Saved/Logs/ShooterGame.log")

LOCKFILE_TEXT = "Riot Client:12345:54321:s3cr3tPa55:https"
LOGFILE_TEXT = (
    "[2024.05.01-10.00.00:000][  0]LogInit: Build: ++Ares-Core+release-08.08\n"
    "[2024.05.01-10.00.05:000][  0]LogPlatformSessionManager: "
    "Platform HTTP Query End. QueryName: [Party_FetchCustomGameConfigs], "
    "URL [GET https://glz-na-1.na.a.pvp.net/parties/v1/parties/customgameconfigs]\n"
    "[2024.05.01-10.10.05:000][  0]LogPlatformSessionManager: "
    "URL [GET https://glz-eu-1.eu.a.pvp.net/parties/v1/players]\n"
)

PUUID = "7a2b4c1d-0000-4e8f-9a3b-112233445566"


# ── Canned local API payloads ──

ENTITLEMENTS = {
    "accessToken": "access-token-abc",
    "entitlements": [],
    "issuer": "https://entitlements.auth.riotgames.com",
    "subject": PUUID,
    "token": "entitlement-jwt-xyz",
}

CHAT_SESSION = {
    "federated": True,
    "game_name": "Player",
    "game_tag": "NA1",
    "loaded": True,
    "name": "Player",
    "pid": f"{PUUID}@na1.pvp.net",
    "puuid": PUUID,
    "region": "na1",
    "resource": "RC-123",
    "state": "connected",
}


def product_session(productId: str, version: str) -> dict[str, Any]:
    return {
        "exitCode": 0,
        "exitReason": None,
        "isInternal": False,
        "launchConfiguration": {
            "arguments": ["-ares-deployment=na"],
            "executable": "C:/Riot Games/client.exe",
            "locale": "en_US",
            "voiceLocale": None,
            "workingDirectory": "C:/Riot Games",
        },
        "patchlineFullName": "VALORANT" if productId == "valorant" else "riot_client",
        "patchlineId": "live",
        "phase": "Gameplay",
        "productId": productId,
        "version": version,
    }


SESSIONS = {
    "host_app": product_session("riot_client", "85.0.0.1234"),
    "valorant-session": product_session("valorant", "release-08.08-shipping-9-2444158"),
}

SESSIONS_WITHOUT_GAME = {
    "host_app": product_session("riot_client", "85.0.0.1234"),
    "other": product_session("riot_client", "85.0.0.1235"),
}

HELP = {
    "events": {"OnJsonApiEvent": "Any"},
    "functions": {"GetHelp": "Help"},
    "types": {"BindingCallback": "Any"},
}


@dataclass
class FakeTransport:
    """HttpTransport test double.

    ``routes`` maps a URL substring to (status, body). The first matching
    route answers; unmatched URLs get a 404.
    """

    routes: dict[str, tuple[int, str]] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        # hook so subclasses' __post_init__ is invoked by the dataclass __init__
        pass

    def add(self, fragment: str, payload: Any, status: int = 200) -> None:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        self.routes[fragment] = (status, body)

    async def fetch(self, url, method="GET", headers=None, body=None) -> HttpResponse:
        self.calls.append(dict(url=url, method=method, headers=dict(headers or {}), body=body))
        for fragment, (status, text) in self.routes.items():
            if fragment in url:
                return HttpResponse(status=status, body=text, headers={})

        return HttpResponse(status=404, body='{"errorCode": "RESOURCE_NOT_FOUND"}', headers={})

    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]


@dataclass
class FakeFiles:
    """TextFileSource test double keyed by path."""

    files: dict[pathlib.Path, str] = field(default_factory=dict)
    reads: list[pathlib.Path] = field(default_factory=list)

    async def exists(self, path: pathlib.Path) -> bool:
        return path in self.files

    async def read_text(self, path: pathlib.Path) -> str:
        self.reads.append(path)
        if path not in self.files:
            raise NotFound(path)

        return self.files[path]


def local_routes(transport: FakeTransport, sessions=SESSIONS) -> FakeTransport:
    transport.add("entitlements/v1/token", ENTITLEMENTS)
    transport.add("chat/v1/session", CHAT_SESSION)
    transport.add("product-session/v1/sessions", sessions)
    transport.add("127.0.0.1:54321/help", HELP)
    return transport


def make_socket(open_: bool = True) -> MagicMock:
    """Stand-in for a websockets ClientConnection."""
    from websockets.protocol import State

    ws = MagicMock(name="ws")
    ws.state = State.OPEN if open_ else State.CLOSED
    ws.close = AsyncMock()
    return ws


# ── Fixtures ──


@pytest.fixture
def settings() -> Settings:
    return Settings(
        lockFile=LOCKFILE,
        logFile=LOGFILE,
        httpTimeout=1.0,
        socketTimeout=1.0,
        fileTimeout=1.0,
        logDir=None,
    )


@pytest.fixture
def fake_files() -> FakeFiles:
    return FakeFiles({LOCKFILE: LOCKFILE_TEXT, LOGFILE: LOGFILE_TEXT})


@pytest.fixture
def fake_transport() -> FakeTransport:
    return local_routes(FakeTransport())


@pytest.fixture
def fake_channel() -> MagicMock:
    """SocketChannel double whose connect() hands back a fresh open socket."""
    channel = MagicMock(name="channel")
    channel.connect = AsyncMock(side_effect=lambda apiInfo: make_socket())
    channel.close = AsyncMock()
    channel.is_open = True
    return channel


@pytest.fixture
def api_info() -> ApiInfo:
    return ApiInfo(
        username="Riot Client", processId=12345, port=54321, password="s3cr3tPa55", protocol="https"
    )


@pytest.fixture
def routing() -> RoutingInfo:
    return RoutingInfo(region="na", shard="na")


@pytest.fixture
def identity() -> DerivedIdentity:
    return DerivedIdentity(
        authToken="access-token-abc",
        playerUuid=PUUID,
        clientVersion="release-08.08-shipping-9-2444158",
        entitlementToken="entitlement-jwt-xyz",
    )


@pytest.fixture
def ready_context(api_info, routing, identity) -> SessionContext:
    """Context as a successful bootstrap would leave it (minus snapshots)."""
    return SessionContext(apiInfo=api_info, routing=routing, identity=identity)


@pytest.fixture
def log_capture():
    """Capture loguru output for assertion. Yields a StringIO buffer."""
    buf = StringIO()
    handler_id = logger.add(buf, format="{level} {message}", level="INFO")
    yield buf
    logger.remove(handler_id)
