#!/usr/bin/env python3
"""Command-line companion: bootstrap against the running game client and dump data.

Usage:
    gstats status                       # bootstrap and show identity/routing
    gstats --wait 120 status            # poll until the game is running
    gstats game                         # current game of the local player
    gstats pregame                      # current agent-select lobby
    gstats history --start 0 --end 5    # recent competitive matches
    gstats history --queue unrated
    gstats match MATCH_ID               # full details of one match
    gstats help                         # local API introspection
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time

import prettyprinter as pp  # type: ignore
import whenever
from loguru import logger

from gstats.api import GameAPI
from gstats.engine.defaults import Settings
from gstats.engine.errors import (
    BootstrapError,
    CredentialsUnavailable,
    GStatsError,
    RoutingUnavailable,
)

pp.install_extras(["dataclasses"], warn_on_error=False)


def setupLogging(settings: Settings) -> None:
    """Console at the configured level plus a TRACE file sink in the log directory."""
    logger.remove()
    logger.add(sys.stderr, colorize=True, level=settings.logLevel)

    if settings.logDir:
        settings.logDir.mkdir(parents=True, exist_ok=True)
        stamp = whenever.Instant.now().format_iso().replace(":", "-")
        logger.add(
            sink=settings.logDir / f"gstats-{stamp}.log", level="TRACE", colorize=False
        )


async def bootstrapWithPolling(api: GameAPI, wait: float, interval: float) -> None:
    """Retry bootstrap while the client is simply not up yet.

    Only missing files (client not started, no game server logged yet) are
    retried; any other failure is raised immediately.
    """
    deadline = time.monotonic() + wait
    while True:
        try:
            await api.bootstrap()
            return
        except (CredentialsUnavailable, RoutingUnavailable):
            if time.monotonic() + interval > deadline:
                raise

            logger.info("Waiting for the game client... (retry in {}s)", interval)
            await asyncio.sleep(interval)


def show(model) -> None:
    pp.pprint(model.model_dump())


async def run(args: argparse.Namespace, api: GameAPI) -> None:
    await bootstrapWithPolling(api, args.wait, args.interval)

    match args.command:
        case "status":
            ctx = api.context
            assert ctx.apiInfo and ctx.routing and ctx.identity
            logger.info("Player:  {}", ctx.identity.playerUuid)
            logger.info("Version: {}", ctx.identity.clientVersion)
            logger.info("Routing: region={} shard={}", ctx.routing.region, ctx.routing.shard)
            logger.info("Local:   {} (pid {})", ctx.apiInfo.localUrl, ctx.apiInfo.processId)
            logger.info("Socket:  {}", "open" if api.channel.is_open else "closed")
        case "game":
            current = await api.remote.get_current_game()
            show(await api.remote.get_game_data(current.MatchID))
        case "pregame":
            current = await api.remote.get_current_pregame()
            show(await api.remote.get_pregame_data(current.MatchID))
        case "history":
            history = await api.remote.get_match_history(
                startIndex=args.start, endIndex=args.end, queue=args.queue
            )
            logger.info(
                "Matches {}-{} of {} ({})", history.BeginIndex, history.EndIndex, history.Total, args.queue
            )
            for entry in history.History:
                started = whenever.Instant.from_timestamp_millis(entry.GameStartTime)
                logger.info("  {}  {}  {}", started.format_iso(), entry.QueueID, entry.MatchID)
        case "match":
            show(await api.remote.get_match_data(args.match_id))
        case "help":
            show(await api.local.get_help())


def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gstats", description="Read live game and match data from the running game client."
    )
    parser.add_argument(
        "--wait", type=float, default=0, help="seconds to keep polling for the game client"
    )
    parser.add_argument("--interval", type=float, default=2.0, help="poll interval in seconds")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="bootstrap and show session details")
    sub.add_parser("game", help="current game of the local player")
    sub.add_parser("pregame", help="current pre-game lobby of the local player")

    history = sub.add_parser("history", help="recent match history")
    history.add_argument("--start", type=int, default=0)
    history.add_argument("--end", type=int, default=20)
    history.add_argument("--queue", default="competitive")

    details = sub.add_parser("match", help="details of a finished match")
    details.add_argument("match_id")

    sub.add_parser("help", help="local API introspection")
    return parser


async def amain(argv: list[str] | None = None) -> int:
    args = buildParser().parse_args(argv)
    settings = Settings.from_config()
    setupLogging(settings)

    api = GameAPI(settings)
    try:
        await run(args, api)
    except BootstrapError:
        # already logged by the bootstrapper
        return 2
    except GStatsError as e:
        logger.error("{}", e)
        return 1
    finally:
        await api.aclose()

    return 0


def main() -> None:
    try:
        sys.exit(asyncio.run(amain()))
    except KeyboardInterrupt:
        logger.error("Exiting...")
        sys.exit(130)


if __name__ == "__main__":
    main()
