"""Client for the publisher's regional match-data services.

Terminology:
- a "game" is a match that is currently being played.
- a "match" is a game that has been played.
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import TypeVar
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from gstats.engine.apiclient import ApiClient
from gstats.engine.defaults import CLIENT_PLATFORM
from gstats.engine.models import (
    CurrentGameMatchResponse,
    CurrentGamePlayerResponse,
    MatchDetailsResponse,
    MatchHistoryResponse,
    PreGameMatchResponse,
    PreGamePlayerResponse,
)
from gstats.engine.protocols import HttpTransport
from gstats.engine.session import RoutingInfo, SessionContext

M = TypeVar("M", bound=BaseModel)

DEFAULT_HISTORY_WINDOW = 20
DEFAULT_QUEUE = "competitive"


def _segment(value: str) -> str:
    """Escape an id so it stays a single path segment."""
    return quote(value, safe="")


class Endpoint(enum.Enum):
    """Which regional host serves a path. Chosen per call, never guessed from the path."""

    # per-shard player data: match history, match details
    PD = "pd"

    # per-region-and-shard live game services: core-game, pregame
    GLZ = "glz"

    def baseUrl(self, routing: RoutingInfo) -> str:
        if self is Endpoint.PD:
            return routing.pdUrl

        return routing.glzUrl


class RemoteClient(ApiClient):
    name = "Remote API"

    def __init__(
        self,
        context: SessionContext,
        transport: HttpTransport,
        clientPlatform: str = CLIENT_PLATFORM,
    ):
        super().__init__(context, transport)
        self.clientPlatform = clientPlatform

    async def request(
        self,
        path: str,
        model: type[M],
        endpoint: Endpoint = Endpoint.GLZ,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> M:
        routing, identity = self.context.requireIdentity()

        return await self.send(
            f"{endpoint.baseUrl(routing)}/{path.lstrip('/')}",
            model,
            {
                "X-Riot-ClientPlatform": self.clientPlatform,
                "X-Riot-ClientVersion": identity.clientVersion,
                "X-Riot-Entitlements-JWT": identity.entitlementToken,
                "Authorization": f"Bearer {identity.authToken}",
            },
            method=method,
            extraHeaders=headers,
            body=body,
        )

    def _player(self, uuid: str | None) -> str:
        if uuid:
            return _segment(uuid)

        _, identity = self.context.requireIdentity()
        return _segment(identity.playerUuid)

    # ── live game (glz) ─────────────────────────────────────────────

    async def get_current_game(self, uuid: str | None = None) -> CurrentGamePlayerResponse:
        """ID of the game the player is in (defaults to the bootstrapped player)."""
        return await self.request(
            f"core-game/v1/players/{self._player(uuid)}", CurrentGamePlayerResponse
        )

    async def get_game_data(self, gameId: str) -> CurrentGameMatchResponse:
        return await self.request(
            f"core-game/v1/matches/{_segment(gameId)}", CurrentGameMatchResponse
        )

    async def get_current_pregame(self, uuid: str | None = None) -> PreGamePlayerResponse:
        """ID of the pre-game lobby the player is in."""
        return await self.request(
            f"pregame/v1/players/{self._player(uuid)}", PreGamePlayerResponse
        )

    async def get_pregame_data(self, pregameId: str) -> PreGameMatchResponse:
        return await self.request(
            f"pregame/v1/matches/{_segment(pregameId)}", PreGameMatchResponse
        )

    # ── finished matches (pd) ───────────────────────────────────────

    async def get_match_history(
        self,
        uuid: str | None = None,
        startIndex: int = 0,
        endIndex: int = DEFAULT_HISTORY_WINDOW,
        queue: str = DEFAULT_QUEUE,
    ) -> MatchHistoryResponse:
        """Window [startIndex, endIndex) of the player's history, newest first."""
        params = urlencode(dict(startIndex=startIndex, endIndex=endIndex, queue=queue))

        return await self.request(
            f"match-history/v1/history/{self._player(uuid)}?{params}",
            MatchHistoryResponse,
            Endpoint.PD,
        )

    async def get_match_data(self, matchId: str) -> MatchDetailsResponse:
        return await self.request(
            f"match-details/v1/matches/{_segment(matchId)}", MatchDetailsResponse, Endpoint.PD
        )
