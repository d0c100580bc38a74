"""Client for the game client's loopback HTTP service."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel

from gstats.engine.apiclient import ApiClient
from gstats.engine.models import (
    ChatSessionResponse,
    EntitlementsTokenResponse,
    LocalHelpResponse,
    SessionsResponse,
)

M = TypeVar("M", bound=BaseModel)


class LocalClient(ApiClient):
    name = "Local API"

    async def request(
        self,
        path: str,
        model: type[M],
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> M:
        """Authenticated request to ``{protocol}://127.0.0.1:{port}/{path}``."""
        apiInfo, _ = self.context.requireCoordinates()

        return await self.send(
            f"{apiInfo.localUrl}/{path.lstrip('/')}",
            model,
            {"Authorization": apiInfo.basicAuth},
            method=method,
            extraHeaders=headers,
            body=body,
        )

    async def get_entitlements_token(self) -> EntitlementsTokenResponse:
        """Bearer and entitlement tokens for remote requests."""
        return await self.request("entitlements/v1/token", EntitlementsTokenResponse)

    async def get_chat_session(self) -> ChatSessionResponse:
        """Active chat session (carries the player uuid)."""
        return await self.request("chat/v1/session", ChatSessionResponse)

    async def get_sessions(self) -> SessionsResponse:
        """Every active product session (the game, the launcher, other titles)."""
        return await self.request("product-session/v1/sessions", SessionsResponse)

    async def get_help(self) -> LocalHelpResponse:
        return await self.request("help", LocalHelpResponse)
