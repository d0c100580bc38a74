"""Session context shared by the bootstrapper and both API clients."""
from __future__ import annotations

import base64
import dataclasses
from typing import Any

from gstats.engine.defaults import LOCAL_USERNAME
from gstats.engine.errors import NotBootstrapped
from gstats.engine.models import (
    ChatSessionResponse,
    EntitlementsTokenResponse,
    SessionsResponse,
)


def basicAuth(password: str, username: str = LOCAL_USERNAME) -> str:
    """Authorization header value for the local service."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}"


@dataclasses.dataclass(slots=True, frozen=True)
class ApiInfo:
    """Connection coordinates for the local service, read from the lock file.

    The password rotates every time the game client launches.
    """

    username: str
    processId: int
    port: int
    password: str
    protocol: str

    @property
    def localUrl(self) -> str:
        return f"{self.protocol}://127.0.0.1:{self.port}"

    @property
    def socketUrl(self) -> str:
        return f"wss://127.0.0.1:{self.port}"

    @property
    def basicAuth(self) -> str:
        return basicAuth(self.password)


@dataclasses.dataclass(slots=True, frozen=True)
class RoutingInfo:
    """Region and shard of the remote game servers, read from the log file."""

    region: str
    shard: str

    @property
    def pdUrl(self) -> str:
        return f"https://pd.{self.shard}.a.pvp.net"

    @property
    def glzUrl(self) -> str:
        return f"https://glz-{self.region}-1.{self.shard}.a.pvp.net"


@dataclasses.dataclass(slots=True, frozen=True)
class SessionState:
    """The three local snapshots fetched during a bootstrap."""

    chatSession: ChatSessionResponse
    riotSessions: SessionsResponse
    entitlements: EntitlementsTokenResponse


@dataclasses.dataclass(slots=True, frozen=True)
class DerivedIdentity:
    authToken: str
    playerUuid: str
    clientVersion: str
    entitlementToken: str


@dataclasses.dataclass(slots=True)
class SessionContext:
    """Everything a bootstrap resolves, handed by reference to each client.

    Only the Bootstrapper writes these fields. Clients read them through
    the ``require*`` accessors so a missing value raises NotBootstrapped
    instead of producing a half-built request.
    """

    apiInfo: ApiInfo | None = None
    routing: RoutingInfo | None = None
    state: SessionState | None = None
    identity: DerivedIdentity | None = None

    # live websockets connection, owned by the SocketChannel
    socket: Any | None = None

    @property
    def ready(self) -> bool:
        return None not in (self.apiInfo, self.routing, self.state, self.identity)

    @property
    def playerUuid(self) -> str | None:
        return self.identity.playerUuid if self.identity else None

    def requireCoordinates(self) -> tuple[ApiInfo, RoutingInfo]:
        if self.apiInfo is None or self.routing is None:
            raise NotBootstrapped("Lock file and log file have not been resolved yet")

        return self.apiInfo, self.routing

    def requireIdentity(self) -> tuple[RoutingInfo, DerivedIdentity]:
        _, routing = self.requireCoordinates()
        if self.identity is None:
            raise NotBootstrapped("Session tokens have not been fetched yet")

        return routing, self.identity

    def clearSession(self) -> None:
        """Forget per-launch tokens but keep the located coordinates."""
        self.state = None
        self.identity = None

    def reset(self) -> None:
        """Forget everything so the next bootstrap re-reads both files."""
        self.apiInfo = None
        self.routing = None
        self.clearSession()
        self.socket = None
