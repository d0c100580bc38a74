"""Exception taxonomy for the game client integration layer.

Nothing raised from here is fatal to the process. Callers (the CLI, a UI)
decide whether to retry, poll, or display the failure.
"""
from __future__ import annotations


class GStatsError(Exception):
    """Base class for every error raised by gstats."""


class NotFound(GStatsError):
    """An expected local file is absent (the game client is not running)."""

    def __init__(self, path, reason: str = "does not exist"):
        self.path = path
        super().__init__(f"'{path}' {reason}")


class MalformedCredentials(GStatsError):
    """The lock file exists but does not hold five colon-separated fields."""

    def __init__(self, content: str, reason: str):
        self.content = content
        super().__init__(f"Malformed lock file ({reason}): {content!r}")


class PatternNotFound(GStatsError):
    """The log file exists but no remote game server has been logged yet."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"No region/shard host found in '{path}'")


class NotBootstrapped(GStatsError):
    """An API client was used before the session context was populated."""


class TransportError(GStatsError):
    """The HTTP request could not be completed at all."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        super().__init__(f"Unable to complete HTTP request to {url}: {reason}")


class HttpError(GStatsError):
    """The local or remote service answered with a non-200 status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body}")


class DecodeError(GStatsError):
    """A 200 response body was not JSON of the expected shape."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Unexpected response shape from '{path}': {detail}")


class ConnectError(GStatsError):
    """The local WebSocket handshake failed or closed before opening."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        super().__init__(f"Failed to connect to {url}: {reason}")


# ── Bootstrap failures ─────────────────────────────────────────────


class BootstrapError(GStatsError):
    """Base class for failures surfaced by Bootstrapper.bootstrap().

    The underlying locator or client error is always chained as __cause__.
    """


class CredentialsUnavailable(BootstrapError):
    pass


class RoutingUnavailable(BootstrapError):
    pass


class SessionFetchFailed(BootstrapError):
    pass


class TargetSessionNotFound(BootstrapError):
    def __init__(self, productId: str):
        self.productId = productId
        super().__init__(f"No active '{productId}' session found")


class SocketConnectFailed(BootstrapError):
    pass
