"""gstats engine layer: talking to the running game client, no UI dependency.

Modules
-------
errors
    Exception taxonomy. Locator failures (``NotFound``, ``MalformedCredentials``,
    ``PatternNotFound``), request failures (``HttpError``, ``DecodeError``,
    ``TransportError``), socket failures (``ConnectError``) and the
    ``BootstrapError`` family that wraps them for bootstrap context.

defaults
    Per-OS lock/log file paths, the canned client platform fingerprint, and
    ``Settings`` resolved from defaults, ``.env.gstats`` and the environment.

models
    pydantic response shapes for every local and remote endpoint, plus
    ``decode()`` which turns a shape mismatch into ``DecodeError``.

session
    ``ApiInfo``, ``RoutingInfo``, ``SessionState``, ``DerivedIdentity`` and the
    ``SessionContext`` that holds them for one process.

protocols
    Swappable I/O: ``HttpTransport`` (outbound HTTP primitive) and
    ``TextFileSource`` (``LocalFiles`` reads disk off the event loop).

transport
    ``HttpxTransport``: default ``HttpTransport`` on a shared ``httpx.AsyncClient``.

locators
    ``locate_credentials`` (lock file -> ApiInfo) and ``locate_routing``
    (client log -> RoutingInfo).

apiclient, local, remote
    ``LocalClient`` (loopback service, Basic auth) and ``RemoteClient``
    (regional pd/glz hosts, bearer + entitlement headers) over a shared
    non-200/decode policy.

channel
    ``SocketChannel``: one-shot authenticated WebSocket to the local service.

bootstrap
    ``Bootstrapper``: the serialized sequence that fills the SessionContext.
"""

from gstats.engine.bootstrap import Bootstrapper
from gstats.engine.channel import SocketChannel
from gstats.engine.local import LocalClient
from gstats.engine.remote import Endpoint, RemoteClient
from gstats.engine.session import SessionContext

__all__ = [
    "Bootstrapper",
    "SocketChannel",
    "LocalClient",
    "Endpoint",
    "RemoteClient",
    "SessionContext",
]
