"""One object wiring the session context to every engine component."""

from __future__ import annotations

from gstats.engine.bootstrap import Bootstrapper
from gstats.engine.channel import SocketChannel
from gstats.engine.defaults import Settings
from gstats.engine.local import LocalClient
from gstats.engine.protocols import HttpTransport, LocalFiles, TextFileSource
from gstats.engine.remote import RemoteClient
from gstats.engine.session import SessionContext
from gstats.engine.transport import HttpxTransport


class GameAPI:
    """Facade over the bootstrapper and both API clients.

    Create one per process. The file source and HTTP transport default to
    local disk and httpx but may be swapped (e.g. by a desktop shell that
    proxies its own I/O, or by tests).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: HttpTransport | None = None,
        files: TextFileSource | None = None,
        channel: SocketChannel | None = None,
    ):
        self.settings = settings or Settings.from_config()
        self.context = SessionContext()
        self.transport = transport or HttpxTransport(timeout=self.settings.httpTimeout)
        self.files = files or LocalFiles(timeout=self.settings.fileTimeout)
        self.channel = channel or SocketChannel(openTimeout=self.settings.socketTimeout)

        self.local = LocalClient(self.context, self.transport)
        self.remote = RemoteClient(
            self.context, self.transport, clientPlatform=self.settings.clientPlatform
        )
        self.bootstrapper = Bootstrapper(
            self.context, self.settings, self.files, self.local, self.channel
        )

    @property
    def ready(self) -> bool:
        return self.context.ready

    @property
    def playerUuid(self) -> str | None:
        return self.context.playerUuid

    @property
    def socket(self):
        return self.context.socket

    async def bootstrap(self) -> None:
        await self.bootstrapper.bootstrap()

    async def reset(self) -> None:
        await self.bootstrapper.reset()

    async def aclose(self) -> None:
        await self.channel.close()
        if isinstance(self.transport, HttpxTransport):
            await self.transport.aclose()
