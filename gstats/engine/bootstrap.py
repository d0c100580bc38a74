"""Session bootstrap: locate credentials and routing, fetch tokens, open the socket."""

from __future__ import annotations

import asyncio

from loguru import logger

from gstats.engine.channel import SocketChannel
from gstats.engine.defaults import Settings
from gstats.engine.errors import (
    ConnectError,
    CredentialsUnavailable,
    DecodeError,
    HttpError,
    MalformedCredentials,
    NotFound,
    PatternNotFound,
    RoutingUnavailable,
    SessionFetchFailed,
    SocketConnectFailed,
    TargetSessionNotFound,
    TransportError,
)
from gstats.engine.local import LocalClient
from gstats.engine.locators import locate_credentials, locate_routing
from gstats.engine.protocols import TextFileSource
from gstats.engine.session import DerivedIdentity, SessionContext, SessionState


def deriveIdentity(state: SessionState, productId: str) -> DerivedIdentity:
    """Pull the request tokens out of the three snapshots.

    The client version comes from the first session of ``productId`` in the
    order the service listed them; only one is ever expected.
    """
    session = state.riotSessions.find_product(productId)
    if session is None:
        raise TargetSessionNotFound(productId)

    return DerivedIdentity(
        authToken=state.entitlements.accessToken,
        playerUuid=state.chatSession.puuid,
        clientVersion=session.version,
        entitlementToken=state.entitlements.token,
    )


class Bootstrapper:
    """The only writer of the SessionContext.

    Calls to ``bootstrap()`` are serialized: a second caller waits for the
    first to finish and then runs its own pass against the committed state.
    Nothing here retries; callers own any polling or backoff policy.
    """

    def __init__(
        self,
        context: SessionContext,
        settings: Settings,
        files: TextFileSource,
        local: LocalClient,
        channel: SocketChannel,
    ):
        self.context = context
        self.settings = settings
        self.files = files
        self.local = local
        self.channel = channel
        self._lock = asyncio.Lock()

    async def bootstrap(self) -> None:
        async with self._lock:
            try:
                await self._run()
            except Exception as e:
                logger.error("[Bootstrap] Failed: {}", e)
                raise

    async def _run(self) -> None:
        ctx = self.context

        if ctx.apiInfo is None:
            try:
                ctx.apiInfo = await locate_credentials(self.settings.lockFile, self.files)
            except (NotFound, MalformedCredentials) as e:
                raise CredentialsUnavailable(str(e)) from e

        if ctx.routing is None:
            try:
                ctx.routing = await locate_routing(self.settings.logFile, self.files)
            except (NotFound, PatternNotFound) as e:
                raise RoutingUnavailable(str(e)) from e

        # tokens and the socket from an earlier launch are never valid against new coordinates
        ctx.clearSession()
        await self.channel.close()
        ctx.socket = None

        try:
            async with asyncio.TaskGroup() as tg:
                chatSession = tg.create_task(self.local.get_chat_session())
                riotSessions = tg.create_task(self.local.get_sessions())
                entitlements = tg.create_task(self.local.get_entitlements_token())
        except ExceptionGroup as eg:
            # siblings are already cancelled; report the first failure
            failed = eg.exceptions[0]
            if isinstance(failed, (HttpError, DecodeError, TransportError)):
                raise SessionFetchFailed(str(failed)) from failed

            raise

        state = SessionState(
            chatSession=chatSession.result(),
            riotSessions=riotSessions.result(),
            entitlements=entitlements.result(),
        )
        identity = deriveIdentity(state, self.settings.productId)

        try:
            ctx.socket = await self.channel.connect(ctx.apiInfo)
        except ConnectError as e:
            raise SocketConnectFailed(str(e)) from e

        ctx.state = state
        ctx.identity = identity
        logger.info("[Bootstrap] API setup is complete! Player: {}", identity.playerUuid)

    async def reset(self) -> None:
        """Drop all cached state and close the socket (e.g. after the client restarts)."""
        async with self._lock:
            await self.channel.close()
            self.context.reset()
