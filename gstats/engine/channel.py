"""Authenticated WebSocket connection to the game client's local service."""

from __future__ import annotations

import asyncio
import ssl
from typing import Any

import websockets
from loguru import logger
from websockets.protocol import State

from gstats.engine.errors import ConnectError
from gstats.engine.session import ApiInfo


def insecureContext() -> ssl.SSLContext:
    """TLS context accepting the local service's self-signed certificate."""
    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


class SocketChannel:
    """Hold at most one open connection to ``wss://127.0.0.1:{port}``.

    ``connect()`` is one-shot: it either returns an open connection or raises
    ConnectError. There is no reconnect loop here; callers re-bootstrap.
    Message dispatch is not implemented.
    """

    def __init__(self, openTimeout: float = 5.0):
        self.openTimeout = openTimeout

        # active websocket connection (if any)
        self.activeWS: Any | None = None

    @property
    def is_open(self) -> bool:
        return self.activeWS is not None and self.activeWS.state is State.OPEN

    async def connect(self, apiInfo: ApiInfo) -> Any:
        url = apiInfo.socketUrl
        logger.info("[Socket] Connecting to local websocket: {}", url)

        try:
            ws = await websockets.connect(
                url,
                additional_headers={"Authorization": apiInfo.basicAuth},
                ssl=insecureContext(),
                open_timeout=self.openTimeout,
                close_timeout=1,
                compression=None,
                user_agent_header=None,
            )
        except asyncio.CancelledError:
            logger.warning("[Socket] Handshake to {} cancelled", url)
            raise
        except (OSError, TimeoutError, websockets.WebSocketException) as e:
            logger.error("[Socket] Handshake to {} failed: {}", url, e)
            raise ConnectError(url, str(e) or type(e).__name__) from e

        if ws.state is not State.OPEN:
            # closed by the peer right after the handshake
            await ws.close()
            raise ConnectError(url, "closed before open")

        previous, self.activeWS = self.activeWS, ws
        if previous is not None:
            logger.info("[Socket] Replacing previous connection")
            await previous.close()

        logger.info("[Socket] Connected!")
        return ws

    async def close(self) -> None:
        ws, self.activeWS = self.activeWS, None
        if ws is not None:
            await ws.close()
