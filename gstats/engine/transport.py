"""Default outbound HTTP primitive backed by one shared httpx client."""
from __future__ import annotations

from collections.abc import Mapping

import httpx
from loguru import logger

from gstats.engine.errors import TransportError
from gstats.engine.protocols import HttpResponse

MAX_REDIRECTS = 15


class HttpxTransport:
    """HttpTransport over ``httpx.AsyncClient``.

    Certificate verification is disabled because the local service only
    presents a self-signed certificate for 127.0.0.1.
    """

    def __init__(self, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self.client = client or httpx.AsyncClient(
            verify=False,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            timeout=timeout,
        )

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        try:
            got = await self.client.request(
                method.upper(), url, headers=dict(headers or {}), content=body
            )
        except (httpx.HTTPError, httpx.InvalidURL, OverflowError) as e:
            # InvalidURL and OverflowError come from unusable hosts or ports
            logger.warning("[HTTP] {} {} failed: {}", method, url, e)
            raise TransportError(url, str(e) or type(e).__name__) from e

        return HttpResponse(status=got.status_code, body=got.text, headers=dict(got.headers))

    async def aclose(self) -> None:
        await self.client.aclose()
