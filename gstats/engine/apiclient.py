"""Request machinery shared by the local and remote API clients."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel

from gstats.engine.errors import HttpError
from gstats.engine.models import decode
from gstats.engine.protocols import HttpTransport
from gstats.engine.session import SessionContext

M = TypeVar("M", bound=BaseModel)


class ApiClient:
    """Send one request, reject non-200 answers, validate the body.

    Subclasses decide the base URL and authentication headers; callers may
    add headers of their own, which are applied on top.
    """

    # tag used in log lines
    name = "API"

    def __init__(self, context: SessionContext, transport: HttpTransport):
        self.context = context
        self.transport = transport

    async def send(
        self,
        url: str,
        model: type[M],
        headers: Mapping[str, str],
        *,
        method: str = "GET",
        extraHeaders: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> M:
        merged = {**headers, **(extraHeaders or {})}
        response = await self.transport.fetch(url, method=method, headers=merged, body=body)

        if response.status != 200:
            logger.error(
                "[{}] Did not return a good response: {} {}",
                self.name,
                response.status,
                response.body,
            )
            raise HttpError(response.status, response.body)

        return decode(model, response.body, url)
