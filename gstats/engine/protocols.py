"""Narrow protocols for the swappable I/O collaborators.

The engine never opens files or sockets for HTTP directly; it goes through
these two interfaces so a desktop shell, a standalone process, or a test
can each supply their own implementation.
"""
from __future__ import annotations

import asyncio
import dataclasses
import pathlib
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from gstats.engine.errors import NotFound


@dataclasses.dataclass(slots=True, frozen=True)
class HttpResponse:
    status: int
    body: str
    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)


@runtime_checkable
class HttpTransport(Protocol):
    """Perform one HTTP request or raise TransportError."""

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse: ...


@runtime_checkable
class TextFileSource(Protocol):
    """Existence checks and whole-file text reads."""

    async def exists(self, path: pathlib.Path) -> bool: ...
    async def read_text(self, path: pathlib.Path) -> str: ...


class LocalFiles:
    """Default TextFileSource: local disk, off the event loop, bounded by a timeout."""

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    async def exists(self, path: pathlib.Path) -> bool:
        try:
            return await asyncio.wait_for(asyncio.to_thread(path.is_file), self.timeout)
        except TimeoutError:
            raise NotFound(path, f"could not be checked within {self.timeout}s")

    async def read_text(self, path: pathlib.Path) -> str:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace"),
                self.timeout,
            )
        except TimeoutError:
            raise NotFound(path, f"could not be read within {self.timeout}s")
        except FileNotFoundError:
            # deleted between the existence check and the read (client exited)
            raise NotFound(path)
