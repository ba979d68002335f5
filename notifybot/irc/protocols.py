"""Protocol definitions for the IRC session components.

These keep the supervisor and dispatcher independent of the concrete socket
transport so tests can drive them with in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol


class LineTransport(Protocol):
    """A newline-framed, bidirectional text stream."""

    @property
    def closed(self) -> bool:
        """True once ``close`` has been called or the peer went away."""
        ...

    async def send_line(self, line: str) -> None:
        """Send one line; raises TransportError when the stream is unusable."""
        ...

    async def read_line(self) -> str:
        """Return the next line without its terminator; raises TransportError at EOF."""
        ...

    async def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        ...


TransportFactory = Callable[[str, int], Awaitable[LineTransport]]
