"""Socket transport for one IRC session (asyncio streams)."""

from __future__ import annotations

import asyncio
import logging

from ..constants import IRC_CONNECT_TIMEOUT
from ..errors import TransportError
from ..logs.logger import logger


class SessionTransport:
    """Owns the TCP stream of a single session.

    Knows nothing about IRC beyond CRLF framing. Writers are serialised with
    a lock because the read loop and the presence poller both send.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        host: str = "",
        port: int = 0,
    ) -> None:
        self.host = host
        self.port = port
        self._reader = reader
        self._writer = writer
        self._send_lock = asyncio.Lock()
        self._closed = False

    @classmethod
    async def open(
        cls, host: str, port: int, *, timeout: float = IRC_CONNECT_TIMEOUT
    ) -> SessionTransport:
        """Dial the server.

        Raises:
            TransportError: On refusal, resolution failure or timeout.
        """
        logger.log_event(
            "irc", "open_connection", level=logging.DEBUG, server=host, port=port
        )
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=timeout
            )
        except TimeoutError as e:
            raise TransportError(
                f"Timed out connecting to {host}:{port}",
                data={"server": host, "port": port, "timeout": timeout},
            ) from e
        except OSError as e:
            raise TransportError(
                f"Cannot connect to {host}:{port}: {e}",
                data={"server": host, "port": port},
            ) from e
        logger.log_event("irc", "connection_established", server=host, port=port)
        return cls(reader, writer, host=host, port=port)

    @property
    def closed(self) -> bool:
        return self._closed or self._writer.is_closing()

    async def send_line(self, line: str) -> None:
        if "\r" in line or "\n" in line:
            raise ValueError("IRC lines must not contain CR or LF")
        async with self._send_lock:
            if self.closed:
                raise TransportError("Send on closed connection", data={"line": line})
            try:
                self._writer.write(f"{line}\r\n".encode())
                await self._writer.drain()
            except (OSError, RuntimeError) as e:
                raise TransportError(f"Send failed: {e}", data={"line": line}) from e
        logger.log_event("irc", "sent", level=logging.DEBUG, line=line)

    async def read_line(self) -> str:
        try:
            data = await self._reader.readline()
        except (OSError, ValueError) as e:
            # ValueError: line longer than the stream buffer limit
            raise TransportError(f"Read failed: {e}") from e
        if not data:
            raise TransportError("Connection closed by server")
        return data.decode("utf-8", errors="ignore").rstrip("\r\n")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._writer.close()
            await self._writer.wait_closed()
        except (OSError, RuntimeError) as e:
            logger.log_event(
                "irc", "close_error", level=logging.DEBUG, error=str(e)
            )
