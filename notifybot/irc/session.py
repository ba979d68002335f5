"""Per-connection session state."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import Any

from ..logs.logger import logger
from .protocols import LineTransport


@dataclass(eq=False)
class Session:
    """One live connection: transport, current nick and readiness.

    Created by the supervisor for every connection attempt and discarded when
    it fails; a session is never reconnected in place.
    """

    transport: LineTransport
    nick: str
    session_id: int = 0
    connected: bool = True
    ready: bool = False
    poll_task: asyncio.Task[Any] | None = field(default=None, repr=False)

    async def send(self, line: str) -> None:
        await self.transport.send_line(line)

    async def read_line(self) -> str:
        return await self.transport.read_line()

    async def identify(self) -> None:
        """Announce NICK/USER for the current nick."""
        await self.send(f"NICK {self.nick}")
        await self.send(f"USER {self.nick} 8 * :{self.nick}")

    def decorate_nick(self, suffix: str) -> str:
        self.nick = f"{self.nick}{suffix}"
        return self.nick

    def mark_ready(self) -> bool:
        """One-shot guard; True only the first time the server says we're on."""
        if self.ready:
            return False
        self.ready = True
        return True

    def attach_poller(self, task: asyncio.Task[Any] | None) -> None:
        self.poll_task = task

    async def close(self) -> None:
        """Stop the poller and drop the transport. Idempotent."""
        if not self.connected:
            return
        self.connected = False
        task, self.poll_task = self.poll_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        await self.transport.close()
        logger.log_event(
            "irc",
            "disconnected",
            level=logging.DEBUG,
            nick=self.nick,
            session_id=self.session_id,
        )
