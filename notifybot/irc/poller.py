"""Periodic ISON polling for the tracked peers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any

from ..errors import TransportError
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from .session import Session

SleepFunc = Callable[[float], Awaitable[Any]]


class PresencePoller:
    """Writes ``ISON <peers>`` on a fixed interval for one session at a time.

    The loop ends silently on the first failed send; the read loop owns
    failure handling and reconnection.
    """

    def __init__(
        self,
        peers: Iterable[str],
        interval: float,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.peers = tuple(peers)
        self.interval = interval
        self._sleep = sleep

    def request_line(self) -> str:
        return f"ISON {' '.join(self.peers)}"

    def start(self, session: Session) -> asyncio.Task[None] | None:
        if not self.peers:
            logger.log_event("presence", "poll_idle", nick=session.nick)
            return None
        # Snapshot now; the peer set never changes for the session's lifetime.
        line = self.request_line()
        logger.log_event(
            "presence",
            "poll_start",
            nick=session.nick,
            interval=self.interval,
            peers=len(self.peers),
        )
        return asyncio.create_task(
            self._loop(session, line), name=f"ison-poller-{session.session_id}"
        )

    async def _loop(self, session: Session, line: str) -> None:
        polls = 0
        while True:
            try:
                await session.send(line)
            except TransportError as e:
                logger.log_event(
                    "presence",
                    "poll_stopped",
                    level=logging.DEBUG,
                    nick=session.nick,
                    polls=polls,
                    error=str(e),
                )
                return
            polls += 1
            await self._sleep(self.interval)
