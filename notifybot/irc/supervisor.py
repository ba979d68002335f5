"""Session lifecycle: connect, identify, read loop, reconnect."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_never,
    wait_fixed,
)

from ..constants import RECONNECT_BACKOFF_SECONDS, SESSION_RESTART_DELAY_SECONDS
from ..errors import TransportError, log_error
from ..logs.logger import logger
from .protocols import LineTransport, TransportFactory
from .session import Session
from .transport import SessionTransport

if TYPE_CHECKING:  # pragma: no cover
    from ..config import BotConfig
    from .dispatcher import ProtocolDispatcher

SleepFunc = Callable[[float], Awaitable[Any]]


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    IDENTIFYING = auto()
    ACTIVE = auto()
    FAILED = auto()
    STOPPED = auto()


class ReconnectSupervisor:
    """Runs sessions back to back, forever.

    CONNECTING retries every ``backoff`` seconds until the server accepts the
    connection; a session that later fails is torn down (poller included)
    before the next one is dialed, so at most one session is ever live.
    """

    def __init__(
        self,
        config: BotConfig,
        dispatcher: ProtocolDispatcher,
        *,
        transport_factory: TransportFactory = SessionTransport.open,
        backoff: float = RECONNECT_BACKOFF_SECONDS,
        restart_delay: float = SESSION_RESTART_DELAY_SECONDS,
        sleep: SleepFunc | None = None,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher
        self.backoff = backoff
        self.restart_delay = restart_delay
        self._transport_factory = transport_factory
        self._sleep = sleep or self._interruptible_sleep
        self._stop_event = asyncio.Event()
        self.state = ConnectionState.DISCONNECTED
        self.transitions: deque[ConnectionState] = deque(maxlen=64)
        self.session: Session | None = None
        self.sessions_started = 0
        self.connect_attempts = 0
        self.last_failure: str | None = None

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def _set_state(self, new_state: ConnectionState) -> None:
        # Re-entering CONNECTING on retry is recorded as its own transition.
        old_state = self.state
        self.state = new_state
        self.transitions.append(new_state)
        logger.log_event(
            "session",
            "state_change",
            nick=self.session.nick if self.session else self.config.bot_name,
            old_state=old_state.name,
            new_state=new_state.name,
        )

    async def _interruptible_sleep(self, delay: float) -> None:
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)

    def stop(self) -> None:
        self._stop_event.set()

    async def shutdown(self) -> None:
        """Stop the loop and close the live session so a blocked read returns."""
        self.stop()
        if self.session is not None:
            await self.session.close()

    async def run(self) -> None:
        logger.log_event(
            "session",
            "supervisor_start",
            server=self.config.server,
            port=self.config.port,
        )
        try:
            while not self.stopping:
                transport = await self._connect()
                if transport is None:
                    break
                await self._run_session(transport)
                if self.stopping:
                    break
                if self.restart_delay > 0:
                    await self._sleep(self.restart_delay)
        finally:
            if self.session is not None:
                await self.session.close()
            self._set_state(ConnectionState.STOPPED)
            logger.log_event(
                "session", "supervisor_stopped", sessions=self.sessions_started
            )

    async def _connect(self) -> LineTransport | None:
        host, port = self.config.server, self.config.port
        transport: LineTransport | None = None
        retrying = AsyncRetrying(
            wait=wait_fixed(self.backoff),
            stop=stop_never,
            retry=retry_if_exception_type(TransportError),
            before=self._before_attempt,
            before_sleep=self._log_connect_retry,
            sleep=self._sleep,
        )
        async for attempt in retrying:
            with attempt:
                if self.stopping:
                    break
                self.connect_attempts += 1
                logger.log_event(
                    "session",
                    "connect_start",
                    server=host,
                    port=port,
                    attempt=attempt.retry_state.attempt_number,
                )
                transport = await self._transport_factory(host, port)
        if transport is not None and self.stopping:
            await transport.close()
            return None
        return transport

    def _before_attempt(self, retry_state: RetryCallState) -> None:
        self._set_state(ConnectionState.CONNECTING)

    def _log_connect_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self.last_failure = str(error)
        delay = retry_state.next_action.sleep if retry_state.next_action else self.backoff
        logger.log_event(
            "session",
            "connect_failed",
            level=logging.ERROR,
            server=self.config.server,
            error=str(error),
            attempt=retry_state.attempt_number,
            backoff=delay,
        )

    async def _run_session(self, transport: LineTransport) -> None:
        self.sessions_started += 1
        session = Session(
            transport=transport,
            nick=self.config.bot_name,
            session_id=self.sessions_started,
        )
        self.session = session
        started = time.monotonic()
        try:
            self._set_state(ConnectionState.IDENTIFYING)
            await session.identify()
            self._set_state(ConnectionState.ACTIVE)
            logger.log_event("session", "active", nick=session.nick, session_id=session.session_id)
            await self._read_loop(session)
        except TransportError as e:
            self.last_failure = str(e)
            if not self.stopping:
                logger.log_event(
                    "session",
                    "lost",
                    level=logging.WARNING,
                    nick=session.nick,
                    error=str(e),
                    uptime=round(time.monotonic() - started, 1),
                )
        finally:
            self._set_state(ConnectionState.FAILED)
            await session.close()
            self.session = None

    async def _read_loop(self, session: Session) -> None:
        while not self.stopping:
            raw = await session.read_line()
            try:
                await self.dispatcher.handle(raw, session)
            except TransportError:
                raise
            except Exception as e:  # noqa: BLE001
                log_error("Line handler failed", e, {"raw": raw, "nick": session.nick})

    def get_health_snapshot(self) -> dict[str, Any]:
        session = self.session
        return {
            "state": self.state.name,
            "nick": session.nick if session else None,
            "ready": bool(session and session.ready),
            "sessions_started": self.sessions_started,
            "connect_attempts": self.connect_attempts,
            "last_failure": self.last_failure,
        }
