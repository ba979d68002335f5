"""SignalHandler - handles system signals and shutdown coordination."""

import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable


class SignalHandler:
    """Routes SIGINT/SIGTERM to a single async shutdown callback."""

    def __init__(self, on_shutdown: Callable[[], Awaitable[None]]) -> None:
        self.on_shutdown = on_shutdown
        self.shutdown_initiated = False
        self._task: asyncio.Task[None] | None = None

    def trigger(self, signum: int) -> None:
        # Idempotent: only the first signal starts the shutdown.
        if self.shutdown_initiated:
            return
        logging.warning(f"🛑 Signal received - initiating shutdown (signal={signum})")
        self.shutdown_initiated = True
        self._task = asyncio.get_running_loop().create_task(self.on_shutdown())

    def setup_signal_handlers(self) -> None:  # pragma: no cover
        """Set up signal handlers for graceful shutdown on SIGINT/SIGTERM."""
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(signum, self.trigger, signum)
            except NotImplementedError:
                # Windows event loops; Ctrl+C still raises KeyboardInterrupt.
                logging.debug(f"Signal handler unsupported for signal={signum}")
