"""Logging setup for NotifyBot.

Console output goes through colorlog. Structured error lines are tallied per
category (``network``, ``protocol``, ``config``, ``notify``, ``internal``,
``unknown``) so a reconnect storm or a broken mail setup shows up as one
summary at exit and in the health snapshot.
"""

import atexit
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Any

import colorlog

# Chatty at DEBUG; they drown out the IRC traffic.
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "asyncio")

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}


@dataclass
class ErrorTally:
    count: int = 0
    last_message: str = ""
    last_seen: float = 0.0


class ErrorAggregator:
    """Per-category error counts for the lifetime of the process."""

    def __init__(self) -> None:
        self._tallies: dict[str, ErrorTally] = {}

    def record(self, category: str, message: str) -> None:
        tally = self._tallies.setdefault(category, ErrorTally())
        tally.count += 1
        tally.last_message = message
        tally.last_seen = time.time()

    def counts(self) -> dict[str, int]:
        return {category: t.count for category, t in sorted(self._tallies.items())}

    def last_message(self, category: str) -> str | None:
        tally = self._tallies.get(category)
        return tally.last_message if tally else None

    def summary_lines(self) -> list[str]:
        return [
            f"  {category}: {tally.count} (last: {tally.last_message})"
            for category, tally in sorted(self._tallies.items())
        ]

    def log_summary(self) -> None:
        lines = self.summary_lines()
        if not lines:
            logging.info("📊 No errors recorded this run")
            return
        logging.warning("📊 Error summary by category:")
        for line in lines:
            logging.warning(line)

    def reset(self) -> None:
        self._tallies.clear()


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[CATEGORY] message | Exception: ... | Context: k=v`` and tally it."""
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record(error_type, message)


def is_debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class LoggerConfigurator:
    """Configures the root logger with colored stderr output.

    ``DEBUG`` (true/1/yes) switches the level from INFO to DEBUG. With
    ``exit_summary`` the error tally is logged once at interpreter exit.
    """

    _summary_registered = False

    def __init__(self, *, exit_summary: bool = True) -> None:
        self.exit_summary = exit_summary

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=LOG_COLORS,
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )

    def configure(self) -> None:
        level = logging.DEBUG if is_debug_enabled() else logging.INFO
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
        logging.getLogger().setLevel(level)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        if self.exit_summary and not LoggerConfigurator._summary_registered:
            atexit.register(error_aggregator.log_summary)
            LoggerConfigurator._summary_registered = True
