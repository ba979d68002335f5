"""Formatting and delivery of presence notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..constants import DEFAULT_NOTIFY_TIMEZONE, NOTIFY_SUBJECT, NOTIFY_TIMESTAMP_FORMAT
from ..errors import NotificationError, log_error
from ..logs.logger import logger
from ..presence import PresenceChange
from .protocols import Notifier


def _now(tz: tzinfo) -> datetime:
    return datetime.now(tz)


def load_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC when it is unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.log_event(
            "notify", "timezone_fallback", level=logging.ERROR, zone=name, error=str(e)
        )
        return UTC


class PresenceAlerts:
    """Turns presence changes into one notification each.

    At most one delivery attempt per change: failures are logged and dropped,
    and the presence table is never rolled back because of them.
    """

    def __init__(
        self,
        notifier: Notifier,
        *,
        sender: str,
        recipient: str,
        subject: str = NOTIFY_SUBJECT,
        timezone: str = DEFAULT_NOTIFY_TIMEZONE,
        clock: Callable[[tzinfo], datetime] | None = None,
    ) -> None:
        self.notifier = notifier
        self.sender = sender
        self.recipient = recipient
        self.subject = subject
        self.tz = load_timezone(timezone)
        self._clock = clock or _now
        self.delivered = 0
        self.failed = 0

    def format_body(self, change: PresenceChange) -> str:
        timestamp = self._clock(self.tz).strftime(NOTIFY_TIMESTAMP_FORMAT)
        return f"[{timestamp}] {change.describe()}"

    async def announce(self, change: PresenceChange) -> bool:
        body = self.format_body(change)
        try:
            await asyncio.to_thread(
                self.notifier.send, self.subject, body, self.sender, self.recipient
            )
        except NotificationError as e:
            self.failed += 1
            log_error("Notification failed", e, {"peer": change.peer})
            return False
        except Exception as e:  # noqa: BLE001
            # One broken delivery must not drop the rest of a reply's changes.
            self.failed += 1
            log_error("Notifier raised unexpectedly", e, {"peer": change.peer})
            return False
        self.delivered += 1
        logger.log_event(
            "notify", "sent", recipient=self.recipient, peer=change.peer, body=body
        )
        return True
