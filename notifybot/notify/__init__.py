"""Presence notification delivery."""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError

from ..config import BotConfig
from .protocols import Notifier
from .service import PresenceAlerts, load_timezone
from .ses import LogNotifier, SesNotifier


def build_notifier(config: BotConfig) -> Notifier:
    """Pick the notification transport for a configuration.

    SES when both addresses are set; otherwise (or when the SES client cannot
    be created) a log-only notifier so presence tracking still runs.
    """
    if not config.email_enabled:
        return LogNotifier()
    try:
        return SesNotifier(region=config.aws_region)
    except BotoCoreError as e:
        logging.error(f"💥 Failed to create SES client ({e}); notifications will only be logged")
        return LogNotifier()


def build_alerts(config: BotConfig, notifier: Notifier | None = None) -> PresenceAlerts:
    return PresenceAlerts(
        notifier or build_notifier(config),
        sender=config.from_email or "",
        recipient=config.notify_email or "",
        timezone=config.notify_timezone,
    )


__all__ = [
    "LogNotifier",
    "Notifier",
    "PresenceAlerts",
    "SesNotifier",
    "build_alerts",
    "build_notifier",
    "load_timezone",
]
