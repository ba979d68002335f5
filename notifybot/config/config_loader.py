"""Configuration loading from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import ValidationError

from ..constants import DEFAULT_POLL_INTERVAL_SECONDS
from ..errors import ConfigurationError
from .duration import parse_duration
from .model import BotConfig

# Environment variable -> BotConfig field
ENV_FIELDS = {
    "SERVER": "server",
    "PORT": "port",
    "BOT_NAME": "bot_name",
    "CHANNELS": "channels",
    "NICKNAMES": "nicknames",
    "NOTIFY_EMAIL": "notify_email",
    "FROM_EMAIL": "from_email",
    "AWS_REGION": "aws_region",
    "NOTIFY_TIMEZONE": "notify_timezone",
}
REQUIRED_ENV = ("SERVER", "PORT", "BOT_NAME")


def resolve_poll_interval(raw: str | None) -> float:
    """Turn the SLEEP_MIN setting into seconds, defaulting on any problem."""
    default = float(DEFAULT_POLL_INTERVAL_SECONDS)
    if raw is None or not raw.strip():
        logging.error(
            f"⏱️ 'SLEEP_MIN' not provided in config, defaulting to {default:.0f}s"
        )
        return default
    try:
        seconds = parse_duration(raw)
    except ValueError as e:
        logging.error(
            f"⏱️ Error parsing duration SLEEP_MIN={raw!r} ({e}), defaulting to {default:.0f}s"
        )
        return default
    if seconds <= 0:
        logging.error(
            f"⏱️ Non-positive duration SLEEP_MIN={raw!r}, defaulting to {default:.0f}s"
        )
        return default
    return seconds


class ConfigLoader:
    """Builds a validated ``BotConfig`` from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def load_raw(self) -> dict[str, object]:
        raw: dict[str, object] = {}
        for env_name, field in ENV_FIELDS.items():
            value = self.environ.get(env_name)
            if value is not None:
                raw[field] = value
        raw["poll_interval"] = resolve_poll_interval(self.environ.get("SLEEP_MIN"))
        return raw

    def get_configuration(self) -> BotConfig:
        """Load and validate the bot configuration.

        Raises:
            ConfigurationError: If a required setting is missing or invalid.
        """
        missing = [name for name in REQUIRED_ENV if not self.environ.get(name, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                data={"missing": missing},
            )
        try:
            config = BotConfig.model_validate(self.load_raw())
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(fields)}",
                data={"fields": fields},
            ) from e
        if not config.nicknames:
            logging.warning("👀 NICKNAMES is empty; presence polling will be idle")
        if not config.email_enabled:
            logging.warning(
                "📭 NOTIFY_EMAIL/FROM_EMAIL not set; notifications will only be logged"
            )
        return config
