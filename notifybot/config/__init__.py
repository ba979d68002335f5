"""Configuration package exports.

Unified access point for the settings model and the environment loader.
"""

import logging

from .config_loader import ConfigLoader, resolve_poll_interval
from .duration import parse_duration
from .model import BotConfig


def get_configuration() -> BotConfig:
    """Load and validate the configuration from the process environment.

    Raises:
        ConfigurationError: If connectivity-critical settings are missing or invalid.
    """
    return ConfigLoader().get_configuration()


def print_config_summary(config: BotConfig) -> None:
    logging.info(f"📊 Configuration summary {config.summary()}")


__all__ = [
    "BotConfig",
    "ConfigLoader",
    "get_configuration",
    "parse_duration",
    "print_config_summary",
    "resolve_poll_interval",
]
