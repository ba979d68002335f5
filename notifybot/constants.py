"""
Configuration constants for NotifyBot

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Reconnect policy
RECONNECT_BACKOFF_SECONDS = _get_env_float(
    "RECONNECT_BACKOFF_SECONDS", 180.0
)  # Fixed wait between failed connection attempts (3 minutes)
SESSION_RESTART_DELAY_SECONDS = _get_env_float(
    "SESSION_RESTART_DELAY_SECONDS", 5.0
)  # Pause after a lost session before dialing again
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 30.0
)  # Seconds allowed for the TCP handshake

# Presence polling
DEFAULT_POLL_INTERVAL_SECONDS = _get_env_int(
    "DEFAULT_POLL_INTERVAL_SECONDS", 300
)  # Used when SLEEP_MIN is missing or unparseable

# Protocol
NICK_COLLISION_SUFFIX = "_"
BOT_VERSION = "v0.2a"
READY_NOTICE_TEMPLATE = "NOTICE {nick} :on"

# Notifications
NOTIFY_SUBJECT = "IRC Notification Event"
NOTIFY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_NOTIFY_TIMEZONE = "America/Chicago"
