"""Error hierarchy and error logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigurationError,
    InternalError,
    NotificationError,
    ProtocolError,
    SessionClosedError,
    TransportError,
)

__all__ = [
    "log_error",
    "InternalError",
    "TransportError",
    "SessionClosedError",
    "ProtocolError",
    "ConfigurationError",
    "NotificationError",
]
