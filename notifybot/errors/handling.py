from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationError,
    InternalError,
    NotificationError,
    ProtocolError,
    TransportError,
)


def classify_error(error: BaseException) -> str:
    """Map an exception onto the structured error category used in logs."""
    if isinstance(error, TransportError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ProtocolError):
        return "protocol"
    if isinstance(error, ConfigurationError):
        return "config"
    if isinstance(error, NotificationError):
        return "notify"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The exception's structured ``data`` (for internal errors) is merged into the
    logged context so callers do not need to repeat it.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
