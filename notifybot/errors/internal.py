"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the session supervisor and
the dispatcher. Raw socket / boto errors are wrapped at the boundary where they
occur; callers above that boundary only ever see these classes.

Classes:
  InternalError        – Base for all internal errors.
  TransportError       – Connect/read/write failure or end of stream (session-fatal).
  SessionClosedError   – Server announced the link is closing (ERROR line).
  ProtocolError        – Malformed protocol line; the line is skipped.
  ConfigurationError   – Invalid or missing startup settings (process-fatal).
  NotificationError    – Notification delivery failed; logged and dropped.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class TransportError(InternalError):
    """Exception raised for socket level failures.

    Fatal to the current session only; the supervisor reconnects.
    """


class SessionClosedError(TransportError):
    """Exception raised when the server sends an ERROR line and drops the link."""


class ProtocolError(InternalError):
    """Exception raised for a line whose shape does not match its command.

    The offending line is skipped and no state is mutated.
    """


class ConfigurationError(InternalError):
    """Exception raised when startup settings are missing or invalid."""


class NotificationError(InternalError):
    """Exception raised when the notification transport rejects a message."""


__all__ = [
    "InternalError",
    "TransportError",
    "SessionClosedError",
    "ProtocolError",
    "ConfigurationError",
    "NotificationError",
]
