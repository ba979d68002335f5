"""Presence tracking for the configured peer set."""

from .table import PresenceChange, PresenceTable

__all__ = ["PresenceChange", "PresenceTable"]
