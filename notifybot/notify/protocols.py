from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    """Delivers one fully formed message. Blocking; called off the event loop."""

    def send(self, subject: str, body: str, sender: str, recipient: str) -> str:
        """Send the message and return a delivery id.

        Raises:
            NotificationError: If the transport rejects the message.
        """
        ...
