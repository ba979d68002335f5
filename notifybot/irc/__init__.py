"""IRC subsystem package.

Contains the line transport, line parsing, dispatcher, presence poller and
the reconnect supervisor that ties one session after another together.
"""

from .dispatcher import ProtocolDispatcher  # noqa: F401
from .parser import RawLine, parse_presence_reply, sender_nick  # noqa: F401
from .poller import PresencePoller  # noqa: F401
from .protocols import LineTransport, TransportFactory  # noqa: F401
from .session import Session  # noqa: F401
from .supervisor import ConnectionState, ReconnectSupervisor  # noqa: F401
from .transport import SessionTransport  # noqa: F401

__all__ = [
    "ConnectionState",
    "LineTransport",
    "PresencePoller",
    "ProtocolDispatcher",
    "RawLine",
    "ReconnectSupervisor",
    "Session",
    "SessionTransport",
    "TransportFactory",
    "parse_presence_reply",
    "sender_nick",
]
