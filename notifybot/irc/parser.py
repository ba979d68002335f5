"""IRC line model and the few shape-specific parsers the bot needs."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ProtocolError

# Numerics and commands recognised by the dispatcher
RPL_ISON = "303"
ERR_NICKNAMEINUSE = "433"
CMD_PING = "PING"
CMD_PRIVMSG = "PRIVMSG"
CMD_ERROR = "ERROR"
CTCP_VERSION = "VERSION"


@dataclass
class RawLine:
    """One received line, split on single spaces.

    No quoting or escaping is honoured: ``"a  b"`` yields an empty middle
    field, exactly as the server sent it.
    """

    raw: str
    fields: list[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.fields = self.raw.split(" ")

    def at(self, index: int) -> str | None:
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return None

    @property
    def command(self) -> str:
        return self.fields[0]

    @property
    def code(self) -> str | None:
        """Second field: the numeric or command after the origin prefix."""
        return self.at(1)


def parse_presence_reply(line: RawLine) -> frozenset[str]:
    """Extract the online nick list from an ``RPL_ISON`` line.

    ``:server 303 me :alice bob`` -> ``{"alice", "bob"}``; ``:server 303 me :``
    means nobody is online.

    Raises:
        ProtocolError: If the line has no nick-list field.
    """
    if len(line.fields) < 4:
        raise ProtocolError(
            "ISON reply without a nick list", data={"raw": line.raw}
        )
    tokens = list(line.fields[3:])
    tokens[0] = tokens[0].removeprefix(":")
    return frozenset(t for t in tokens if t)


def sender_nick(prefix: str) -> str:
    """``:nick!user@host`` -> ``nick``."""
    return prefix.removeprefix(":").split("!", 1)[0]


def is_version_query(line: RawLine) -> bool:
    payload = line.at(3)
    return line.code == CMD_PRIVMSG and payload is not None and CTCP_VERSION in payload


def ping_token(line: RawLine) -> str | None:
    """Token to echo back in the PONG, or None for a bare ``PING``."""
    rest = line.fields[1:]
    return " ".join(rest) if rest else None
