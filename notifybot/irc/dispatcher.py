"""Line classification and handling for an active session."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import BOT_VERSION, NICK_COLLISION_SUFFIX, READY_NOTICE_TEMPLATE
from ..errors import ProtocolError, SessionClosedError
from ..logs.logger import logger
from .parser import (
    CMD_ERROR,
    CMD_PING,
    CMD_PRIVMSG,
    ERR_NICKNAMEINUSE,
    RPL_ISON,
    RawLine,
    is_version_query,
    parse_presence_reply,
    ping_token,
    sender_nick,
)

if TYPE_CHECKING:  # pragma: no cover
    from ..config import BotConfig
    from ..notify import PresenceAlerts
    from ..presence import PresenceTable
    from .poller import PresencePoller
    from .session import Session


class ProtocolDispatcher:
    """Routes each received line to its handler.

    Side effects are limited to writes on the session, presence table
    updates, notifications and the session's nick.
    """

    def __init__(
        self,
        config: BotConfig,
        table: PresenceTable,
        alerts: PresenceAlerts,
        poller: PresencePoller,
        *,
        version: str = BOT_VERSION,
    ) -> None:
        self.config = config
        self.table = table
        self.alerts = alerts
        self.poller = poller
        self.version = version

    async def handle(self, raw: str, session: Session) -> None:
        line = RawLine(raw)
        if line.command != CMD_PING:
            logger.log_event("irc", "raw", level=logging.DEBUG, nick=session.nick, raw=raw)

        if line.command == CMD_PING:
            await self._handle_ping(line, session)
        elif line.command == CMD_ERROR:
            self._handle_server_error(line, session)
        elif line.code == RPL_ISON:
            await self._handle_presence_reply(line, session)
        elif line.code == ERR_NICKNAMEINUSE:
            await self._handle_nick_collision(session)
        elif line.code == CMD_PRIVMSG:
            await self._handle_privmsg(line, session)

        # Checked on every line, independent of the branch above.
        if READY_NOTICE_TEMPLATE.format(nick=session.nick) in raw:
            await self._handle_ready(session)

    async def _handle_ping(self, line: RawLine, session: Session) -> None:
        token = ping_token(line)
        await session.send(f"PONG {token}" if token else "PONG")
        logger.log_event("irc", "pong", level=logging.DEBUG, nick=session.nick, token=token)

    def _handle_server_error(self, line: RawLine, session: Session) -> None:
        reason = line.raw.partition(" ")[2].removeprefix(":")
        logger.log_event(
            "irc", "server_error", level=logging.ERROR, nick=session.nick, reason=reason
        )
        raise SessionClosedError(f"Server closed link: {reason}", data={"raw": line.raw})

    async def _handle_presence_reply(self, line: RawLine, session: Session) -> None:
        try:
            online = parse_presence_reply(line)
        except ProtocolError as e:
            logger.log_event(
                "irc",
                "malformed_line",
                level=logging.WARNING,
                nick=session.nick,
                error=str(e),
                raw=line.raw,
            )
            return
        for change in self.table.apply(online):
            logger.log_event(
                "presence",
                "peer_online" if change.online else "peer_offline",
                nick=session.nick,
                peer=change.peer,
            )
            await self.alerts.announce(change)

    async def _handle_nick_collision(self, session: Session) -> None:
        taken = session.nick
        # No cap: every 433 appends another suffix.
        session.decorate_nick(NICK_COLLISION_SUFFIX)
        logger.log_event(
            "irc",
            "nick_in_use",
            level=logging.ERROR,
            nick=taken,
            new_nick=session.nick,
        )
        await session.identify()

    async def _handle_privmsg(self, line: RawLine, session: Session) -> None:
        if not is_version_query(line):
            return
        requester = sender_nick(line.command)
        await session.send(f"NOTICE {requester} :NotifyBot {self.version}")
        logger.log_event(
            "irc",
            "version_reply",
            nick=session.nick,
            requester=requester,
            version=self.version,
        )

    async def _handle_ready(self, session: Session) -> None:
        if not session.mark_ready():
            logger.log_event("irc", "ready_repeat", level=logging.DEBUG, nick=session.nick)
            return
        logger.log_event("irc", "ready", nick=session.nick, server=self.config.server)

        channels = self.config.channels
        if channels and channels[0]:
            for channel in channels:
                await session.send(f"JOIN {channel}")
                logger.log_event("irc", "join_sent", nick=session.nick, channel=channel)

        session.attach_poller(self.poller.start(session))
