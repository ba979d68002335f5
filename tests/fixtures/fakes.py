"""Test doubles shared across the suite."""

import asyncio
from collections.abc import Iterable

from notifybot.config import BotConfig
from notifybot.errors import NotificationError, TransportError
from notifybot.irc import PresencePoller, ProtocolDispatcher, Session
from notifybot.notify import PresenceAlerts
from notifybot.presence import PresenceTable


class FakeTransport:
    """In-memory line transport: scripted incoming lines, recorded outgoing ones."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.incoming: list[str] = list(lines)
        self.sent: list[str] = []
        self.close_calls = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send_line(self, line: str) -> None:
        if self._closed:
            raise TransportError("Send on closed connection")
        self.sent.append(line)

    async def read_line(self) -> str:
        await asyncio.sleep(0)
        if self._closed or not self.incoming:
            raise TransportError("Connection closed by server")
        return self.incoming.pop(0)

    async def close(self) -> None:
        self.close_calls += 1
        self._closed = True


class RecordingNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.messages: list[tuple[str, str, str, str]] = []

    def send(self, subject: str, body: str, sender: str, recipient: str) -> str:
        if self.fail:
            raise NotificationError("mail relay down")
        self.messages.append((subject, body, sender, recipient))
        return f"msg-{len(self.messages)}"

    @property
    def bodies(self) -> list[str]:
        return [body for _, body, _, _ in self.messages]


def make_config(**overrides) -> BotConfig:
    data = {
        "server": "irc.example.net",
        "port": 6667,
        "bot_name": "notifybot",
        "channels": ["#lobby"],
        "nicknames": ["alice", "bob"],
        "notify_email": "to@example.com",
        "from_email": "from@example.com",
        "poll_interval": 300,
        "notify_timezone": "UTC",
    }
    data.update(overrides)
    return BotConfig.model_validate(data)


class DispatchHarness:
    """Dispatcher wired to a fake session, table and notifier."""

    def __init__(self, **config_overrides) -> None:
        self.config = make_config(**config_overrides)
        self.table = PresenceTable(self.config.nicknames)
        self.notifier = RecordingNotifier()
        self.alerts = PresenceAlerts(
            self.notifier,
            sender=self.config.from_email,
            recipient=self.config.notify_email,
            timezone="UTC",
        )
        self.poller = PresencePoller(self.config.nicknames, self.config.poll_interval)
        self.dispatcher = ProtocolDispatcher(
            self.config, self.table, self.alerts, self.poller
        )
        self.transport = FakeTransport()
        self.session = Session(
            transport=self.transport, nick=self.config.bot_name, session_id=1
        )

    @property
    def sent(self) -> list[str]:
        return self.transport.sent

    async def feed(self, *lines: str) -> None:
        for line in lines:
            await self.dispatcher.handle(line, self.session)
