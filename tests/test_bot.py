import asyncio

import pytest

from notifybot.bot import NotifyBot
from notifybot.errors import TransportError
from tests.fixtures.fakes import FakeTransport, RecordingNotifier, make_config


@pytest.mark.asyncio
async def test_presence_change_produces_email_end_to_end():
    transport = FakeTransport(
        [
            ":irc.example.net 001 notifybot :Welcome",
            "PING :irc.example.net",
            ":notifybot!u@h NOTICE notifybot :on",
            ":irc.example.net 303 notifybot :alice",
        ]
    )
    opened: list[tuple[str, int]] = []

    async def factory(host, port):
        opened.append((host, port))
        if len(opened) > 1:
            raise TransportError("refused")
        return transport

    notifier = RecordingNotifier()
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)
        bot.supervisor.stop()

    bot = NotifyBot(
        make_config(),
        notifier=notifier,
        transport_factory=factory,
        restart_delay=5,
        sleep=fake_sleep,
    )
    await asyncio.wait_for(bot.run(), timeout=2)

    assert opened == [("irc.example.net", 6667)]
    assert transport.sent[:4] == [
        "NICK notifybot",
        "USER notifybot 8 * :notifybot",
        "PONG :irc.example.net",
        "JOIN #lobby",
    ]
    assert "ISON alice bob" in transport.sent
    assert len(notifier.messages) == 1
    assert notifier.bodies[0].endswith("] alice is online")
    assert delays == [5]

    snapshot = bot.get_health_snapshot()
    assert snapshot["state"] == "STOPPED"
    assert snapshot["online"] == ["alice"]
    assert snapshot["notifications"] == {"delivered": 1, "failed": 0}
    assert snapshot["errors"] == {}


@pytest.mark.asyncio
async def test_presence_table_survives_reconnect():
    first = FakeTransport([":srv 303 notifybot :alice"])
    second = FakeTransport([":srv 303 notifybot :alice"])
    transports = [first, second]

    async def factory(host, port):
        return transports.pop(0)

    notifier = RecordingNotifier()
    restarts = 0

    async def fake_sleep(delay: float) -> None:
        nonlocal restarts
        restarts += 1
        if restarts == 2:
            bot.supervisor.stop()

    bot = NotifyBot(
        make_config(), notifier=notifier, transport_factory=factory, sleep=fake_sleep
    )
    await asyncio.wait_for(bot.run(), timeout=2)

    assert bot.supervisor.sessions_started == 2
    assert len(notifier.messages) == 1
