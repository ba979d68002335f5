import asyncio
import signal
from unittest.mock import patch

import pytest

from notifybot.signal_handler import SignalHandler


@pytest.mark.asyncio
async def test_first_signal_starts_shutdown_once():
    calls: list[int] = []

    async def on_shutdown() -> None:
        calls.append(1)

    handler = SignalHandler(on_shutdown)
    handler.trigger(signal.SIGTERM)
    handler.trigger(signal.SIGINT)
    await handler._task

    assert handler.shutdown_initiated is True
    assert calls == [1]


@pytest.mark.asyncio
async def test_handlers_registered_on_running_loop():
    async def on_shutdown() -> None:
        return None

    handler = SignalHandler(on_shutdown)
    loop = asyncio.get_running_loop()
    with patch.object(loop, "add_signal_handler") as add:
        handler.setup_signal_handlers()

    registered = {c.args[0] for c in add.call_args_list}
    assert registered == {signal.SIGINT, signal.SIGTERM}
    assert all(c.args[1] == handler.trigger for c in add.call_args_list)
