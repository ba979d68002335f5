import pytest

from notifybot.config import BotConfig
from tests.fixtures.fakes import DispatchHarness, make_config


@pytest.fixture
def config() -> BotConfig:
    return make_config()


@pytest.fixture
def harness() -> DispatchHarness:
    return DispatchHarness()
