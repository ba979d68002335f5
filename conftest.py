# Ensure project root is on sys.path so 'notifybot' is importable when running pytest from
# environments that don't automatically include it.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def reset_error_aggregator():
    """Give every test a clean error aggregator so rate alerts don't leak between tests."""
    yield
    from notifybot.logging_config import error_aggregator

    error_aggregator.reset()
