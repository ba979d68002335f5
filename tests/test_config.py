import logging

import pytest

from notifybot.config import ConfigLoader, parse_duration, resolve_poll_interval
from notifybot.errors import ConfigurationError

BASE_ENV = {
    "SERVER": "irc.example.net",
    "PORT": "6667",
    "BOT_NAME": "notifybot",
    "CHANNELS": "#lobby,#dev",
    "NICKNAMES": "alice,bob",
    "NOTIFY_EMAIL": "to@example.com",
    "FROM_EMAIL": "from@example.com",
    "SLEEP_MIN": "2m",
}


def load(**overrides):
    env = {**BASE_ENV, **overrides}
    return ConfigLoader({k: v for k, v in env.items() if v is not None}).get_configuration()


@pytest.mark.parametrize(
    ("text", "seconds"),
    [
        ("5m", 300.0),
        ("90s", 90.0),
        ("1h30m", 5400.0),
        ("1.5h", 5400.0),
        ("300ms", 0.3),
        ("-2m", -120.0),
        ("0", 0.0),
    ],
)
def test_parse_duration_valid(text, seconds):
    assert parse_duration(text) == pytest.approx(seconds)


@pytest.mark.parametrize("text", ["", "5", "5x", "m", "-", "5m junk", "1h 30m"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_poll_interval_defaults_when_missing(caplog):
    caplog.set_level(logging.ERROR)
    assert resolve_poll_interval(None) == 300.0
    assert any("SLEEP_MIN" in r.message for r in caplog.records)


@pytest.mark.parametrize("raw", ["abc", "5", "0s", "-1m", "   "])
def test_poll_interval_defaults_on_bad_value(raw):
    assert resolve_poll_interval(raw) == 300.0


def test_poll_interval_parsed():
    assert resolve_poll_interval("2m") == 120.0


def test_loader_builds_config():
    config = load()

    assert config.address == ("irc.example.net", 6667)
    assert config.channels == ("#lobby", "#dev")
    assert config.nicknames == ("alice", "bob")
    assert config.poll_interval == 120.0
    assert config.email_enabled
    assert config.notify_timezone == "America/Chicago"


def test_loader_reports_missing_required_settings():
    with pytest.raises(ConfigurationError) as exc:
        load(SERVER=None, BOT_NAME="  ")
    assert exc.value.data["missing"] == ["SERVER", "BOT_NAME"]


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"PORT": "abc"}, "port"),
        ({"PORT": "70000"}, "port"),
        ({"BOT_NAME": "notify bot"}, "bot_name"),
    ],
)
def test_loader_rejects_invalid_values(overrides, field):
    with pytest.raises(ConfigurationError) as exc:
        load(**overrides)
    assert field in exc.value.data["fields"]


def test_blank_first_channel_is_kept():
    config = load(CHANNELS=",#dev")
    assert config.channels == ("", "#dev")


def test_nicknames_are_cleaned_and_deduplicated():
    config = load(NICKNAMES=" alice, bob,,alice , ")
    assert config.nicknames == ("alice", "bob")


def test_missing_optional_settings_warn(caplog):
    caplog.set_level(logging.WARNING)
    config = load(NICKNAMES=None, NOTIFY_EMAIL="", FROM_EMAIL=None, CHANNELS=None)

    assert config.nicknames == ()
    assert config.channels == ()
    assert config.notify_email is None
    assert not config.email_enabled
    messages = " ".join(r.message for r in caplog.records)
    assert "NICKNAMES is empty" in messages
    assert "notifications will only be logged" in messages


def test_summary_omits_addresses():
    summary = load(CHANNELS=",#dev").summary()

    assert summary["server"] == "irc.example.net:6667"
    assert summary["channels"] == ["#dev"]
    assert summary["email"] is True
    assert "to@example.com" not in str(summary)
