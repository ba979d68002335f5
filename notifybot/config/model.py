from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_NOTIFY_TIMEZONE, DEFAULT_POLL_INTERVAL_SECONDS


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return value.split(",")
    return value


class BotConfig(BaseModel):
    """Static settings for one bot process.

    Attributes:
        server: IRC server host name.
        port: IRC server TCP port.
        bot_name: Base nickname; decorated on collision, reset per session.
        channels: Ordered channel list joined once the server says we're on.
        nicknames: Peer nicknames whose presence is tracked.
        notify_email: Recipient of presence notifications.
        from_email: Sender address for presence notifications.
        poll_interval: Seconds between ISON polls.
        aws_region: Region for the SES client; boto3 defaults apply when unset.
        notify_timezone: IANA zone used for notification timestamps.
    """

    model_config = ConfigDict(frozen=True)

    server: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    bot_name: str = Field(min_length=1)
    channels: tuple[str, ...] = ()
    nicknames: tuple[str, ...] = ()
    notify_email: str | None = None
    from_email: str | None = None
    poll_interval: float = Field(default=float(DEFAULT_POLL_INTERVAL_SECONDS), gt=0)
    aws_region: str | None = None
    notify_timezone: str = DEFAULT_NOTIFY_TIMEZONE

    @field_validator("server", "bot_name", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("bot_name")
    @classmethod
    def validate_bot_name(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("bot_name must not contain whitespace")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> tuple[str, ...]:
        """Strip entries but keep order and blanks.

        A blank first entry is the "no channels" marker, so it must survive.
        """
        v = _split_csv(v)
        if v is None:
            return ()
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        return tuple(str(c).strip() for c in v)

    @field_validator("nicknames", mode="before")
    @classmethod
    def validate_nicknames(cls, v: Any) -> tuple[str, ...]:
        """Strip, drop blanks and de-duplicate while preserving order."""
        v = _split_csv(v)
        if v is None:
            return ()
        if not isinstance(v, list | tuple):
            raise ValueError("nicknames must be a list")
        return tuple(dict.fromkeys(s for s in (str(n).strip() for n in v) if s))

    @field_validator("notify_email", "from_email", "aws_region", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @property
    def address(self) -> tuple[str, int]:
        return self.server, self.port

    @property
    def email_enabled(self) -> bool:
        return bool(self.notify_email and self.from_email)

    def summary(self) -> dict[str, Any]:
        """Non-sensitive view used for the startup log line."""
        return {
            "server": f"{self.server}:{self.port}",
            "bot_name": self.bot_name,
            "channels": [c for c in self.channels if c],
            "nicknames": list(self.nicknames),
            "poll_interval": self.poll_interval,
            "email": self.email_enabled,
        }
