"""Amazon SES notification transport."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import NotificationError

CHARSET = "UTF-8"


class SesNotifier:
    """Sends plain-text email through the SES ``SendEmail`` API."""

    def __init__(self, region: str | None = None, client: Any | None = None) -> None:
        self.region = region
        self.client = client if client is not None else boto3.client(
            "ses", region_name=region
        )

    def send(self, subject: str, body: str, sender: str, recipient: str) -> str:
        try:
            response = self.client.send_email(
                Source=sender,
                Destination={"ToAddresses": [recipient]},
                Message={
                    "Subject": {"Charset": CHARSET, "Data": subject},
                    "Body": {"Text": {"Charset": CHARSET, "Data": body}},
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise NotificationError(
                f"SES rejected message: {e}",
                data={"recipient": recipient, "region": self.region},
            ) from e
        return str(response.get("MessageId", ""))


class LogNotifier:
    """Stand-in used when no mail addresses are configured."""

    def __init__(self) -> None:
        self.sent = 0

    def send(self, subject: str, body: str, sender: str, recipient: str) -> str:
        self.sent += 1
        logging.info(f"📨 (email disabled) {subject}: {body}")
        return f"log-{self.sent}"
