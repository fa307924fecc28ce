"""Amazon SES email sender for outbound RFQs."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from seaquote.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class SESEmailSender:
    """Production IEmailSender backed by the SES SendEmail API."""

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("ses", **kwargs)

    def send(self, *, sender: str, recipients: list[str], subject: str, body: str) -> str:
        try:
            resp = self._client.send_email(
                Source=sender,
                Destination={"ToAddresses": list(recipients)},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": body, "Charset": "UTF-8"}},
                },
            )
        except (ClientError, BotoCoreError) as exc:
            raise EmailDeliveryError(f"SES send from {sender} failed: {exc}") from exc
        message_id = resp["MessageId"]
        logger.info("SES accepted message %s for %d recipient(s)", message_id, len(recipients))
        return message_id
