"""Outbound email transports selected by EmailConfig.provider."""

from __future__ import annotations

from seaquote.core.config import AppSettings
from seaquote.core.protocols import IEmailSender
from seaquote.email_senders.mock_sender import MockEmailSender
from seaquote.email_senders.ses_sender import SESEmailSender


def create_email_sender(settings: AppSettings | None = None) -> IEmailSender:
    """Build the configured email sender."""
    if settings is None:
        settings = AppSettings()
    if settings.email.provider == "ses":
        return SESEmailSender(region=settings.email.region, endpoint_url=settings.email.endpoint_url)
    return MockEmailSender()
