"""Tests for the email senders, SES through moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from seaquote.core.config import AppSettings, EmailConfig
from seaquote.core.exceptions import EmailDeliveryError
from seaquote.email_senders import create_email_sender
from seaquote.email_senders.mock_sender import MockEmailSender
from seaquote.email_senders.ses_sender import SESEmailSender

REGION = "us-east-1"
SENDER = "purchasing@oceanicshipping.com"


@pytest.fixture
def ses():
    with mock_aws():
        client = boto3.client("ses", region_name=REGION)
        client.verify_email_identity(EmailAddress=SENDER)
        yield client


class TestSESEmailSender:
    def test_send_returns_message_id(self, ses):
        sender = SESEmailSender(region=REGION)
        message_id = sender.send(
            sender=SENDER,
            recipients=["sales@harbourchandlers.com"],
            subject="RFQ - MV Star - Busan",
            body="Dear Supplier,\n\nPlease quote.",
        )
        assert message_id
        assert ses.get_send_quota()["SentLast24Hours"] == 1

    def test_unverified_sender_is_delivery_error(self, ses):
        sender = SESEmailSender(region=REGION)
        with pytest.raises(EmailDeliveryError, match="nobody@elsewhere.com"):
            sender.send(
                sender="nobody@elsewhere.com",
                recipients=["sales@harbourchandlers.com"],
                subject="RFQ",
                body="Please quote.",
            )


class TestMockEmailSender:
    def test_numbers_messages(self):
        sender = MockEmailSender()
        first = sender.send(sender=SENDER, recipients=["a@b.com"], subject="s", body="b")
        second = sender.send(sender=SENDER, recipients=["c@d.com"], subject="s", body="b")
        assert (first, second) == ("mock-1", "mock-2")
        assert [m["recipients"] for m in sender.outbox] == [["a@b.com"], ["c@d.com"]]

    def test_configured_failure(self):
        sender = MockEmailSender(fail_with="relay down")
        with pytest.raises(EmailDeliveryError):
            sender.send(sender=SENDER, recipients=["a@b.com"], subject="s", body="b")
        assert sender.outbox == []


class TestFactory:
    def test_defaults_to_mock(self):
        assert isinstance(create_email_sender(AppSettings()), MockEmailSender)

    def test_ses(self):
        with mock_aws():
            sender = create_email_sender(AppSettings(email=EmailConfig(provider="ses")))
        assert isinstance(sender, SESEmailSender)
