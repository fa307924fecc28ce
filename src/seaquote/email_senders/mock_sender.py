"""Mock email sender for local development and testing.

Keeps sent messages in memory. Nothing leaves the process.
"""

from __future__ import annotations

from seaquote.core.exceptions import EmailDeliveryError


class MockEmailSender:
    """IEmailSender implementation that records messages in an outbox."""

    def __init__(self, fail_with: str | None = None) -> None:
        self.outbox: list[dict] = []
        self._fail_with = fail_with

    def send(self, *, sender: str, recipients: list[str], subject: str, body: str) -> str:
        if self._fail_with:
            raise EmailDeliveryError(self._fail_with)
        message_id = f"mock-{len(self.outbox) + 1}"
        self.outbox.append({
            "message_id": message_id,
            "sender": sender,
            "recipients": list(recipients),
            "subject": subject,
            "body": body,
        })
        return message_id
