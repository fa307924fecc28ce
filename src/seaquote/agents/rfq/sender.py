"""RFQSender — delivers a stored RFQ draft and advances the requisition.

Sending marks the RFQ ``sent`` with its recipients and transport message id,
and moves a ``draft`` requisition to ``rfq_sent``. A requisition already past
``draft`` keeps its status, so re-sending to more suppliers is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import EmailStr, TypeAdapter, ValidationError

from seaquote.agents.base import BaseAgent
from seaquote.core.config import AppSettings
from seaquote.core.exceptions import InvalidRecipientsError
from seaquote.core.protocols import IEmailSender, IRequisitionStore
from seaquote.models.requisition import RequisitionStatus
from seaquote.models.rfq import RFQRecord, RFQStatus

logger = logging.getLogger(__name__)

_RECIPIENTS = TypeAdapter(list[EmailStr])


def validate_recipients(recipients: list[str]) -> list[str]:
    """Normalized addresses, or InvalidRecipientsError."""
    if not recipients:
        raise InvalidRecipientsError("At least one recipient is required")
    try:
        addresses = _RECIPIENTS.validate_python(recipients)
    except ValidationError as exc:
        bad = [str(err["input"]) for err in exc.errors()]
        raise InvalidRecipientsError(f"Invalid recipient address: {', '.join(bad)}") from exc
    # Keep first occurrence order, drop repeats
    return list(dict.fromkeys(addresses))


class RFQSender(BaseAgent):
    """Sends RFQ drafts through the configured email transport."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: IRequisitionStore,
        email: IEmailSender,
    ) -> None:
        super().__init__(settings=settings, store=store)
        self._email = email

    @property
    def sender_address(self) -> str:
        return self._settings.email.sender or self._settings.company.email

    def send(self, requisition_id: str, rfq_id: str, recipients: list[str]) -> RFQRecord:
        """Email an RFQ to suppliers.

        Raises:
            InvalidRecipientsError: empty or malformed recipient list.
            RFQNotFoundError: unknown RFQ.
            EmailDeliveryError: the transport refused the message; nothing is
                updated in the store.
        """
        addresses = validate_recipients(recipients)
        rfq = self._store.get_rfq(requisition_id, rfq_id)
        record = self._store.get_requisition(requisition_id)

        message_id = self._email.send(
            sender=self.sender_address, recipients=addresses, subject=rfq.subject, body=rfq.body,
        )
        sent = rfq.model_copy(update={
            "status": RFQStatus.SENT,
            "recipients": addresses,
            "sent_at": datetime.now(timezone.utc),
            "message_id": message_id,
        })
        self._store.save_rfq(sent)

        if record.requisition.status == RequisitionStatus.DRAFT:
            self._store.update_status(requisition_id, RequisitionStatus.RFQ_SENT)

        logger.info(
            "Sent RFQ %s to %d recipient(s)", rfq_id, len(addresses),
            extra={"requisition_id": requisition_id, "rfq_id": rfq_id},
        )
        return sent
