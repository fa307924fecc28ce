"""RFQDrafter — turns a stored requisition into an RFQ email draft."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone

from seaquote.agents.base import BaseAgent
from seaquote.core.config import AppSettings
from seaquote.core.exceptions import (
    EmptyRequisitionError,
    ModelResponseError,
    RFQGenerationError,
    RFQNotEditableError,
)
from seaquote.core.protocols import IModelProvider, IRequisitionStore
from seaquote.models.requisition import RequisitionRecord
from seaquote.models.rfq import RFQDraft, RFQRecord, RFQStatus

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional maritime purchasing assistant. "
    "Write formal Request for Quotation (RFQ) emails to ship chandlers and suppliers."
)

EDIT_PROMPT = (
    "Apply the instruction to the RFQ email below. Keep the professional maritime tone "
    "and the existing structure unless the instruction asks otherwise. Do not add pricing, "
    "discounts or totals, and do not drop details, unless explicitly asked."
)


def _item_lines(record: RequisitionRecord) -> list[str]:
    lines: list[str] = []
    for item in record.items:
        qty = f"{item.quantity:g} {item.unit}".strip()
        lines.append(f"{item.line_number}. {item.item_name}")
        if item.item_number:
            lines.append(f"   Item No: {item.item_number}")
        lines.append(f"   Quantity: {qty}")
        if item.item_description != item.item_name:
            lines.append(f"   Description: {item.item_description}")
        if item.specifications:
            lines.append(f"   Specifications: {item.specifications}")
    return lines


class RFQDrafter(BaseAgent):
    """Drafts RFQ emails through the configured text-generation model."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: IRequisitionStore,
        model: IModelProvider,
        sleep=time.sleep,
    ) -> None:
        super().__init__(settings=settings, store=store)
        self._model = model
        self._sleep = sleep

    def build_messages(self, record: RequisitionRecord, custom_terms: str | None = None) -> list[dict[str, str]]:
        """System + user messages describing the requisition."""
        req = record.requisition
        company = self._settings.company
        parts = [
            "Generate an RFQ email for the following requisition.",
            "",
            "## VESSEL DETAILS",
            f"- Vessel Name: {req.vessel_name}",
        ]
        if req.vessel_imo:
            parts.append(f"- IMO: {req.vessel_imo}")
        if req.requisition_number:
            parts.append(f"- Requisition No: {req.requisition_number}")
        parts += [
            f"- Port: {req.port_name}",
            f"- Delivery Date: {req.delivery_date}",
            f"- Currency: {req.currency}",
            "",
            "## ITEMS REQUIRED",
            *_item_lines(record),
            "",
            "## COMPANY DETAILS",
            f"- Company: {company.name}",
            f"- Email: {company.email}",
            f"- Phone: {company.phone}",
        ]
        if custom_terms:
            parts += ["", "## ADDITIONAL TERMS", custom_terms]
        parts += ["", 'Return only JSON with "subject" and "body" keys.']
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "\n".join(parts)},
        ]

    def build_edit_messages(self, rfq: RFQRecord, instruction: str) -> list[dict[str, str]]:
        """System + user messages asking for a revised subject and body."""
        parts = [
            EDIT_PROMPT,
            "",
            "## CURRENT RFQ",
            f"Subject: {rfq.subject}",
            "",
            rfq.body,
            "",
            "## EDIT INSTRUCTION",
            instruction,
            "",
            'Return only JSON with "subject" and "body" keys.',
        ]
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "\n".join(parts)},
        ]

    def _request_draft(self, messages: list[dict[str, str]], requisition_id: str) -> RFQDraft:
        """Call the model until it returns a valid draft or retries run out."""
        attempts = max(1, self._settings.llm.max_retries)
        last_error: ModelResponseError | None = None
        for attempt in range(1, attempts + 1):
            try:
                return self._model.structured_output(messages, RFQDraft)
            except ModelResponseError as exc:
                last_error = exc
                logger.warning(
                    "RFQ draft attempt %d/%d failed for %s: %s", attempt, attempts, requisition_id, exc,
                    extra={"requisition_id": requisition_id, "attempt": attempt},
                )
                if attempt < attempts:
                    self._sleep(self._settings.llm.retry_backoff_seconds * attempt)

        raise RFQGenerationError(
            f"Failed to draft RFQ for requisition {requisition_id} after {attempts} attempts"
        ) from last_error

    def generate(self, record: RequisitionRecord, custom_terms: str | None = None) -> RFQDraft:
        if not record.items:
            raise EmptyRequisitionError()
        return self._request_draft(self.build_messages(record, custom_terms), record.id)

    def draft(self, requisition_id: str, custom_terms: str | None = None) -> RFQRecord:
        """Draft and store an RFQ for a stored requisition.

        Raises:
            RequisitionNotFoundError: unknown requisition id.
            EmptyRequisitionError: the requisition has no items.
            RFQGenerationError: the model never produced a valid draft.
        """
        record = self._store.get_requisition(requisition_id)
        draft = self.generate(record, custom_terms)
        rfq = RFQRecord(
            id=uuid.uuid4().hex,
            requisition_id=record.id,
            subject=draft.subject,
            body=draft.body,
            created_at=datetime.now(timezone.utc),
            model=self._model.model_name,
        )
        saved = self._store.save_rfq(rfq)
        logger.info(
            "Drafted RFQ %s for requisition %s", saved.id, record.id,
            extra={"requisition_id": record.id, "rfq_id": saved.id},
        )
        return saved

    def edit(self, requisition_id: str, rfq_id: str, instruction: str) -> RFQRecord:
        """Rewrite a stored draft according to a free-text instruction.

        Raises:
            RFQNotFoundError: unknown RFQ.
            RFQNotEditableError: the RFQ has already been sent.
            RFQGenerationError: the model never produced a valid draft.
        """
        rfq = self._store.get_rfq(requisition_id, rfq_id)
        if rfq.status != RFQStatus.DRAFT:
            raise RFQNotEditableError(f"RFQ {rfq_id} is {rfq.status.value}; only drafts can be edited")

        draft = self._request_draft(self.build_edit_messages(rfq, instruction), requisition_id)
        edited = rfq.model_copy(update={
            "subject": draft.subject,
            "body": draft.body,
            "updated_at": datetime.now(timezone.utc),
            "model": self._model.model_name,
        })
        saved = self._store.save_rfq(edited)
        logger.info(
            "Edited RFQ %s for requisition %s", rfq_id, requisition_id,
            extra={"requisition_id": requisition_id, "rfq_id": rfq_id},
        )
        return saved
