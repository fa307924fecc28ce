"""Requisition header and line item models.

Every requisition spreadsheet, regardless of which ERP exported it, is parsed
into one Requisition plus an ordered list of RequisitionItem records.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from seaquote.core.exceptions import InvalidStatusTransitionError


class RequisitionStatus(StrEnum):
    DRAFT = "draft"
    RFQ_SENT = "rfq_sent"
    QUOTATIONS_RECEIVED = "quotations_received"
    COMPLETED = "completed"


_NEXT_STATUS: dict[RequisitionStatus, RequisitionStatus | None] = {
    RequisitionStatus.DRAFT: RequisitionStatus.RFQ_SENT,
    RequisitionStatus.RFQ_SENT: RequisitionStatus.QUOTATIONS_RECEIVED,
    RequisitionStatus.QUOTATIONS_RECEIVED: RequisitionStatus.COMPLETED,
    RequisitionStatus.COMPLETED: None,
}


def check_transition(current: RequisitionStatus, target: RequisitionStatus) -> None:
    """Raise InvalidStatusTransitionError unless target is current or its successor."""
    if target == current or _NEXT_STATUS[current] == target:
        return
    raise InvalidStatusTransitionError(current.value, target.value)


class Requisition(BaseModel):
    """Requisition header: one per uploaded file."""

    # --- Vessel ---
    vessel_name: str = Field(min_length=1)
    vessel_imo: str = ""

    # --- ERP reference fields (free text) ---
    requisition_number: str = ""
    requisition_title: str = ""
    requisition_date: str = ""
    requisition_group: str = ""

    # --- Delivery ---
    port_name: str = Field(min_length=1)
    delivery_date: str  # ISO YYYY-MM-DD
    currency: str = "USD"

    notes: str = ""
    status: RequisitionStatus = RequisitionStatus.DRAFT

    model_config = {"str_strip_whitespace": True}


class RequisitionItem(BaseModel):
    """Single requested product/quantity line."""

    line_number: int = Field(ge=1)
    item_number: str = ""
    item_name: str = Field(max_length=200)
    item_description: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str = ""
    department: str = ""
    specifications: str = ""
    notes: str = ""

    model_config = {"str_strip_whitespace": True}


class ParseWarning(BaseModel):
    """A row the parser skipped or a header field it defaulted."""

    row_index: Optional[int] = None  # 0-based position in the source rows
    row_number: Optional[int] = None  # 1-based sheet row, blank rows included
    reason: str
    detail: str = ""


class ParsedRequisition(BaseModel):
    """Parser output: header plus line items in emission order."""

    requisition: Requisition
    items: list[RequisitionItem] = Field(default_factory=list)
    warnings: list[ParseWarning] = Field(default_factory=list)


class RequisitionRecord(BaseModel):
    """A requisition as held by the store, with its identity and provenance."""

    id: str
    uploaded_at: datetime
    uploaded_by: str = "system"
    source_path: str = ""
    fingerprint: str = ""
    requisition: Requisition
    items: list[RequisitionItem] = Field(default_factory=list)

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedRequisition,
        *,
        requisition_id: str | None = None,
        uploaded_by: str = "system",
        source_path: str = "",
        fingerprint: str = "",
    ) -> RequisitionRecord:
        """Assign identity and upload time to a fresh parse result."""
        return cls(
            id=requisition_id or uuid.uuid4().hex,
            uploaded_at=datetime.now(timezone.utc),
            uploaded_by=uploaded_by,
            source_path=source_path,
            fingerprint=fingerprint,
            requisition=parsed.requisition,
            items=list(parsed.items),
        )


class IngestResult(BaseModel):
    """Outcome of one upload: the stored record and what the parser skipped."""

    record: RequisitionRecord
    warnings: list[ParseWarning] = Field(default_factory=list)
