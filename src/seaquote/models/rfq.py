"""RFQ (request for quotation) draft models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class RFQStatus(StrEnum):
    DRAFT = "draft"
    SENT = "sent"


class RFQDraft(BaseModel):
    """Subject and body as returned by the text-generation model."""

    subject: str = Field(min_length=10, max_length=200)
    body: str = Field(min_length=50, max_length=5000)


class RFQRecord(BaseModel):
    """A stored RFQ email draft for one requisition."""

    id: str
    requisition_id: str
    subject: str
    body: str
    recipients: list[str] = Field(default_factory=list)
    status: RFQStatus = RFQStatus.DRAFT
    created_at: datetime
    model: str = ""
    updated_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    message_id: str = ""
