"""Requisition upload and lookup, plus RFQ drafting, editing and sending endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, UploadFile, status
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from seaquote.agents.idp.requisition_parser import ParseMode
from seaquote.api.dependencies import Services, get_services
from seaquote.core.exceptions import (
    EmailDeliveryError,
    EmptyRequisitionError,
    InvalidRecipientsError,
    RequisitionNotFoundError,
    RequisitionParseError,
    RFQGenerationError,
    RFQNotEditableError,
    RFQNotFoundError,
    UnsupportedFileTypeError,
)
from seaquote.models.requisition import IngestResult, RequisitionRecord
from seaquote.models.rfq import RFQRecord

logger = logging.getLogger(__name__)

router = APIRouter(tags=["requisitions"])


class GenerateRFQRequest(BaseModel):
    custom_terms: Optional[str] = None


class SendRFQRequest(BaseModel):
    recipients: list[str] = Field(default_factory=list)


class EditRFQRequest(BaseModel):
    instruction: str = Field(min_length=1)


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=IngestResult)
async def upload_requisition(
    file: Optional[UploadFile] = File(None),
    mode: Optional[ParseMode] = None,
    user: Optional[str] = Header(None),
    services: Services = Depends(get_services),
) -> IngestResult:
    """Parse an uploaded requisition spreadsheet and store it."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    data = await file.read()
    try:
        return await run_in_threadpool(
            services.ingest.ingest, data, file.filename, uploaded_by=user or "system", mode=mode,
        )
    except UnsupportedFileTypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RequisitionParseError as exc:
        logger.info("Upload of %s rejected: %s", file.filename, exc, extra={"filename": file.filename})
        raise HTTPException(status_code=400, detail=f"Failed to parse file: {exc}") from exc


@router.get("", response_model=list[RequisitionRecord])
def list_requisitions(services: Services = Depends(get_services)) -> list[RequisitionRecord]:
    return services.store.list_requisitions()


@router.get("/{requisition_id}", response_model=RequisitionRecord)
def get_requisition(requisition_id: str, services: Services = Depends(get_services)) -> RequisitionRecord:
    try:
        return services.store.get_requisition(requisition_id)
    except RequisitionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Requisition not found") from exc


@router.post("/{requisition_id}/rfq", status_code=status.HTTP_201_CREATED, response_model=RFQRecord)
def generate_rfq(
    requisition_id: str,
    body: GenerateRFQRequest | None = None,
    services: Services = Depends(get_services),
) -> RFQRecord:
    """Draft an RFQ email for a stored requisition."""
    custom_terms = body.custom_terms if body else None
    try:
        return services.drafter.draft(requisition_id, custom_terms=custom_terms)
    except RequisitionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Requisition not found") from exc
    except EmptyRequisitionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RFQGenerationError as exc:
        logger.error("RFQ generation failed for %s: %s", requisition_id, exc,
                     extra={"requisition_id": requisition_id})
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/{requisition_id}/rfqs", response_model=list[RFQRecord])
def list_rfqs(requisition_id: str, services: Services = Depends(get_services)) -> list[RFQRecord]:
    try:
        services.store.get_requisition(requisition_id)
    except RequisitionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Requisition not found") from exc
    return services.store.list_rfqs(requisition_id)


@router.post("/{requisition_id}/rfqs/{rfq_id}/edit", response_model=RFQRecord)
def edit_rfq(
    requisition_id: str,
    rfq_id: str,
    body: EditRFQRequest,
    services: Services = Depends(get_services),
) -> RFQRecord:
    """Rewrite a draft RFQ according to an instruction."""
    try:
        return services.drafter.edit(requisition_id, rfq_id, body.instruction)
    except RFQNotFoundError as exc:
        raise HTTPException(status_code=404, detail="RFQ not found") from exc
    except RFQNotEditableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except RFQGenerationError as exc:
        logger.error("RFQ edit failed for %s: %s", rfq_id, exc,
                     extra={"requisition_id": requisition_id, "rfq_id": rfq_id})
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/{requisition_id}/rfqs/{rfq_id}/send", response_model=RFQRecord)
def send_rfq(
    requisition_id: str,
    rfq_id: str,
    body: SendRFQRequest,
    services: Services = Depends(get_services),
) -> RFQRecord:
    """Email an RFQ to suppliers and mark the requisition as sent."""
    try:
        return services.sender.send(requisition_id, rfq_id, body.recipients)
    except InvalidRecipientsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RFQNotFoundError as exc:
        raise HTTPException(status_code=404, detail="RFQ not found") from exc
    except EmailDeliveryError as exc:
        logger.error("RFQ %s could not be sent: %s", rfq_id, exc,
                     extra={"requisition_id": requisition_id, "rfq_id": rfq_id})
        raise HTTPException(status_code=502, detail=f"Failed to send email: {exc}") from exc
