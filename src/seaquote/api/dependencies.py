"""Service wiring shared by the API routes."""

from __future__ import annotations

from fastapi import Request

from seaquote.agents.idp.main import RequisitionIngestService
from seaquote.agents.rfq.drafter import RFQDrafter
from seaquote.agents.rfq.sender import RFQSender
from seaquote.core.config import AppSettings
from seaquote.core.protocols import IEmailSender, IModelProvider, IRequisitionStore
from seaquote.email_senders import create_email_sender
from seaquote.model_providers import create_model_provider
from seaquote.persistence import create_persistence


class Services:
    """Everything a request handler needs, built once per application."""

    def __init__(self, settings: AppSettings, store: IRequisitionStore,
                 ingest: RequisitionIngestService, drafter: RFQDrafter, sender: RFQSender) -> None:
        self.settings = settings
        self.store = store
        self.ingest = ingest
        self.drafter = drafter
        self.sender = sender


def build_services(settings: AppSettings, model: IModelProvider | None = None,
                   email: IEmailSender | None = None) -> Services:
    store, cache, file_store = create_persistence(settings)
    ingest = RequisitionIngestService(settings=settings, store=store, cache=cache, file_store=file_store)
    drafter = RFQDrafter(settings=settings, store=store, model=model or create_model_provider(settings))
    sender = RFQSender(settings=settings, store=store, email=email or create_email_sender(settings))
    return Services(settings=settings, store=store, ingest=ingest, drafter=drafter, sender=sender)


def get_services(request: Request) -> Services:
    return request.app.state.services
