"""Protocol interfaces for all SeaQuote abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from seaquote.models.requisition import (
        ParsedRequisition,
        RequisitionRecord,
        RequisitionStatus,
    )
    from seaquote.models.rfq import RFQRecord

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Model Provider
# ---------------------------------------------------------------------------

@runtime_checkable
class IModelProvider(Protocol):
    """Abstraction over text-generation providers (mock, Bedrock)."""

    @property
    def model_name(self) -> str: ...

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str: ...

    def structured_output(
        self, messages: list[dict[str, str]], response_model: type[T], **kwargs: Any
    ) -> T: ...


# ---------------------------------------------------------------------------
# Persistence: Requisition Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IRequisitionStore(Protocol):
    """Requisition header, line items and RFQ drafts."""

    def create_requisition(
        self,
        parsed: ParsedRequisition,
        *,
        uploaded_by: str = "system",
        source_path: str = "",
        fingerprint: str = "",
    ) -> RequisitionRecord: ...

    def get_requisition(self, requisition_id: str) -> RequisitionRecord: ...

    def list_requisitions(self) -> list[RequisitionRecord]: ...

    def update_status(self, requisition_id: str, status: RequisitionStatus) -> RequisitionRecord: ...

    def save_rfq(self, rfq: RFQRecord) -> RFQRecord: ...

    def get_rfq(self, requisition_id: str, rfq_id: str) -> RFQRecord: ...

    def list_rfqs(self, requisition_id: str) -> list[RFQRecord]: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def exists(self, path: str) -> bool: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def move(self, src: str, dst: str) -> None: ...

    def list_files(self, prefix: str) -> list[str]: ...


# ---------------------------------------------------------------------------
# Outbound email
# ---------------------------------------------------------------------------

@runtime_checkable
class IEmailSender(Protocol):
    """Delivers an RFQ email; returns the transport message id."""

    def send(self, *, sender: str, recipients: list[str], subject: str, body: str) -> str: ...
