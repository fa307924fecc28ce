"""In-memory backends for unit tests and local runs — dict-backed fakes."""

from __future__ import annotations

from seaquote.core.exceptions import RequisitionNotFoundError, RFQNotFoundError
from seaquote.models.requisition import (
    ParsedRequisition,
    RequisitionRecord,
    RequisitionStatus,
    check_transition,
)
from seaquote.models.rfq import RFQRecord


class MemoryRequisitionStore:
    """Dict-backed IRequisitionStore."""

    def __init__(self) -> None:
        self._records: dict[str, RequisitionRecord] = {}
        self._rfqs: dict[str, dict[str, RFQRecord]] = {}

    def create_requisition(
        self,
        parsed: ParsedRequisition,
        *,
        uploaded_by: str = "system",
        source_path: str = "",
        fingerprint: str = "",
    ) -> RequisitionRecord:
        record = RequisitionRecord.from_parsed(
            parsed, uploaded_by=uploaded_by, source_path=source_path, fingerprint=fingerprint,
        )
        self._records[record.id] = record
        return record.model_copy(deep=True)

    def get_requisition(self, requisition_id: str) -> RequisitionRecord:
        if requisition_id not in self._records:
            raise RequisitionNotFoundError(f"No requisition with id={requisition_id!r}")
        return self._records[requisition_id].model_copy(deep=True)

    def list_requisitions(self) -> list[RequisitionRecord]:
        records = sorted(self._records.values(), key=lambda r: r.uploaded_at, reverse=True)
        return [r.model_copy(update={"items": []}, deep=True) for r in records]

    def update_status(self, requisition_id: str, status: RequisitionStatus) -> RequisitionRecord:
        record = self.get_requisition(requisition_id)
        check_transition(record.requisition.status, status)
        record.requisition.status = status
        self._records[requisition_id] = record
        return record.model_copy(deep=True)

    def save_rfq(self, rfq: RFQRecord) -> RFQRecord:
        self.get_requisition(rfq.requisition_id)
        self._rfqs.setdefault(rfq.requisition_id, {})[rfq.id] = rfq.model_copy(deep=True)
        return rfq

    def get_rfq(self, requisition_id: str, rfq_id: str) -> RFQRecord:
        rfq = self._rfqs.get(requisition_id, {}).get(rfq_id)
        if rfq is None:
            raise RFQNotFoundError(f"No RFQ {rfq_id!r} for requisition {requisition_id!r}")
        return rfq.model_copy(deep=True)

    def list_rfqs(self, requisition_id: str) -> list[RFQRecord]:
        rfqs = self._rfqs.get(requisition_id, {}).values()
        return [r.model_copy(deep=True) for r in sorted(rfqs, key=lambda r: r.created_at)]


class MemoryCacheBackend:
    """Dict-backed ICacheBackend; TTLs are recorded but never expire."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self.ttls.pop(key, None)


class MemoryFileStore:
    """Dict-backed IFileStore."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def read(self, path: str) -> bytes:
        return self._files[path]

    def exists(self, path: str) -> bool:
        return path in self._files

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        return path

    def move(self, src: str, dst: str) -> None:
        self._files[dst] = self._files.pop(src)

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
