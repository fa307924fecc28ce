"""Tests for RequisitionIngestService with in-memory backends."""

from __future__ import annotations

import pytest

from seaquote.agents.idp.main import RequisitionIngestService, fingerprint
from seaquote.core.config import AppSettings
from seaquote.core.exceptions import NoValidItemsError, UnsupportedFileTypeError
from seaquote.models.requisition import ParsedRequisition
from tests.fakes import MemoryCacheBackend, MemoryFileStore, MemoryRequisitionStore

CSV = b"Vessel,Port,Delivery Date,Description,Qty,Unit\nMV Star,Busan,2024-05-01,Soap,2,BOX\n,,,Brush,3,\n"


@pytest.fixture
def backends():
    return MemoryRequisitionStore(), MemoryCacheBackend(), MemoryFileStore()


@pytest.fixture
def service(backends):
    store, cache, files = backends
    return RequisitionIngestService(settings=AppSettings(), store=store, cache=cache, file_store=files)


class TestIngest:
    def test_stores_requisition_with_items(self, service, backends):
        store, _, _ = backends
        result = service.ingest(CSV, "req.csv", uploaded_by="chief.engineer")
        record = store.get_requisition(result.record.id)
        assert record.requisition.vessel_name == "MV Star"
        assert [i.line_number for i in record.items] == [1, 2]
        assert record.uploaded_by == "chief.engineer"
        assert record.fingerprint == fingerprint(CSV)

    def test_keeps_original_file(self, service, backends):
        _, _, files = backends
        result = service.ingest(CSV, "req.csv")
        path = result.record.source_path
        assert path.startswith("uploads/")
        assert path.endswith(f"{fingerprint(CSV)}.csv")
        assert files.read(path) == CSV

    def test_caches_parse_by_content_and_mode(self, service, backends):
        _, cache, _ = backends
        service.ingest(CSV, "req.csv")
        key = f"parsed:{fingerprint(CSV)}:lenient"
        assert cache.get(key) is not None
        assert cache.ttls[key] == 3600

    def test_cache_hit_skips_parsing(self, service, backends):
        _, cache, _ = backends
        first = service.parse(CSV, "req.csv")
        cached = first.model_copy(update={"warnings": []})
        cache.setex(f"parsed:{fingerprint(CSV)}:lenient", 60, cached.model_dump_json())
        assert service.parse(CSV, "req.csv").warnings == []

    def test_unreadable_cache_entry_is_replaced(self, service, backends):
        _, cache, _ = backends
        key = f"parsed:{fingerprint(CSV)}:lenient"
        cache.setex(key, 60, "{not json")
        parsed = service.parse(CSV, "req.csv")
        assert isinstance(parsed, ParsedRequisition)
        assert ParsedRequisition.model_validate_json(cache.get(key)) == parsed

    def test_returns_parse_warnings(self, service):
        data = b"Description,Qty\nRags,3\nMops,0\n"
        result = service.ingest(data, "req.csv")
        reasons = [w.reason for w in result.warnings]
        assert "non_positive_quantity" in reasons
        assert "defaulted_vessel_name" in reasons

    def test_same_file_twice_creates_two_requisitions(self, service, backends):
        store, _, files = backends
        a = service.ingest(CSV, "req.csv")
        b = service.ingest(CSV, "req.csv")
        assert a.record.id != b.record.id
        assert len(store.list_requisitions()) == 2
        assert len(files.list_files("uploads/")) == 1


class TestIngestFailures:
    def test_unsupported_type_rejected_before_storing(self, service, backends):
        _, _, files = backends
        with pytest.raises(UnsupportedFileTypeError):
            service.ingest(b"data", "req.pdf")
        assert files.list_files("") == []

    def test_no_items_leaves_store_empty(self, service, backends):
        store, _, _ = backends
        with pytest.raises(NoValidItemsError):
            service.ingest(b"Vessel,Port\nMV Star,Busan\n", "req.csv")
        assert store.list_requisitions() == []

    def test_strict_mode_per_call(self, service):
        from seaquote.core.exceptions import MissingColumnError

        with pytest.raises(MissingColumnError):
            service.ingest(b"Description,Qty\nRags,3\n", "req.csv", mode="strict")
