"""Integration tests for the AWS backends against LocalStack."""

from __future__ import annotations

import pytest

from seaquote.agents.idp.main import RequisitionIngestService
from seaquote.core.config import AppSettings
from seaquote.models.requisition import RequisitionStatus
from seaquote.persistence.dynamodb_backend import DynamoDBRequisitionStore
from seaquote.persistence.memory_backend import MemoryCacheBackend
from seaquote.persistence.s3_backend import S3FileStore
from tests.integration.conftest import BUCKET, LOCALSTACK_URL, skip_no_localstack

CSV = (
    b"Vessel,Port,Delivery Date,Item Code,Description,Qty,Unit\n"
    b"MV Integration,Rotterdam,2024-06-01,A-1,Hawser,2,PCS\n"
    b",,,,Shackle,8,\n"
)


@skip_no_localstack
class TestAWSIntegration:
    @pytest.fixture
    def store(self, provisioned):
        return DynamoDBRequisitionStore(
            table_suffix=provisioned,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    @pytest.fixture
    def files(self, provisioned):
        return S3FileStore(bucket=BUCKET, region="us-east-1", endpoint_url=LOCALSTACK_URL)

    @pytest.fixture
    def service(self, store, files):
        return RequisitionIngestService(
            settings=AppSettings(), store=store, cache=MemoryCacheBackend(), file_store=files,
        )

    def test_ingest_round_trip(self, service, store, files):
        result = service.ingest(CSV, "integration.csv", uploaded_by="inttest")
        record = store.get_requisition(result.record.id)
        assert record.requisition.vessel_name == "MV Integration"
        assert [i.item_description for i in record.items] == ["Hawser", "Shackle"]
        assert record.items[1].item_number == "A-1"
        assert files.read(record.source_path) == CSV

    def test_status_update_persists(self, service, store):
        record = service.ingest(CSV, "integration.csv").record
        store.update_status(record.id, RequisitionStatus.RFQ_SENT)
        assert store.get_requisition(record.id).requisition.status == RequisitionStatus.RFQ_SENT
