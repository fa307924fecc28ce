"""DynamoDB backend implementing IRequisitionStore.

Single-table layout, one partition per requisition:

    PK = REQ#{id}   SK = HEADER          header + upload provenance
    PK = REQ#{id}   SK = ITEM#{line:05d} one line item
    PK = REQ#{id}   SK = RFQ#{rfq_id}    one RFQ draft
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from seaquote.core.exceptions import RequisitionNotFoundError, RFQNotFoundError, StorageError
from seaquote.models.requisition import (
    ParsedRequisition,
    Requisition,
    RequisitionItem,
    RequisitionRecord,
    RequisitionStatus,
    check_transition,
)
from seaquote.models.rfq import RFQRecord

logger = logging.getLogger(__name__)

TABLE_BASE = "seaquote-requisitions"
HEADER_SK = "HEADER"


def _to_dynamodb(obj: Any) -> Any:
    """Convert floats to Decimal; DynamoDB rejects binary floats."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_dynamodb(i) for i in obj]
    return obj


def _decode_decimals(obj: Any) -> Any:
    """Convert Decimal values in a DynamoDB item back to int/float."""
    if isinstance(obj, Decimal):
        return int(obj) if obj == int(obj) else float(obj)
    if isinstance(obj, dict):
        return {k: _decode_decimals(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_decode_decimals(i) for i in obj]
    return obj


def _pk(requisition_id: str) -> str:
    return f"REQ#{requisition_id}"


def _item_sk(line_number: int) -> str:
    return f"ITEM#{line_number:05d}"


class DynamoDBRequisitionStore:
    """Production IRequisitionStore backed by DynamoDB."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    @property
    def table_name(self) -> str:
        return f"{TABLE_BASE}{self._table_suffix}"

    def _table(self):
        return self._ddb.Table(self.table_name)

    def _query_partition(self, requisition_id: str) -> list[dict[str, Any]]:
        """All rows of one requisition partition, in SK order."""
        tbl = self._table()
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {"KeyConditionExpression": Key("PK").eq(_pk(requisition_id))}
        try:
            while True:
                resp = tbl.query(**kwargs)
                items.extend(_decode_decimals(i) for i in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StorageError(f"DynamoDB query failed for requisition {requisition_id!r}: {exc}") from exc

    @staticmethod
    def _record_from_rows(header: dict[str, Any], item_rows: list[dict[str, Any]]) -> RequisitionRecord:
        return RequisitionRecord(
            id=header["id"],
            uploaded_at=datetime.fromisoformat(header["uploaded_at"]),
            uploaded_by=header.get("uploaded_by", "system"),
            source_path=header.get("source_path", ""),
            fingerprint=header.get("fingerprint", ""),
            requisition=Requisition.model_validate(header["requisition"]),
            items=[RequisitionItem.model_validate(row["item"]) for row in item_rows],
        )

    # ---- IRequisitionStore methods ----

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
        pk = _pk(record.id)
        header = {
            "PK": pk,
            "SK": HEADER_SK,
            "id": record.id,
            "uploaded_at": record.uploaded_at.isoformat(),
            "uploaded_by": record.uploaded_by,
            "source_path": record.source_path,
            "fingerprint": record.fingerprint,
            "requisition": record.requisition.model_dump(mode="json"),
        }
        tbl = self._table()
        try:
            tbl.put_item(Item=_to_dynamodb(header))
        except ClientError as exc:
            raise StorageError(f"DynamoDB write failed for requisition {record.id!r}: {exc}") from exc

        # Items reference the header, so they go in after it
        try:
            with tbl.batch_writer() as batch:
                for item in record.items:
                    batch.put_item(Item=_to_dynamodb({
                        "PK": pk,
                        "SK": _item_sk(item.line_number),
                        "requisition_id": record.id,
                        "item": item.model_dump(mode="json"),
                    }))
        except ClientError as exc:
            self._discard_partition(record.id)
            raise StorageError(f"DynamoDB item write failed for requisition {record.id!r}: {exc}") from exc
        return record

    def _discard_partition(self, requisition_id: str) -> None:
        """Delete every row of a half-written requisition."""
        try:
            rows = self._query_partition(requisition_id)
            with self._table().batch_writer() as batch:
                for row in rows:
                    batch.delete_item(Key={"PK": row["PK"], "SK": row["SK"]})
        except (ClientError, StorageError):
            logger.exception(
                "Could not remove partial requisition %s", requisition_id,
                extra={"requisition_id": requisition_id},
            )

    def get_requisition(self, requisition_id: str) -> RequisitionRecord:
        rows = self._query_partition(requisition_id)
        header = next((r for r in rows if r["SK"] == HEADER_SK), None)
        if header is None:
            raise RequisitionNotFoundError(f"No requisition with id={requisition_id!r}")
        item_rows = [r for r in rows if r["SK"].startswith("ITEM#")]
        return self._record_from_rows(header, item_rows)

    def list_requisitions(self) -> list[RequisitionRecord]:
        tbl = self._table()
        headers: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {"FilterExpression": Attr("SK").eq(HEADER_SK)}
        try:
            while True:
                resp = tbl.scan(**kwargs)
                headers.extend(_decode_decimals(i) for i in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StorageError(f"DynamoDB scan failed on {self.table_name!r}: {exc}") from exc
        records = [self._record_from_rows(h, []) for h in headers]
        return sorted(records, key=lambda r: r.uploaded_at, reverse=True)

    def update_status(self, requisition_id: str, status: RequisitionStatus) -> RequisitionRecord:
        record = self.get_requisition(requisition_id)
        check_transition(record.requisition.status, status)
        try:
            self._table().update_item(
                Key={"PK": _pk(requisition_id), "SK": HEADER_SK},
                UpdateExpression="SET #req.#status = :status",
                ExpressionAttributeNames={"#req": "requisition", "#status": "status"},
                ExpressionAttributeValues={":status": status.value},
            )
        except ClientError as exc:
            raise StorageError(f"DynamoDB status update failed for {requisition_id!r}: {exc}") from exc
        record.requisition.status = status
        return record

    def save_rfq(self, rfq: RFQRecord) -> RFQRecord:
        # Raises RequisitionNotFoundError for unknown requisitions; an existing
        # RFQ with the same id is replaced
        self.get_requisition(rfq.requisition_id)
        try:
            self._table().put_item(Item=_to_dynamodb({
                "PK": _pk(rfq.requisition_id),
                "SK": f"RFQ#{rfq.id}",
                "rfq": rfq.model_dump(mode="json"),
            }))
        except ClientError as exc:
            raise StorageError(f"DynamoDB write failed for RFQ {rfq.id!r}: {exc}") from exc
        return rfq

    def get_rfq(self, requisition_id: str, rfq_id: str) -> RFQRecord:
        try:
            resp = self._table().get_item(Key={"PK": _pk(requisition_id), "SK": f"RFQ#{rfq_id}"})
        except ClientError as exc:
            raise StorageError(f"DynamoDB read failed for RFQ {rfq_id!r}: {exc}") from exc
        if "Item" not in resp:
            raise RFQNotFoundError(f"No RFQ {rfq_id!r} for requisition {requisition_id!r}")
        return RFQRecord.model_validate(_decode_decimals(resp["Item"])["rfq"])

    def list_rfqs(self, requisition_id: str) -> list[RFQRecord]:
        rows = self._query_partition(requisition_id)
        rfqs = [RFQRecord.model_validate(r["rfq"]) for r in rows if r["SK"].startswith("RFQ#")]
        return sorted(rfqs, key=lambda r: r.created_at)
