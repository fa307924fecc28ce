"""Requisition ingest — upload payload to stored requisition.

Flow per upload:
  1. Reject unsupported file types before touching the payload
  2. Fingerprint the bytes (SHA-256) and keep the original in the file store
  3. Parse, reusing a cached parse of identical bytes when available
  4. Persist the header, then its items
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from seaquote.agents.base import BaseAgent
from seaquote.agents.idp.file_parser import ensure_supported
from seaquote.agents.idp.requisition_parser import ParseMode, RequisitionParser
from seaquote.core.config import AppSettings
from seaquote.core.protocols import ICacheBackend, IFileStore, IRequisitionStore
from seaquote.models.requisition import IngestResult, ParsedRequisition
from seaquote.persistence.s3_backend import content_type_for

logger = logging.getLogger(__name__)


def fingerprint(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class RequisitionIngestService(BaseAgent):
    """Parses uploaded requisition spreadsheets and stores the result."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: IRequisitionStore,
        cache: ICacheBackend,
        file_store: IFileStore,
    ) -> None:
        super().__init__(settings=settings, store=store)
        self._cache = cache
        self._files = file_store

    def upload_path(self, digest: str, extension: str, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        return f"{self._settings.s3.upload_prefix}/{now:%Y}/{now:%m}/{digest}{extension}"

    def _cache_key(self, digest: str, mode: ParseMode) -> str:
        return f"parsed:{digest}:{mode.value}"

    def _cached_parse(self, key: str) -> ParsedRequisition | None:
        cached = self._cache.get(key)
        if cached is None:
            return None
        try:
            return ParsedRequisition.model_validate_json(cached)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry %s", key)
            self._cache.delete(key)
            return None

    def parse(self, data: bytes, filename: str, mode: ParseMode | str | None = None) -> ParsedRequisition:
        """Parse a payload without storing anything; cached by content and mode."""
        ensure_supported(filename)
        parser = RequisitionParser(self._settings.parser, mode=mode)
        key = self._cache_key(fingerprint(data), parser.mode)

        parsed = self._cached_parse(key)
        if parsed is not None:
            logger.debug("Parse cache hit for %s", filename, extra={"filename": filename})
            return parsed

        parsed = parser.parse_file(data, filename)
        self._cache.setex(key, self._settings.parser.cache_ttl_seconds, parsed.model_dump_json())
        return parsed

    def ingest(
        self,
        data: bytes,
        filename: str,
        *,
        uploaded_by: str = "system",
        mode: ParseMode | str | None = None,
    ) -> IngestResult:
        """Store the file, parse it and persist the requisition.

        Raises:
            RequisitionParseError: the file is not a usable requisition; the
                requisition store is left untouched.
        """
        extension = ensure_supported(filename)
        digest = fingerprint(data)
        path = self.upload_path(digest, extension)
        if not self._files.exists(path):
            self._files.write(path, data, content_type=content_type_for(extension))

        parsed = self.parse(data, filename, mode=mode)
        record = self._store.create_requisition(
            parsed, uploaded_by=uploaded_by, source_path=path, fingerprint=digest,
        )
        logger.info(
            "Ingested %s as requisition %s (%d items)", filename, record.id, len(record.items),
            extra={"requisition_id": record.id, "fingerprint": digest, "user": uploaded_by},
        )
        return IngestResult(record=record, warnings=parsed.warnings)
