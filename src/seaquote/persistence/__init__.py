"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from seaquote.core.config import AppSettings
from seaquote.core.protocols import ICacheBackend, IFileStore, IRequisitionStore
from seaquote.persistence.dynamodb_backend import DynamoDBRequisitionStore
from seaquote.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryRequisitionStore,
)
from seaquote.persistence.redis_backend import RedisCacheBackend
from seaquote.persistence.s3_backend import S3FileStore


def create_persistence(
    settings: AppSettings | None = None,
) -> tuple[IRequisitionStore, ICacheBackend, IFileStore]:
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (requisition_store, cache, file_store).
    """
    if settings is None:
        settings = AppSettings()

    if settings.persistence_backend == "memory":
        return MemoryRequisitionStore(), MemoryCacheBackend(), MemoryFileStore()

    cache = RedisCacheBackend(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
        key_prefix=settings.redis.key_prefix,
    )

    store = DynamoDBRequisitionStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
    )

    file_store = S3FileStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )

    return store, cache, file_store
