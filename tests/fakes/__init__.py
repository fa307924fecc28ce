"""Shared test doubles — re-export memory backends, the mock model and mock mailer."""

from __future__ import annotations

from seaquote.email_senders.mock_sender import MockEmailSender
from seaquote.model_providers.mock_provider import MockModelProvider
from seaquote.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryRequisitionStore,
)

__all__ = [
    "MemoryCacheBackend",
    "MemoryFileStore",
    "MemoryRequisitionStore",
    "MockEmailSender",
    "MockModelProvider",
]
