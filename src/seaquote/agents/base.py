"""Base agent with common dependency wiring and lifecycle patterns."""

from __future__ import annotations

from typing import Any

from seaquote.core.config import AppSettings
from seaquote.core.protocols import IRequisitionStore


class BaseAgent:
    """Common base for SeaQuote agents.

    Settings and the requisition store are injected at construction time;
    subclasses take whatever extra collaborators they need as keywords.
    """

    def __init__(self, *, settings: AppSettings, store: IRequisitionStore) -> None:
        self._settings = settings
        self._store = store

    async def health_check(self) -> dict[str, Any]:
        """Return agent health status."""
        return {
            "agent": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
        }
