"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from seaquote.api.dependencies import Services, build_services
from seaquote.api.routes import health, requisitions
from seaquote.core.config import AppSettings
from seaquote.core.logging_config import setup_logging


def create_app(services: Services | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        services: Pre-built services (tests); built from AppSettings otherwise.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        wired = services or build_services(AppSettings())
        setup_logging(wired.settings.log_level, json_logs=wired.settings.environment == "prod")
        app.state.settings = wired.settings
        app.state.services = wired
        yield

    app = FastAPI(
        title="SeaQuote Maritime Purchasing Assistant",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(requisitions.router, prefix="/requisitions")
    return app
