"""Application lifespan: shared provider HTTP client, Firestore, tracing.

Provider clients themselves are built per request on top of the shared
connection pool (see api.v1.dependencies.domain).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from custom_domains.core.config import get_settings
from custom_domains.infrastructure.firebase import close_firebase, init_firebase
from custom_domains.shared.telemetry import (
    get_logger,
    setup_logging,
    setup_tracing,
    shutdown_tracing,
)

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: logging, tracing, provider HTTP pool, Firestore. Shutdown in reverse."""
    settings = get_settings()
    setup_logging()

    app.state.tracer_provider = (
        setup_tracing(app, settings) if settings.telemetry_enabled else None
    )

    # One pool for both providers; every request still carries its own timeout.
    app.state.provider_http_client = httpx.AsyncClient(
        timeout=settings.provider_timeout_seconds
    )

    if not init_firebase():
        logger.warning("Domain store unavailable; domain endpoints will return 503")

    try:
        yield
    finally:
        await close_firebase()
        await app.state.provider_http_client.aclose()
        app.state.provider_http_client = None
        shutdown_tracing(app.state.tracer_provider)
        app.state.tracer_provider = None
        logger.info("Shutdown complete")
