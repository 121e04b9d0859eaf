"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (shared HTTP
client, subscription service client, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.subscription import SubscriptionServiceClient
from app.shared.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: shared HTTP client, subscription service client. Shutdown: HTTP
    client close, telemetry shutdown (telemetry itself is set up in
    app.main.create_app, before the app starts).
    The subscription client is built once here and handed to routes through
    app.api.v1.dependencies.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for the remote subscription service (connection reuse).
    app.state.subscription_http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            settings.soap_timeout_seconds,
            connect=settings.soap_connect_timeout_seconds,
        )
    )
    app.state.subscription_client = SubscriptionServiceClient.from_settings(
        app.state.subscription_http_client, settings
    )
    logger.info("Subscription service client ready: %s", settings.soap_service_url)
    if not settings.soap_validate_literals_configured:
        logger.warning(
            "No approved literals configured for %s; every authorization check will be denied. "
            "Set SOAP_VALIDATE_APPROVED_LITERALS.",
            settings.soap_validate_operation,
        )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "subscription_http_client", None) is not None:
        await app.state.subscription_http_client.aclose()
        app.state.subscription_http_client = None
        app.state.subscription_client = None
        logger.info("Subscription HTTP client closed")

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
