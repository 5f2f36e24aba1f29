"""Endpoint Registry API - FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → status code, empty body
    - The store adapter lives on app.state; there is no module-level client
    - A store created here is closed on shutdown; an injected one is left open

Usage:
    uvicorn --factory endpoint_registry.main:create_app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from endpoint_registry.api.error_handlers import register_error_handlers
from endpoint_registry.api.routes import endpoints, health
from endpoint_registry.config import Settings, get_settings
from endpoint_registry.infrastructure.endpoint_store import EndpointStore
from endpoint_registry.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, store: EndpointStore | None = None,
) -> FastAPI:
    """Build the API around a store adapter (created from settings if not given)."""
    settings = settings or get_settings()
    owns_store = store is None
    endpoint_store = store or EndpointStore.from_url(settings.valkey_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(f"Endpoint registry started (store db {settings.valkey_db})")
        yield
        if owns_store:
            await endpoint_store.close()
        logger.info("Endpoint registry shutting down")

    app = FastAPI(title="Endpoint Registry", version="0.1.0", lifespan=lifespan)
    app.state.endpoint_store = endpoint_store

    app.include_router(health.router)
    app.include_router(endpoints.router)

    register_error_handlers(app)
    return app
