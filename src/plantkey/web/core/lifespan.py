"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from plantkey.system.structlog_configurator import configure_structlog
from plantkey.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and load reference data before serving requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    # Fail at startup rather than on the first request when data files are missing
    store = container.taxonomy_store()
    logger.info("Serving %d species for tier '%s'", len(store), config.user_tier.value)

    yield

    logger.info("Shutting down PlantKey API")
