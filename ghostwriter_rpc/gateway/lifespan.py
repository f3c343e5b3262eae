"""
Gateway Lifespan - application startup and shutdown.

The RPC facade is created with the app; shutdown closes its HTTP client so
pooled connections to the Remote Content API are released.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..catalog import OPERATIONS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup/shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        Control back to FastAPI after startup is complete.
    """
    settings = app.state.settings
    logger.info(
        "Starting %s: %d operations -> %s",
        settings.service_name,
        len(OPERATIONS),
        settings.api_url,
    )

    yield

    await app.state.rpc.close()
    logger.info("%s shutdown complete", settings.service_name)
