"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (document event publisher, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from docshare.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup connects the Redis document event publisher when redis_enabled.
    Shutdown disconnects it and disposes the SQL engine.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.redis_enabled:
        from docshare.infrastructure.messaging.redis_pubsub import (
            RedisDocumentEventPublisher,
        )

        publisher = RedisDocumentEventPublisher()
        await publisher.connect()
        app.state.document_event_publisher = publisher
    else:
        app.state.document_event_publisher = None
        logger.info("Redis disabled; document events will not be published")

    yield

    # ---- Shutdown ----
    publisher = getattr(app.state, "document_event_publisher", None)
    if publisher is not None:
        await publisher.disconnect()
        app.state.document_event_publisher = None

    from docshare.infrastructure.persistence import database

    await database.dispose_engine()
