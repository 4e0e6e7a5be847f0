"""Redis Pub/Sub for document lifecycle events.

Publishes document_created / document_updated / document_deleted
notifications as JSON on one channel. Subscribers (indexers, caches,
notification workers) listen on Settings.document_events_channel.
"""

from __future__ import annotations

import json
import logging

import redis.asyncio as redis

from docshare.application.dtos.document import DocumentEvent
from docshare.core.config import get_settings

logger = logging.getLogger(__name__)


class _RedisPubSubBase:
    """Shared Redis connection handling for pub/sub."""

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        if self.redis is None:
            password = self.settings.redis_password
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=password.get_secret_value() if password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis pub/sub connected")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis pub/sub connection failed: %s", e)
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis pub/sub disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None


class RedisDocumentEventPublisher(_RedisPubSubBase):
    """Publishes DocumentEvent payloads (implements IDocumentEventPublisher)."""

    @property
    def channel(self) -> str:
        return self.settings.document_events_channel

    async def publish(self, event: DocumentEvent) -> bool:
        """Publish event to the document events channel.

        Returns:
            True if published, False if Redis is unavailable or the publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, skipping publish")
            return False
        try:
            await self.redis.publish(self.channel, json.dumps(event.to_dict()))
            logger.debug(
                "Published %s for %s to %s",
                event.event_type.value,
                event.document_id,
                self.channel,
            )
        except redis.RedisError:
            logger.exception("Failed to publish document event")
            return False
        else:
            return True
