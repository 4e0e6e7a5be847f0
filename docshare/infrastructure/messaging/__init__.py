"""Messaging adapters (Redis pub/sub)."""

from docshare.infrastructure.messaging.redis_pubsub import RedisDocumentEventPublisher

__all__ = ["RedisDocumentEventPublisher"]
