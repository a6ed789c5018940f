"""Messaging adapters (Redis pub/sub)."""

from scrumboard.infrastructure.messaging.redis_notifications import (
    RedisNotificationPublisher,
    RedisNotificationSubscriber,
)

__all__ = ["RedisNotificationPublisher", "RedisNotificationSubscriber"]
