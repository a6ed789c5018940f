"""Redis Pub/Sub for real-time notifications.

Publishes each notification as JSON on the recipient's channel
(notifications:{recipient_id}) and lets a connection (SSE, WebSocket)
subscribe to one user's stream.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import redis.asyncio as redis

from scrumboard.core.config import Settings, get_settings
from scrumboard.domain.entities.notification import Notification
from scrumboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class _RedisNotificationBase:
    """Shared Redis connection and channel logic for notification pub/sub."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on startup."""
        if self._connected:
            return
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=(
                        self.settings.redis_password.get_secret_value()
                        if self.settings.redis_password
                        else None
                    ),
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis notifications connected")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis notifications connection failed: %s", e)
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis notifications disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None

    def channel_for(self, recipient_id: str) -> str:
        return f"{self.settings.notification_channel_prefix}:{recipient_id}"


class RedisNotificationPublisher(_RedisNotificationBase):
    """INotificationTrigger that publishes to the recipient's Redis channel."""

    async def publish(self, notification: Notification) -> bool:
        """Publish the notification.

        Returns:
            True if published, False if Redis is unavailable or publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, skipping notification publish")
            return False
        channel = self.channel_for(notification.recipient_id)
        try:
            await self.redis.publish(channel, json.dumps(notification.to_dict()))
            logger.debug(
                "Published notification to %s: %s", channel, notification.type.value
            )
        except Exception:
            logger.exception("Failed to publish notification")
            return False
        else:
            return True

    async def notify(self, notification: Notification) -> None:
        await self.publish(notification)


class RedisNotificationSubscriber(_RedisNotificationBase):
    """Subscribes to one user's notification channel.

    subscribe() uses a locally-scoped PubSub closed in finally, so several
    users can be followed concurrently.
    """

    async def subscribe(self, recipient_id: str) -> AsyncIterator[dict[str, Any]]:
        """Yield each notification payload published for the recipient."""
        if not self.is_available() or self.redis is None:
            logger.warning("Redis not available for subscription")
            return
        channel = self.channel_for(recipient_id)
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(channel)
            logger.info("Subscribed to %s", channel)
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield json.loads(message["data"])
                except (json.JSONDecodeError, TypeError):
                    logger.exception("Failed to parse notification message")
        finally:
            await pubsub.unsubscribe(channel)
            await pubsub.aclose()
            logger.info("Unsubscribed from %s", channel)
