"""Redis notification publisher/subscriber tests with a mocked client."""

import json
from unittest.mock import AsyncMock, MagicMock

from scrumboard.core.config import Settings
from scrumboard.domain.entities.notification import Notification
from scrumboard.domain.enums import NotificationType
from scrumboard.infrastructure.messaging.redis_notifications import (
    RedisNotificationPublisher,
    RedisNotificationSubscriber,
)


def _notification() -> Notification:
    return Notification.create(
        NotificationType.TASK_ASSIGNED,
        "u1",
        'Alice vous a assigné la tâche "Fix bug"',
    )


class TestPublisher:
    async def test_publishes_on_recipient_channel(self) -> None:
        client = AsyncMock()
        publisher = RedisNotificationPublisher(client, Settings())
        notification = _notification()

        assert await publisher.publish(notification) is True

        channel, payload = client.publish.call_args[0]
        assert channel == "notifications:u1"
        body = json.loads(payload)
        assert body["id"] == notification.id
        assert body["type"] == "TASK_ASSIGNED"
        assert body["recipient_id"] == "u1"

    async def test_custom_prefix(self) -> None:
        publisher = RedisNotificationPublisher(
            AsyncMock(), Settings(notification_channel_prefix="board")
        )
        assert publisher.channel_for("u2") == "board:u2"

    async def test_unavailable_returns_false(self) -> None:
        publisher = RedisNotificationPublisher(settings=Settings())
        assert publisher.is_available() is False
        assert await publisher.publish(_notification()) is False

    async def test_publish_error_returns_false(self) -> None:
        client = AsyncMock()
        client.publish = AsyncMock(side_effect=ConnectionError("gone"))
        publisher = RedisNotificationPublisher(client, Settings())
        assert await publisher.publish(_notification()) is False

    async def test_notify_publishes(self) -> None:
        client = AsyncMock()
        publisher = RedisNotificationPublisher(client, Settings())
        await publisher.notify(_notification())
        client.publish.assert_awaited_once()

    async def test_disconnect(self) -> None:
        client = AsyncMock()
        publisher = RedisNotificationPublisher(client, Settings())
        await publisher.disconnect()
        client.aclose.assert_awaited_once()
        assert publisher.is_available() is False


class TestSubscriber:
    async def test_yields_messages_for_user(self) -> None:
        async def listen():
            yield {"type": "subscribe", "data": 1}
            yield {"type": "message", "data": json.dumps({"id": "n1"})}
            yield {"type": "message", "data": "not json"}
            yield {"type": "message", "data": json.dumps({"id": "n2"})}

        pubsub = MagicMock()
        pubsub.subscribe = AsyncMock()
        pubsub.unsubscribe = AsyncMock()
        pubsub.aclose = AsyncMock()
        pubsub.listen = listen
        client = MagicMock()
        client.pubsub.return_value = pubsub

        subscriber = RedisNotificationSubscriber(client, Settings())
        received = [payload async for payload in subscriber.subscribe("u1")]

        assert received == [{"id": "n1"}, {"id": "n2"}]
        pubsub.subscribe.assert_awaited_once_with("notifications:u1")
        pubsub.unsubscribe.assert_awaited_once_with("notifications:u1")
        pubsub.aclose.assert_awaited_once()

    async def test_unavailable_yields_nothing(self) -> None:
        subscriber = RedisNotificationSubscriber(settings=Settings())
        assert [p async for p in subscriber.subscribe("u1")] == []
