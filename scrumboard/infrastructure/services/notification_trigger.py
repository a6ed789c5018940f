"""Log-only notification trigger."""

from __future__ import annotations

import logging

from scrumboard.domain.entities.notification import Notification
from scrumboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogOnlyNotificationTrigger:
    """INotificationTrigger implementation that logs instead of delivering.

    Use when Redis is not configured. Production can swap in
    RedisNotificationPublisher or a push-based implementation.
    """

    async def notify(self, notification: Notification) -> None:
        """Log the notification; nothing is delivered."""
        logger.info(
            "Notify: would send %s to %s (title=%r)",
            notification.type.value,
            notification.recipient_id,
            notification.title,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Notify message: %s (redirect=%s, at %s)",
                notification.message,
                notification.redirect_url,
                notification.created_at.isoformat(),
            )
