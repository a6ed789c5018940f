"""Infrastructure service implementations."""

from scrumboard.infrastructure.services.notification_trigger import (
    LogOnlyNotificationTrigger,
)

__all__ = ["LogOnlyNotificationTrigger"]
