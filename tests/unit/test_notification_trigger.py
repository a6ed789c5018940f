"""LogOnlyNotificationTrigger tests."""

import logging

from scrumboard.domain.entities.notification import Notification
from scrumboard.domain.enums import NotificationType
from scrumboard.infrastructure.services.notification_trigger import (
    LogOnlyNotificationTrigger,
)


async def test_logs_instead_of_delivering(caplog) -> None:
    notification = Notification.create(
        NotificationType.TASK_STATUS_UPDATED, "admin-1", "Bob a déplacé une tâche"
    )
    with caplog.at_level(logging.DEBUG):
        await LogOnlyNotificationTrigger().notify(notification)

    assert "TASK_STATUS_UPDATED to admin-1" in caplog.text
    assert "Bob a déplacé une tâche" in caplog.text
