"""Builds the notifications sent after task and scrum note mutations.

Messages are in French, matching the board's UI.
"""

from collections.abc import Iterable
from datetime import datetime

from scrumboard.domain.entities.notification import (
    MESSAGE_MAX_LENGTH,
    RETENTION_DAYS,
    Notification,
    NotificationMetadata,
)
from scrumboard.domain.enums import NotificationType, TaskStatus

_WEEKDAYS_FR = (
    "lundi",
    "mardi",
    "mercredi",
    "jeudi",
    "vendredi",
    "samedi",
    "dimanche",
)

_MONTHS_FR = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)


def format_french_day(value: datetime) -> str:
    """Format as e.g. 'lundi 3 mars' without depending on the process locale."""
    return f"{_WEEKDAYS_FR[value.weekday()]} {value.day} {_MONTHS_FR[value.month - 1]}"


class NotificationFactory:
    """Creates the three notification kinds with their messages and metadata.

    Also owns the retention window, so expiry checks use the configured value.
    """

    def __init__(
        self,
        max_message_length: int = MESSAGE_MAX_LENGTH,
        retention_days: int = RETENTION_DAYS,
    ) -> None:
        self.max_message_length = max_message_length
        self.retention_days = retention_days

    def is_expired(
        self, notification: Notification, now: datetime | None = None
    ) -> bool:
        return notification.is_expired(self.retention_days, now)

    def active(
        self, notifications: Iterable[Notification], now: datetime | None = None
    ) -> list[Notification]:
        """Notifications still inside the retention window, in input order."""
        return [n for n in notifications if not self.is_expired(n, now)]

    def task_assigned(
        self,
        recipient_id: str,
        task_id: str,
        task_title: str,
        assigner_name: str,
        assigner_id: str,
    ) -> Notification:
        return Notification.create(
            type=NotificationType.TASK_ASSIGNED,
            recipient_id=recipient_id,
            message=f'{assigner_name} vous a assigné la tâche "{task_title}"',
            metadata=NotificationMetadata(
                task_id=task_id,
                task_title=task_title,
                actor_id=assigner_id,
                actor_name=assigner_name,
            ),
            max_message_length=self.max_message_length,
        )

    def task_status_updated(
        self,
        recipient_id: str,
        task_id: str,
        task_title: str,
        old_status: TaskStatus,
        new_status: TaskStatus,
        modifier_name: str,
        modifier_id: str,
    ) -> Notification:
        old_status = TaskStatus(old_status)
        new_status = TaskStatus(new_status)
        return Notification.create(
            type=NotificationType.TASK_STATUS_UPDATED,
            recipient_id=recipient_id,
            message=(
                f'{modifier_name} a modifié le statut de "{task_title}" '
                f'de "{old_status.label}" à "{new_status.label}"'
            ),
            metadata=NotificationMetadata(
                task_id=task_id,
                task_title=task_title,
                old_status=old_status.value,
                new_status=new_status.value,
                actor_id=modifier_id,
                actor_name=modifier_name,
            ),
            max_message_length=self.max_message_length,
        )

    def scrum_note_created(
        self,
        recipient_id: str,
        scrum_note_id: str,
        creator_name: str,
        creator_id: str,
        note_date: datetime,
    ) -> Notification:
        return Notification.create(
            type=NotificationType.SCRUM_NOTE_CREATED,
            recipient_id=recipient_id,
            message=(
                f"{creator_name} a créé sa note de scrum du "
                f"{format_french_day(note_date)}"
            ),
            metadata=NotificationMetadata(
                scrum_note_id=scrum_note_id,
                actor_id=creator_id,
                actor_name=creator_name,
            ),
            max_message_length=self.max_message_length,
        )
