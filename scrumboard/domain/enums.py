"""Domain enumerations for the scrum board.

Enums represent fixed sets of domain values: task status (Kanban column),
user role, notification type, and the task actions the authorization
policy rules over.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation)."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status; each value is one Kanban column."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def label(self) -> str:
        """Column label shown to users."""
        return _TASK_STATUS_LABELS[self]


_TASK_STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "À faire",
    TaskStatus.IN_PROGRESS: "En cours",
    TaskStatus.DONE: "Terminé",
}


class UserRole(_ValuesMixin, str, Enum):
    """User role; the sole input to authorization decisions."""

    ADMIN = "ADMIN"
    INTERN = "INTERN"


class NotificationType(_ValuesMixin, str, Enum):
    """Kinds of notification produced after a successful mutation.

    TASK_ASSIGNED goes to the new assignee, TASK_STATUS_UPDATED to the task's
    creator when an intern moves a card, SCRUM_NOTE_CREATED to every admin.
    """

    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_STATUS_UPDATED = "TASK_STATUS_UPDATED"
    SCRUM_NOTE_CREATED = "SCRUM_NOTE_CREATED"

    @property
    def default_title(self) -> str:
        """Default notification title for this type."""
        return _NOTIFICATION_TITLES[self]


_NOTIFICATION_TITLES: dict[NotificationType, str] = {
    NotificationType.TASK_ASSIGNED: "Nouvelle tâche assignée",
    NotificationType.TASK_STATUS_UPDATED: "Statut de tâche modifié",
    NotificationType.SCRUM_NOTE_CREATED: "Nouvelle note de scrum",
}


class TaskAction(_ValuesMixin, str, Enum):
    """Task operations gated by the authorization policy."""

    CREATE = "create"
    ASSIGN = "assign"
    UPDATE_STATUS = "update_status"
    UPDATE = "update"
    DELETE = "delete"
    COMMENT = "comment"
