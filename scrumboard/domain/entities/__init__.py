"""Domain entities and aggregates.

Pure domain models; no persistence or transport concerns.
"""

from scrumboard.domain.entities.notification import Notification, NotificationMetadata
from scrumboard.domain.entities.scrum_note import ScrumNote, ScrumNoteAggregate
from scrumboard.domain.entities.task import Task, TaskAggregate, can_transition
from scrumboard.domain.entities.user import User

__all__ = [
    "Notification",
    "NotificationMetadata",
    "ScrumNote",
    "ScrumNoteAggregate",
    "Task",
    "TaskAggregate",
    "User",
    "can_transition",
]
