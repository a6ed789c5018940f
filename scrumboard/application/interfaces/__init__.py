"""Application ports (Protocols) implemented by infrastructure adapters."""

from scrumboard.application.interfaces.repositories import (
    IScrumNoteRepository,
    ITaskRepository,
    IUserRepository,
)
from scrumboard.application.interfaces.services import (
    IKanbanFeedback,
    INotificationTrigger,
    ITaskStatusGateway,
)

__all__ = [
    "IKanbanFeedback",
    "INotificationTrigger",
    "IScrumNoteRepository",
    "ITaskRepository",
    "ITaskStatusGateway",
    "IUserRepository",
]
