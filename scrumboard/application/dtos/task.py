"""DTOs for task use cases (no dependency on transport)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskCreate:
    """Input for TaskService.create_task."""

    title: str
    description: str
    creator_id: str
    deadline: datetime | None = None


@dataclass(frozen=True)
class TaskUpdate:
    """Input for TaskService.update_task. None leaves a field unchanged."""

    title: str | None = None
    description: str | None = None
    deadline: datetime | None = None
