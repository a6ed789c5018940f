"""Repository interfaces (ports) for the application layer.

Protocols define contracts that persistence adapters must fulfill (DIP).
They speak in domain values only; storage is outside this package.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from scrumboard.domain.enums import TaskStatus, UserRole

if TYPE_CHECKING:
    from scrumboard.domain.entities.scrum_note import ScrumNote
    from scrumboard.domain.entities.task import Task
    from scrumboard.domain.entities.user import User


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task storage (DIP). save() inserts or replaces by id."""

    async def get_by_id(self, task_id: str) -> Task | None:
        """Return task by ID."""

    async def list_all(self) -> list[Task]:
        """Return all tasks (newest first)."""

    async def list_by_status(self, status: TaskStatus) -> list[Task]:
        """Return tasks in one Kanban column."""

    async def list_by_assignee(self, assignee_id: str) -> list[Task]:
        """Return tasks assigned to a user."""

    async def save(self, task: Task) -> Task:
        """Persist the task and return the stored value."""

    async def delete(self, task_id: str) -> None:
        """Delete task by ID."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for read access to users (DIP)."""

    async def get_by_id(self, user_id: str) -> User | None:
        """Return user by ID."""

    async def list_by_role(self, role: UserRole) -> list[User]:
        """Return users having the given role (e.g. every ADMIN to notify)."""


# Scrum note repository interface
class IScrumNoteRepository(Protocol):
    """Protocol for scrum note storage (DIP)."""

    async def get_by_id(self, note_id: str) -> ScrumNote | None:
        """Return note by ID."""

    async def get_by_user_and_date(
        self, user_id: str, note_date: datetime
    ) -> ScrumNote | None:
        """Return the user's note for the day starting at note_date (midnight UTC)."""

    async def list_by_date(self, note_date: datetime) -> list[ScrumNote]:
        """Return every user's note for the day starting at note_date."""

    async def list_by_user(self, user_id: str) -> list[ScrumNote]:
        """Return a user's notes (newest first)."""

    async def save(self, note: ScrumNote) -> ScrumNote:
        """Persist the note and return the stored value."""

    async def delete(self, note_id: str) -> None:
        """Delete note by ID."""
