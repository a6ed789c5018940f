"""User domain entity.

Users are managed outside this package; the core only reads them to decide
who may do what and whom to notify.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from scrumboard.domain.enums import TaskAction, UserRole
from scrumboard.domain.exceptions import InvalidInputException

if TYPE_CHECKING:
    from scrumboard.domain.entities.task import Task
    from scrumboard.domain.services.authorization import AuthorizationPolicy


@dataclass(frozen=True)
class User:
    """A board member with a role. Validation runs on construction."""

    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", UserRole(self.role))
        self.validate()

    def validate(self) -> None:
        """Validate user fields. Raises InvalidInputException if invalid."""
        if not self.id:
            raise InvalidInputException("id", "cannot be empty")
        if not self.email or "@" not in self.email:
            raise InvalidInputException("email", "must be a valid email address")
        if not self.name or not self.name.strip():
            raise InvalidInputException("name", "cannot be empty")

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_intern(self) -> bool:
        return self.role == UserRole.INTERN

    def can_assign_tasks(self, policy: AuthorizationPolicy) -> bool:
        """Return whether the policy lets this user assign tasks."""
        return policy.can_perform(self.role, self.id, None, TaskAction.ASSIGN)

    def can_modify_task(self, task: Task, policy: AuthorizationPolicy) -> bool:
        """Return whether this user may move the task between columns."""
        return policy.can_perform(self.role, self.id, task, TaskAction.UPDATE_STATUS)
