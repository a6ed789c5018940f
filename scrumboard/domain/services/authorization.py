"""Authorization policy: which role may perform which task action.

The rule table is an explicit value built by the caller (usually via
AuthorizationPolicy.default()) and handed to the aggregates, so the same
rules can be tested on their own and reused for new actions without
repeating role conditionals.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from scrumboard.domain.enums import TaskAction, UserRole

if TYPE_CHECKING:
    from scrumboard.domain.entities.scrum_note import ScrumNote
    from scrumboard.domain.entities.task import Task


@dataclass(frozen=True)
class AuthorizationPolicy:
    """Role-based rule table for task actions.

    Attributes:
        grants: Actions each role may perform on any task.
        own_task_grants: Actions each role may perform only on tasks
            assigned to the actor.
        note_managers: Roles that may update or delete anyone's scrum note;
            every other role may manage only its own notes.
    """

    grants: Mapping[UserRole, frozenset[TaskAction]]
    own_task_grants: Mapping[UserRole, frozenset[TaskAction]] = field(
        default_factory=dict
    )
    note_managers: frozenset[UserRole] = frozenset({UserRole.ADMIN})

    @classmethod
    def default(cls) -> AuthorizationPolicy:
        """ADMIN: every task action. INTERN: status changes on own tasks only."""
        return cls(
            grants={
                UserRole.ADMIN: frozenset(TaskAction),
                UserRole.INTERN: frozenset(),
            },
            own_task_grants={
                UserRole.INTERN: frozenset({TaskAction.UPDATE_STATUS}),
            },
        )

    def can_perform(
        self,
        role: UserRole,
        actor_id: str,
        task: Task | None,
        action: TaskAction,
    ) -> bool:
        """Return whether the actor may perform action on task.

        Args:
            role: Actor's role.
            actor_id: Actor's user id (compared with the task's assignee).
            task: Target task; None for actions without a target (CREATE).
            action: Requested action.
        """
        if action in self.grants.get(role, frozenset()):
            return True
        if task is None or action not in self.own_task_grants.get(role, frozenset()):
            return False
        return task.assignee_id is not None and task.assignee_id == actor_id

    def can_manage_scrum_note(
        self, role: UserRole, actor_id: str, note: ScrumNote
    ) -> bool:
        """Return whether the actor may update or delete the scrum note."""
        if role in self.note_managers:
            return True
        return note.user_id == actor_id
