"""Task domain entity and its aggregate operations.

Task is an immutable value. TaskAggregate is the only code that produces a
changed Task: every operation validates, consults the authorization policy,
and returns Ok(new_task) or Err(domain_error). Nothing here does I/O.

Status machine (TODO, IN_PROGRESS, DONE): every move is allowed, forward,
backward or onto the same status, except DONE -> TODO.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from scrumboard.domain.enums import TaskAction, TaskStatus, UserRole
from scrumboard.domain.exceptions import (
    InvalidInputException,
    InvalidTaskTransitionException,
    TaskNotAssignableException,
)
from scrumboard.domain.result import Err, Ok, Result
from scrumboard.domain.services.authorization import AuthorizationPolicy
from scrumboard.domain.value_objects.core import Deadline, RequiredText
from scrumboard.shared.utils.datetime import ensure_utc, utc_now
from scrumboard.shared.utils.generators import generate_cuid

TITLE_MAX_LENGTH = 255

FORBIDDEN_TRANSITIONS: frozenset[tuple[TaskStatus, TaskStatus]] = frozenset(
    {(TaskStatus.DONE, TaskStatus.TODO)}
)


def can_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """Return whether the status machine allows from_status -> to_status."""
    return (TaskStatus(from_status), TaskStatus(to_status)) not in FORBIDDEN_TRANSITIONS


@dataclass(frozen=True)
class Task:
    """A unit of work shown as a card on the Kanban board."""

    id: str
    title: str
    description: str
    status: TaskStatus
    creator_id: str
    assignee_id: str | None
    deadline: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def reconstitute(
        cls,
        *,
        id: str,
        title: str,
        description: str,
        status: TaskStatus | str,
        creator_id: str,
        assignee_id: str | None,
        deadline: datetime | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> Task:
        """Rebuild a stored task without re-running creation rules.

        A stored deadline may legitimately be in the past by now.
        """
        return cls(
            id=id,
            title=title,
            description=description,
            status=TaskStatus(status),
            creator_id=creator_id,
            assignee_id=assignee_id,
            deadline=ensure_utc(deadline),
            created_at=ensure_utc(created_at),
            updated_at=ensure_utc(updated_at),
        )

    def is_assigned_to(self, user_id: str) -> bool:
        """Return whether the task is assigned to the given user."""
        return self.assignee_id is not None and self.assignee_id == user_id


class TaskAggregate:
    """Enforces task invariants and authorization on every mutation."""

    def __init__(
        self,
        policy: AuthorizationPolicy,
        clock: Callable[[], datetime] = utc_now,
        title_max_length: int = TITLE_MAX_LENGTH,
    ) -> None:
        self.policy = policy
        self.clock = clock
        self.title_max_length = title_max_length

    def _title(self, value: str) -> RequiredText:
        return RequiredText(value, max_length=self.title_max_length)

    def create(
        self,
        title: str,
        description: str,
        creator_id: str,
        deadline: datetime | None = None,
    ) -> Result[Task, InvalidInputException]:
        """Create a new TODO task with no assignee.

        Title and description are trimmed. Fails with InvalidInputException
        when either is blank, the title is longer than the limit, or the
        deadline is strictly before now.
        """
        now = self.clock()
        try:
            clean_title = self._title(title).value
        except ValueError as e:
            return Err(InvalidInputException("title", str(e)))
        try:
            clean_description = RequiredText(description).value
        except ValueError as e:
            return Err(InvalidInputException("description", str(e)))
        clean_deadline: datetime | None = None
        if deadline is not None:
            try:
                clean_deadline = Deadline(deadline, now).value
            except ValueError as e:
                return Err(InvalidInputException("deadline", str(e)))

        return Ok(
            Task(
                id=generate_cuid(),
                title=clean_title,
                description=clean_description,
                status=TaskStatus.TODO,
                creator_id=creator_id,
                assignee_id=None,
                deadline=clean_deadline,
                created_at=now,
                updated_at=now,
            )
        )

    def assign(
        self,
        task: Task,
        target_user_id: str,
        requester_role: UserRole,
    ) -> Result[Task, TaskNotAssignableException]:
        """Assign the task to target_user_id.

        Only roles granted ASSIGN (ADMIN) may assign, and a DONE task
        cannot be reassigned.
        """
        if not self.policy.can_perform(
            requester_role, "", task, TaskAction.ASSIGN
        ):
            return Err(TaskNotAssignableException(task.id, "Only admins can assign tasks"))
        if task.status == TaskStatus.DONE:
            return Err(TaskNotAssignableException(task.id, "Cannot assign a completed task"))
        return Ok(replace(task, assignee_id=target_user_id, updated_at=self.clock()))

    def update_status(
        self,
        task: Task,
        new_status: TaskStatus,
        requester_id: str,
        requester_role: UserRole,
    ) -> Result[Task, InvalidTaskTransitionException | TaskNotAssignableException]:
        """Move the task to new_status.

        The forbidden DONE -> TODO edge is checked first, then the policy:
        admins may move any task, interns only tasks assigned to them.
        Moving onto the current status is allowed and still bumps updated_at.
        """
        new_status = TaskStatus(new_status)
        if not can_transition(task.status, new_status):
            return Err(InvalidTaskTransitionException(task.status, new_status))
        if not self.policy.can_perform(
            requester_role, requester_id, task, TaskAction.UPDATE_STATUS
        ):
            return Err(
                TaskNotAssignableException(
                    task.id, "Interns can only update their own assigned tasks"
                )
            )
        return Ok(replace(task, status=new_status, updated_at=self.clock()))

    def update(
        self,
        task: Task,
        requester_role: UserRole,
        *,
        title: str | None = None,
        description: str | None = None,
        deadline: datetime | None = None,
    ) -> Result[Task, TaskNotAssignableException | InvalidInputException]:
        """Edit title, description and/or deadline (None leaves a field as is).

        Admin only. Each supplied field follows the creation rules.
        updated_at is bumped on every successful call, even when no value
        actually differs.
        """
        if not self.policy.can_perform(requester_role, "", task, TaskAction.UPDATE):
            return Err(
                TaskNotAssignableException(task.id, "Only admins can update task details")
            )
        now = self.clock()
        changes: dict[str, object] = {"updated_at": now}
        try:
            if title is not None:
                changes["title"] = self._title(title).value
        except ValueError as e:
            return Err(InvalidInputException("title", str(e)))
        try:
            if description is not None:
                changes["description"] = RequiredText(description).value
        except ValueError as e:
            return Err(InvalidInputException("description", str(e)))
        try:
            if deadline is not None:
                changes["deadline"] = Deadline(deadline, now).value
        except ValueError as e:
            return Err(InvalidInputException("deadline", str(e)))
        return Ok(replace(task, **changes))

    def can_be_deleted(self, task: Task, requester_role: UserRole) -> bool:
        """Return whether the role may delete the task (admins only)."""
        return self.policy.can_perform(requester_role, "", task, TaskAction.DELETE)

    def is_overdue(self, task: Task) -> bool:
        """Return whether the deadline has passed and the task is not DONE."""
        if task.deadline is None:
            return False
        return task.deadline < self.clock() and task.status != TaskStatus.DONE
