"""Task operations: create, assign, move, edit, delete and query.

Loads through ITaskRepository/IUserRepository, delegates every rule to
TaskAggregate, unwraps its result (raising the domain error) and saves.
Notifications are sent after the save; a delivery failure is logged and
does not undo the mutation.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING

from scrumboard.application.dtos.task import TaskCreate, TaskUpdate
from scrumboard.application.interfaces.repositories import (
    ITaskRepository,
    IUserRepository,
)
from scrumboard.domain.entities.task import Task, TaskAggregate
from scrumboard.domain.enums import TaskAction, TaskStatus
from scrumboard.domain.exceptions import (
    AuthorizationException,
    TaskNotAssignableException,
    TaskNotFoundException,
    UserNotFoundException,
)
from scrumboard.domain.services.notification_factory import NotificationFactory
from scrumboard.shared.telemetry.logging import get_logger
from scrumboard.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from scrumboard.application.interfaces.services import INotificationTrigger
    from scrumboard.domain.entities.notification import Notification
    from scrumboard.domain.entities.user import User

logger = get_logger(__name__)


class TaskService:
    """Task use cases. Raises domain exceptions; returns domain values."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
        aggregate: TaskAggregate,
        notification_trigger: INotificationTrigger | None = None,
        notification_factory: NotificationFactory | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.aggregate = aggregate
        self.notification_trigger = notification_trigger
        self.notification_factory = notification_factory or NotificationFactory()

    async def _require_task(self, task_id: str) -> Task:
        task = await self.task_repo.get_by_id(task_id)
        if not task:
            raise TaskNotFoundException(task_id)
        return task

    async def _require_user(self, user_id: str) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    async def _send(
        self, build: Callable[[], Notification], recipient_id: str
    ) -> None:
        """Build and deliver if a trigger is configured; log and continue on failure.

        Building is guarded too: an oversized message must not fail a
        mutation that is already saved.
        """
        if self.notification_trigger is None:
            return
        try:
            await self.notification_trigger.notify(build())
        except Exception as e:
            logger.warning(
                "Notification delivery failed (recipient=%s): %s", recipient_id, e
            )

    @traced("task.create")
    async def create_task(self, data: TaskCreate) -> Task:
        """Create a TODO task. Only users allowed to CREATE (admins) may."""
        creator = await self._require_user(data.creator_id)
        if not self.aggregate.policy.can_perform(
            creator.role, creator.id, None, TaskAction.CREATE
        ):
            raise AuthorizationException(creator.id, TaskAction.CREATE.value)
        task = self.aggregate.create(
            title=data.title,
            description=data.description,
            creator_id=creator.id,
            deadline=data.deadline,
        ).unwrap()
        saved = await self.task_repo.save(task)
        logger.info("Task created: id=%s creator=%s", saved.id, creator.id)
        return saved

    @traced("task.assign")
    async def assign_task(
        self, task_id: str, assignee_id: str, requester_id: str
    ) -> Task:
        """Assign the task and notify the new assignee."""
        task = await self._require_task(task_id)
        assignee = await self._require_user(assignee_id)
        requester = await self._require_user(requester_id)

        updated = self.aggregate.assign(task, assignee.id, requester.role).unwrap()
        saved = await self.task_repo.save(updated)
        logger.info(
            "Task assigned: id=%s assignee=%s by=%s", saved.id, assignee.id, requester.id
        )

        await self._send(
            partial(
                self.notification_factory.task_assigned,
                recipient_id=assignee.id,
                task_id=saved.id,
                task_title=saved.title,
                assigner_name=requester.name,
                assigner_id=requester.id,
            ),
            assignee.id,
        )
        return saved

    @traced("task.update_status")
    async def update_task_status(
        self, task_id: str, new_status: TaskStatus, requester_id: str
    ) -> Task:
        """Move the task to another column.

        When the requester is not an admin, the task's creator is told about
        the move.
        """
        task = await self._require_task(task_id)
        requester = await self._require_user(requester_id)
        old_status = task.status

        updated = self.aggregate.update_status(
            task, TaskStatus(new_status), requester.id, requester.role
        ).unwrap()
        saved = await self.task_repo.save(updated)
        logger.info(
            "Task status updated: id=%s %s -> %s by=%s",
            saved.id,
            old_status.value,
            saved.status.value,
            requester.id,
        )

        if not requester.is_admin():
            await self._send(
                partial(
                    self.notification_factory.task_status_updated,
                    recipient_id=saved.creator_id,
                    task_id=saved.id,
                    task_title=saved.title,
                    old_status=old_status,
                    new_status=saved.status,
                    modifier_name=requester.name,
                    modifier_id=requester.id,
                ),
                saved.creator_id,
            )
        return saved

    @traced("task.update")
    async def update_task(
        self, task_id: str, data: TaskUpdate, requester_id: str
    ) -> Task:
        """Edit title, description or deadline (admins only)."""
        task = await self._require_task(task_id)
        requester = await self._require_user(requester_id)
        updated = self.aggregate.update(
            task,
            requester.role,
            title=data.title,
            description=data.description,
            deadline=data.deadline,
        ).unwrap()
        saved = await self.task_repo.save(updated)
        logger.info("Task updated: id=%s by=%s", saved.id, requester.id)
        return saved

    @traced("task.delete")
    async def delete_task(self, task_id: str, requester_id: str) -> None:
        """Delete the task (admins only)."""
        task = await self._require_task(task_id)
        requester = await self._require_user(requester_id)
        if not self.aggregate.can_be_deleted(task, requester.role):
            raise TaskNotAssignableException(task.id, "Only admins can delete tasks")
        await self.task_repo.delete(task.id)
        logger.info("Task deleted: id=%s by=%s", task.id, requester.id)

    async def get_task(self, task_id: str) -> Task:
        """Return task by id; raise TaskNotFoundException if missing."""
        return await self._require_task(task_id)

    async def list_tasks(self) -> list[Task]:
        return await self.task_repo.list_all()

    async def list_by_status(self, status: TaskStatus) -> list[Task]:
        return await self.task_repo.list_by_status(TaskStatus(status))

    async def list_by_assignee(self, assignee_id: str) -> list[Task]:
        """Return the user's tasks; raise UserNotFoundException if the user is unknown."""
        await self._require_user(assignee_id)
        return await self.task_repo.list_by_assignee(assignee_id)

    async def list_overdue(self) -> list[Task]:
        """Return tasks whose deadline has passed and that are not DONE."""
        tasks = await self.task_repo.list_all()
        return [t for t in tasks if self.aggregate.is_overdue(t)]
