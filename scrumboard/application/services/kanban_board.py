"""Client-side board state: the status each card is displayed in.

Holds one status per task id and notifies listeners on every change, so a
view can re-render a card the moment it moves. Columns are derived from the
statuses in insertion order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from scrumboard.domain.enums import TaskStatus
from scrumboard.domain.exceptions import TaskNotFoundException
from scrumboard.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from scrumboard.domain.entities.task import Task

logger = get_logger(__name__)

BoardListener = Callable[[str, TaskStatus], None]


class KanbanBoardState:
    """Displayed status per task, with change listeners."""

    def __init__(self, statuses: Mapping[str, TaskStatus] | None = None) -> None:
        self._statuses: dict[str, TaskStatus] = {
            task_id: TaskStatus(status) for task_id, status in (statuses or {}).items()
        }
        self._listeners: list[BoardListener] = []

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> KanbanBoardState:
        return cls({task.id: task.status for task in tasks})

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._statuses

    def __len__(self) -> int:
        return len(self._statuses)

    def status_of(self, task_id: str) -> TaskStatus:
        """Return the displayed status; raise TaskNotFoundException if the card is unknown."""
        try:
            return self._statuses[task_id]
        except KeyError:
            raise TaskNotFoundException(task_id) from None

    def set_status(self, task_id: str, status: TaskStatus) -> None:
        """Display the card in status and notify listeners if it moved.

        Unknown task ids are added to the board.
        """
        status = TaskStatus(status)
        if self._statuses.get(task_id) == status:
            return
        self._statuses[task_id] = status
        for listener in list(self._listeners):
            listener(task_id, status)

    def remove(self, task_id: str) -> None:
        self._statuses.pop(task_id, None)

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Register a listener; return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def column(self, status: TaskStatus) -> list[str]:
        """Task ids displayed in one column."""
        status = TaskStatus(status)
        return [task_id for task_id, s in self._statuses.items() if s == status]

    def columns(self) -> dict[TaskStatus, list[str]]:
        """Every column, in TODO, IN_PROGRESS, DONE order (empty ones included)."""
        return {status: self.column(status) for status in TaskStatus}
