"""Service interfaces (ports) for the application layer.

Protocols define contracts for notification delivery, the remote status
mutation used by the board client, and user-facing board feedback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from scrumboard.domain.enums import TaskStatus

if TYPE_CHECKING:
    from scrumboard.domain.entities.notification import Notification


# Notification trigger interface
class INotificationTrigger(Protocol):
    """Protocol for delivering a notification after a successful mutation.

    Implementations may log, publish or push; failures raise and the caller
    decides whether they matter.
    """

    async def notify(self, notification: Notification) -> None:
        """Deliver one notification to its recipient."""


# Remote task status mutation (board client side)
class ITaskStatusGateway(Protocol):
    """Protocol for the server call behind a card drag."""

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        """Ask the server to move the task. Raise ScrumboardException on refusal."""


# Board feedback (toasts, dialogs)
class IKanbanFeedback(Protocol):
    """Protocol for telling the user how a card move ended."""

    def success(self, task_id: str, status: TaskStatus) -> None:
        """The move was confirmed by the server."""

    def transition_rejected(
        self,
        task_id: str,
        from_status: TaskStatus,
        to_status: TaskStatus,
        message: str,
    ) -> None:
        """The move crossed a forbidden edge; show a dialog with message."""

    def error(self, task_id: str, message: str) -> None:
        """The move failed for any other reason; show a generic error."""
