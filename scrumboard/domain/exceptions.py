"""Domain exceptions for the scrum board.

Business-rule violations on tasks and scrum notes. Aggregates return them
inside Err results instead of raising; the use-case layer raises them.
The presentation layer (outside this package) maps error_code to a
transport status and serializes to_dict().
"""

from datetime import date
from typing import Any

from scrumboard.domain.enums import TaskStatus


class ScrumboardException(Exception):
    """Base exception for all scrum board errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, task_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }


class InvalidInputException(ScrumboardException):
    """Raised when a field value is malformed or out of range.

    Empty title, title too long, empty description, deadline in the past,
    empty scrum note fields. Recoverable by correcting the input.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with the offending field and why it was rejected.

        Args:
            field: Field name (e.g. 'title', 'deadline').
            reason: Human-readable reason (e.g. 'cannot be empty').
        """
        self.field = field
        self.reason = reason
        super().__init__(
            f'Invalid input for field "{field}": {reason}',
            "INVALID_INPUT",
            {"field": field, "reason": reason},
        )


class InvalidTaskTransitionException(ScrumboardException):
    """Raised when a status change crosses the forbidden DONE -> TODO edge."""

    def __init__(self, from_status: TaskStatus, to_status: TaskStatus) -> None:
        self.from_status = TaskStatus(from_status)
        self.to_status = TaskStatus(to_status)
        super().__init__(
            f'Invalid task status transition from "{self.from_status.value}" '
            f'to "{self.to_status.value}"',
            "INVALID_TRANSITION",
            {
                "from_status": self.from_status.value,
                "to_status": self.to_status.value,
            },
        )


class TaskNotAssignableException(ScrumboardException):
    """Raised when an actor may not mutate a task.

    Covers wrong role on assign/update/delete, an intern moving a task not
    assigned to them, and assigning a task that is already DONE.
    """

    def __init__(self, task_id: str, reason: str) -> None:
        """Initialize with the task and the rule that refused the mutation.

        Args:
            task_id: Task the actor tried to mutate.
            reason: Human-readable rule (e.g. 'Only admins can assign tasks').
        """
        self.task_id = task_id
        self.reason = reason
        super().__init__(
            f'Task "{task_id}" cannot be assigned: {reason}',
            "TASK_NOT_ASSIGNABLE",
            {"task_id": task_id, "reason": reason},
        )


class AuthorizationException(ScrumboardException):
    """Raised when a user may not perform an action outside the task aggregate.

    Used for task creation and scrum note update/delete.
    """

    def __init__(self, user_id: str, action: str) -> None:
        super().__init__(
            f'User "{user_id}" is not authorized to perform action: {action}',
            "PERMISSION_DENIED",
            {"user_id": user_id, "action": action},
        )


class ResourceNotFoundException(ScrumboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TaskNotFoundException(ResourceNotFoundException):
    def __init__(self, task_id: str) -> None:
        super().__init__("task", task_id)


class UserNotFoundException(ResourceNotFoundException):
    def __init__(self, user_id: str) -> None:
        super().__init__("user", user_id)


class ScrumNoteNotFoundException(ResourceNotFoundException):
    def __init__(self, note_id: str) -> None:
        super().__init__("scrum_note", note_id)


class ScrumNoteAlreadyExistsException(ScrumboardException):
    """Raised when a user already has a scrum note for the given day."""

    def __init__(self, user_id: str, note_date: date) -> None:
        super().__init__(
            f"A scrum note already exists for this user on {note_date.isoformat()}",
            "SCRUM_NOTE_ALREADY_EXISTS",
            {"user_id": user_id, "date": note_date.isoformat()},
        )
