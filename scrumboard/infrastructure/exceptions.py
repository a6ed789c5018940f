"""Infrastructure exceptions for remote calls.

They extend ScrumboardException so callers (the optimistic update
coordinator in particular) handle them like any other domain failure.
"""

from scrumboard.domain.exceptions import ScrumboardException


class TaskStatusGatewayError(ScrumboardException):
    """The server could not be reached or answered with an unexpected error."""

    def __init__(
        self, task_id: str, reason: str, status_code: int | None = None
    ) -> None:
        self.task_id = task_id
        self.reason = reason
        self.status_code = status_code
        super().__init__(
            f'Failed to update status of task "{task_id}": {reason}',
            "TASK_STATUS_GATEWAY_ERROR",
            {"task_id": task_id, "reason": reason, "status_code": status_code},
        )
