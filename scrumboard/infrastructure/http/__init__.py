"""HTTP adapters."""

from scrumboard.infrastructure.http.task_status_gateway import HttpTaskStatusGateway

__all__ = ["HttpTaskStatusGateway"]
