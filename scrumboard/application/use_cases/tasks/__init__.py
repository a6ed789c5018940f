"""Task use cases."""

from scrumboard.application.use_cases.tasks.task_operations import TaskService

__all__ = ["TaskService"]
