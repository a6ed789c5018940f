"""Application use cases: one service per aggregate."""

from scrumboard.application.use_cases.scrum_notes import ScrumNoteService
from scrumboard.application.use_cases.tasks import TaskService

__all__ = [
    "ScrumNoteService",
    "TaskService",
]
