"""Application DTOs."""

from scrumboard.application.dtos.scrum_note import ScrumNoteCreate, ScrumNoteUpdate
from scrumboard.application.dtos.task import TaskCreate, TaskUpdate

__all__ = [
    "ScrumNoteCreate",
    "ScrumNoteUpdate",
    "TaskCreate",
    "TaskUpdate",
]
