"""Scrum note use cases."""

from scrumboard.application.use_cases.scrum_notes.scrum_note_operations import (
    ScrumNoteService,
)

__all__ = ["ScrumNoteService"]
