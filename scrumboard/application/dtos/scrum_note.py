"""DTOs for scrum note use cases."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ScrumNoteCreate:
    """Input for ScrumNoteService.create_note. date defaults to today."""

    user_id: str
    what_i_did: str
    next_steps: str
    blockers: str | None = None
    date: datetime | None = None


@dataclass(frozen=True)
class ScrumNoteUpdate:
    """Input for ScrumNoteService.update_note. None leaves a field unchanged."""

    what_i_did: str | None = None
    blockers: str | None = None
    next_steps: str | None = None
