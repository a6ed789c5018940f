"""Scrum note domain entity and aggregate.

A scrum note is a user's daily stand-up record: what they did, what blocks
them, what comes next. A note's date is always midnight UTC of its day.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from scrumboard.domain.exceptions import InvalidInputException
from scrumboard.domain.result import Err, Ok, Result
from scrumboard.domain.value_objects.core import RequiredText
from scrumboard.shared.utils.datetime import ensure_utc, start_of_day_utc, utc_now
from scrumboard.shared.utils.generators import generate_cuid


@dataclass(frozen=True)
class ScrumNote:
    """One user's stand-up entry for one day."""

    id: str
    date: datetime
    what_i_did: str
    blockers: str
    next_steps: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def reconstitute(
        cls,
        *,
        id: str,
        date: datetime,
        what_i_did: str,
        blockers: str | None,
        next_steps: str,
        user_id: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> ScrumNote:
        return cls(
            id=id,
            date=start_of_day_utc(date),
            what_i_did=what_i_did,
            blockers=blockers or "",
            next_steps=next_steps,
            user_id=user_id,
            created_at=ensure_utc(created_at),
            updated_at=ensure_utc(updated_at),
        )

    def belongs_to_user(self, user_id: str) -> bool:
        return self.user_id == user_id


class ScrumNoteAggregate:
    """Validates scrum note content and produces new note values."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock = clock

    def create(
        self,
        what_i_did: str,
        next_steps: str,
        user_id: str,
        blockers: str | None = None,
        date: datetime | None = None,
    ) -> Result[ScrumNote, InvalidInputException]:
        """Create a note for the given day (default: today).

        what_i_did and next_steps must be non-blank; blockers may be empty.
        All text fields are trimmed.
        """
        now = self.clock()
        try:
            clean_did = RequiredText(what_i_did).value
        except ValueError as e:
            return Err(InvalidInputException("what_i_did", str(e)))
        try:
            clean_next = RequiredText(next_steps).value
        except ValueError as e:
            return Err(InvalidInputException("next_steps", str(e)))
        if not user_id or not user_id.strip():
            return Err(InvalidInputException("user_id", "cannot be empty"))

        return Ok(
            ScrumNote(
                id=generate_cuid(),
                date=start_of_day_utc(date or now),
                what_i_did=clean_did,
                blockers=(blockers or "").strip(),
                next_steps=clean_next,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
        )

    def update(
        self,
        note: ScrumNote,
        *,
        what_i_did: str | None = None,
        blockers: str | None = None,
        next_steps: str | None = None,
    ) -> Result[ScrumNote, InvalidInputException]:
        """Edit the supplied fields; updated_at is always bumped."""
        changes: dict[str, object] = {"updated_at": self.clock()}
        if what_i_did is not None:
            try:
                changes["what_i_did"] = RequiredText(what_i_did).value
            except ValueError as e:
                return Err(InvalidInputException("what_i_did", str(e)))
        if next_steps is not None:
            try:
                changes["next_steps"] = RequiredText(next_steps).value
            except ValueError as e:
                return Err(InvalidInputException("next_steps", str(e)))
        if blockers is not None:
            changes["blockers"] = blockers.strip()
        return Ok(replace(note, **changes))

    def is_today(self, note: ScrumNote) -> bool:
        """Return whether the note is for the current UTC day."""
        return note.date == start_of_day_utc(self.clock())

    def belongs_to_user(self, note: ScrumNote, user_id: str) -> bool:
        return note.belongs_to_user(user_id)
