"""Scrum note operations: create (one per user per day), edit, delete, query."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scrumboard.application.dtos.scrum_note import ScrumNoteCreate, ScrumNoteUpdate
from scrumboard.application.interfaces.repositories import (
    IScrumNoteRepository,
    IUserRepository,
)
from scrumboard.domain.entities.scrum_note import ScrumNote, ScrumNoteAggregate
from scrumboard.domain.enums import UserRole
from scrumboard.domain.exceptions import (
    AuthorizationException,
    ScrumNoteAlreadyExistsException,
    ScrumNoteNotFoundException,
    UserNotFoundException,
)
from scrumboard.domain.services.authorization import AuthorizationPolicy
from scrumboard.domain.services.notification_factory import NotificationFactory
from scrumboard.shared.telemetry.logging import get_logger
from scrumboard.shared.telemetry.tracing import traced
from scrumboard.shared.utils.datetime import start_of_day_utc

if TYPE_CHECKING:
    from scrumboard.application.interfaces.services import INotificationTrigger
    from scrumboard.domain.entities.user import User

logger = get_logger(__name__)


class ScrumNoteService:
    """Scrum note use cases. Interns' new notes are announced to every admin."""

    def __init__(
        self,
        note_repo: IScrumNoteRepository,
        user_repo: IUserRepository,
        aggregate: ScrumNoteAggregate,
        policy: AuthorizationPolicy,
        notification_trigger: INotificationTrigger | None = None,
        notification_factory: NotificationFactory | None = None,
    ) -> None:
        self.note_repo = note_repo
        self.user_repo = user_repo
        self.aggregate = aggregate
        self.policy = policy
        self.notification_trigger = notification_trigger
        self.notification_factory = notification_factory or NotificationFactory()

    async def _require_user(self, user_id: str) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    async def _require_note(self, note_id: str) -> ScrumNote:
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise ScrumNoteNotFoundException(note_id)
        return note

    async def _notify_admins(self, author: User, note: ScrumNote) -> None:
        if self.notification_trigger is None:
            return
        admins = await self.user_repo.list_by_role(UserRole.ADMIN)
        for admin in admins:
            try:
                notification = self.notification_factory.scrum_note_created(
                    recipient_id=admin.id,
                    scrum_note_id=note.id,
                    creator_name=author.name,
                    creator_id=author.id,
                    note_date=note.date,
                )
                await self.notification_trigger.notify(notification)
            except Exception as e:
                logger.warning(
                    "Notification delivery failed (recipient=%s): %s", admin.id, e
                )

    @traced("scrum_note.create")
    async def create_note(self, data: ScrumNoteCreate) -> ScrumNote:
        """Create the author's note for the day.

        Raises:
            UserNotFoundException: Unknown author.
            ScrumNoteAlreadyExistsException: Author already has a note that day.
            InvalidInputException: Blank what_i_did or next_steps.
        """
        author = await self._require_user(data.user_id)
        note = self.aggregate.create(
            what_i_did=data.what_i_did,
            next_steps=data.next_steps,
            user_id=author.id,
            blockers=data.blockers,
            date=data.date,
        ).unwrap()

        existing = await self.note_repo.get_by_user_and_date(author.id, note.date)
        if existing:
            raise ScrumNoteAlreadyExistsException(author.id, note.date.date())

        saved = await self.note_repo.save(note)
        logger.info(
            "Scrum note created: id=%s user=%s date=%s",
            saved.id,
            author.id,
            saved.date.date().isoformat(),
        )
        if author.is_intern():
            await self._notify_admins(author, saved)
        return saved

    @traced("scrum_note.update")
    async def update_note(
        self, note_id: str, data: ScrumNoteUpdate, requester_id: str
    ) -> ScrumNote:
        """Edit a note. Authors may edit their own notes; admins any note."""
        note = await self._require_note(note_id)
        requester = await self._require_user(requester_id)
        if not self.policy.can_manage_scrum_note(requester.role, requester.id, note):
            raise AuthorizationException(requester.id, "update scrum note")
        updated = self.aggregate.update(
            note,
            what_i_did=data.what_i_did,
            blockers=data.blockers,
            next_steps=data.next_steps,
        ).unwrap()
        saved = await self.note_repo.save(updated)
        logger.info("Scrum note updated: id=%s by=%s", saved.id, requester.id)
        return saved

    @traced("scrum_note.delete")
    async def delete_note(self, note_id: str, requester_id: str) -> None:
        note = await self._require_note(note_id)
        requester = await self._require_user(requester_id)
        if not self.policy.can_manage_scrum_note(requester.role, requester.id, note):
            raise AuthorizationException(requester.id, "delete scrum note")
        await self.note_repo.delete(note.id)
        logger.info("Scrum note deleted: id=%s by=%s", note.id, requester.id)

    async def get_today_notes(self) -> list[ScrumNote]:
        """Return every user's note for the current UTC day."""
        return await self.note_repo.list_by_date(start_of_day_utc(self.aggregate.clock()))

    async def get_user_notes(self, user_id: str) -> list[ScrumNote]:
        await self._require_user(user_id)
        return await self.note_repo.list_by_user(user_id)
