"""Notification domain entity.

A notification is the descriptor handed to the notification trigger after a
successful mutation. Delivery (log, pub/sub, push) is an adapter concern.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any

from scrumboard.domain.enums import NotificationType
from scrumboard.domain.exceptions import InvalidInputException
from scrumboard.shared.utils.datetime import ensure_utc, utc_now
from scrumboard.shared.utils.generators import generate_cuid

MESSAGE_MAX_LENGTH = 500
RETENTION_DAYS = 30


@dataclass(frozen=True)
class NotificationMetadata:
    """Context attached to a notification; which fields are set depends on type."""

    task_id: str | None = None
    task_title: str | None = None
    old_status: str | None = None
    new_status: str | None = None
    scrum_note_id: str | None = None
    actor_id: str | None = None
    actor_name: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return only the fields that are set."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class Notification:
    """Domain entity for a user notification.

    Only is_read changes after creation (see mark_as_read).
    """

    id: str
    type: NotificationType
    title: str
    message: str
    recipient_id: str
    is_read: bool = False
    metadata: NotificationMetadata = field(default_factory=NotificationMetadata)
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        type: NotificationType,
        recipient_id: str,
        message: str,
        title: str | None = None,
        metadata: NotificationMetadata | None = None,
        max_message_length: int = MESSAGE_MAX_LENGTH,
    ) -> Notification:
        """Create an unread notification.

        Raises:
            InvalidInputException: If recipient_id is missing or message is
                blank or longer than max_message_length.
        """
        if not recipient_id:
            raise InvalidInputException("recipient_id", "cannot be empty")
        if not message or not message.strip():
            raise InvalidInputException("message", "cannot be empty")
        if len(message) > max_message_length:
            raise InvalidInputException(
                "message", f"cannot exceed {max_message_length} characters"
            )
        type = NotificationType(type)
        return cls(
            id=generate_cuid(),
            type=type,
            title=title or type.default_title,
            message=message.strip(),
            recipient_id=recipient_id,
            is_read=False,
            metadata=metadata or NotificationMetadata(),
            created_at=utc_now(),
        )

    def mark_as_read(self) -> None:
        """Mark as read. Idempotent."""
        self.is_read = True

    def is_expired(
        self, retention_days: int = RETENTION_DAYS, now: datetime | None = None
    ) -> bool:
        """Return whether the notification is older than retention_days."""
        current = ensure_utc(now) if now is not None else utc_now()
        return current > ensure_utc(self.created_at) + timedelta(days=retention_days)

    @property
    def redirect_url(self) -> str:
        """Front-end path the notification links to."""
        if self.type == NotificationType.SCRUM_NOTE_CREATED:
            if self.metadata.scrum_note_id:
                return f"/scrum-notes?noteId={self.metadata.scrum_note_id}"
            return "/scrum-notes"
        if self.metadata.task_id:
            return f"/tasks/{self.metadata.task_id}"
        return "/tasks"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for publishing (JSON-compatible)."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "recipient_id": self.recipient_id,
            "is_read": self.is_read,
            "metadata": self.metadata.to_dict(),
            "created_at": self.created_at.isoformat(),
            "redirect_url": self.redirect_url,
        }
