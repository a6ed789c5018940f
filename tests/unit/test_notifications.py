"""Tests for Notification and NotificationFactory."""

from datetime import UTC, datetime, timedelta

import pytest

from scrumboard.domain.entities.notification import Notification, NotificationMetadata
from scrumboard.domain.enums import NotificationType, TaskStatus
from scrumboard.domain.exceptions import InvalidInputException
from scrumboard.domain.services.notification_factory import (
    NotificationFactory,
    format_french_day,
)


class TestNotificationCreate:
    def test_defaults(self) -> None:
        n = Notification.create(NotificationType.TASK_ASSIGNED, "u1", "  hello ")
        assert n.title == "Nouvelle tâche assignée"
        assert n.message == "hello"
        assert n.is_read is False
        assert n.metadata == NotificationMetadata()
        assert n.created_at.tzinfo is not None

    def test_custom_title(self) -> None:
        n = Notification.create(NotificationType.TASK_ASSIGNED, "u1", "m", title="Hi")
        assert n.title == "Hi"

    @pytest.mark.parametrize(
        ("recipient", "message", "field"),
        [("", "m", "recipient_id"), ("u1", "   ", "message"), ("u1", "x" * 501, "message")],
    )
    def test_validation(self, recipient: str, message: str, field: str) -> None:
        with pytest.raises(InvalidInputException) as exc_info:
            Notification.create(NotificationType.TASK_ASSIGNED, recipient, message)
        assert exc_info.value.field == field

    def test_message_of_500_chars_accepted(self) -> None:
        Notification.create(NotificationType.TASK_ASSIGNED, "u1", "x" * 500)

    def test_mark_as_read_is_idempotent(self) -> None:
        n = Notification.create(NotificationType.TASK_ASSIGNED, "u1", "m")
        n.mark_as_read()
        n.mark_as_read()
        assert n.is_read is True


class TestNotificationQueries:
    def _at(self, created_at: datetime, **metadata) -> Notification:
        return Notification(
            id="n1",
            type=NotificationType.TASK_ASSIGNED,
            title="t",
            message="m",
            recipient_id="u1",
            metadata=NotificationMetadata(**metadata),
            created_at=created_at,
        )

    def test_is_expired(self) -> None:
        created = datetime(2025, 1, 1, tzinfo=UTC)
        n = self._at(created)
        assert not n.is_expired(now=created + timedelta(days=30))
        assert n.is_expired(now=created + timedelta(days=30, seconds=1))
        assert n.is_expired(retention_days=1, now=created + timedelta(days=2))

    def test_redirect_urls(self) -> None:
        created = datetime(2025, 1, 1, tzinfo=UTC)
        assert self._at(created, task_id="t9").redirect_url == "/tasks/t9"
        assert self._at(created).redirect_url == "/tasks"
        note = Notification(
            id="n2",
            type=NotificationType.SCRUM_NOTE_CREATED,
            title="t",
            message="m",
            recipient_id="u1",
            metadata=NotificationMetadata(scrum_note_id="s1"),
            created_at=created,
        )
        assert note.redirect_url == "/scrum-notes?noteId=s1"
        note.metadata = NotificationMetadata()
        assert note.redirect_url == "/scrum-notes"

    def test_to_dict(self) -> None:
        created = datetime(2025, 1, 1, tzinfo=UTC)
        data = self._at(created, task_id="t9").to_dict()
        assert data == {
            "id": "n1",
            "type": "TASK_ASSIGNED",
            "title": "t",
            "message": "m",
            "recipient_id": "u1",
            "is_read": False,
            "metadata": {"task_id": "t9"},
            "created_at": "2025-01-01T00:00:00+00:00",
            "redirect_url": "/tasks/t9",
        }


class TestNotificationFactory:
    def test_task_assigned(self) -> None:
        n = NotificationFactory().task_assigned("i1", "t1", "Fix bug", "Alice", "a1")
        assert n.type is NotificationType.TASK_ASSIGNED
        assert n.recipient_id == "i1"
        assert n.message == 'Alice vous a assigné la tâche "Fix bug"'
        assert n.metadata.task_id == "t1"
        assert n.metadata.actor_name == "Alice"

    def test_task_status_updated_uses_labels(self) -> None:
        n = NotificationFactory().task_status_updated(
            "a1", "t1", "Fix bug", TaskStatus.TODO, TaskStatus.IN_PROGRESS, "Bob", "i1"
        )
        assert n.title == "Statut de tâche modifié"
        assert n.message == 'Bob a modifié le statut de "Fix bug" de "À faire" à "En cours"'
        assert n.metadata.old_status == "TODO"
        assert n.metadata.new_status == "IN_PROGRESS"

    def test_scrum_note_created(self) -> None:
        n = NotificationFactory().scrum_note_created(
            "a1", "s1", "Bob", "i1", datetime(2025, 3, 10, tzinfo=UTC)
        )
        assert n.message == "Bob a créé sa note de scrum du lundi 10 mars"
        assert n.redirect_url == "/scrum-notes?noteId=s1"

    def test_long_title_exceeding_limit_raises(self) -> None:
        with pytest.raises(InvalidInputException):
            NotificationFactory(max_message_length=20).task_assigned(
                "i1", "t1", "A rather long task title", "Alice", "a1"
            )

    def test_configured_retention(self) -> None:
        factory = NotificationFactory(retention_days=7)
        fresh = factory.task_assigned("i1", "t1", "Fix bug", "Alice", "a1")
        old = factory.task_assigned("i1", "t2", "Old bug", "Alice", "a1")
        old.created_at = fresh.created_at - timedelta(days=8)

        assert factory.is_expired(old, now=fresh.created_at)
        assert not factory.is_expired(fresh, now=fresh.created_at)
        assert factory.active([old, fresh], now=fresh.created_at) == [fresh]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(2025, 3, 10), "lundi 10 mars"),
        (datetime(2025, 8, 3), "dimanche 3 août"),
        (datetime(2024, 12, 25), "mercredi 25 décembre"),
    ],
)
def test_format_french_day(value: datetime, expected: str) -> None:
    assert format_french_day(value) == expected
