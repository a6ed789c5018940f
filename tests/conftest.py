"""Pytest configuration and fixtures for scrumboard.

Aggregates get a fixed clock so timestamps and deadline checks are
deterministic. Async tests run under pytest-asyncio (asyncio_mode = auto).
"""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from scrumboard.core.config import get_settings
from scrumboard.domain.entities.scrum_note import ScrumNoteAggregate
from scrumboard.domain.entities.task import Task, TaskAggregate
from scrumboard.domain.entities.user import User
from scrumboard.domain.enums import TaskStatus, UserRole
from scrumboard.domain.services.authorization import AuthorizationPolicy

# Monday 10 March 2025, 09:00 UTC
NOW = datetime(2025, 3, 10, 9, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test reads settings fresh from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: NOW


@pytest.fixture
def policy() -> AuthorizationPolicy:
    return AuthorizationPolicy.default()


@pytest.fixture
def aggregate(policy: AuthorizationPolicy, clock) -> TaskAggregate:
    return TaskAggregate(policy, clock=clock)


@pytest.fixture
def note_aggregate(clock) -> ScrumNoteAggregate:
    return ScrumNoteAggregate(clock=clock)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for stored tasks (created an hour before NOW, unassigned TODO by default)."""

    def _make(**overrides) -> Task:
        fields = {
            "id": "task-1",
            "title": "Write onboarding guide",
            "description": "Cover local setup and the review process",
            "status": TaskStatus.TODO,
            "creator_id": "admin-1",
            "assignee_id": None,
            "deadline": None,
            "created_at": datetime(2025, 3, 10, 8, 0, 0, tzinfo=UTC),
            "updated_at": datetime(2025, 3, 10, 8, 0, 0, tzinfo=UTC),
        }
        fields.update(overrides)
        return Task.reconstitute(**fields)

    return _make


@pytest.fixture
def admin() -> User:
    return User(
        id="admin-1",
        email="alice@example.com",
        name="Alice",
        role=UserRole.ADMIN,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def intern() -> User:
    return User(
        id="intern-1",
        email="bob@example.com",
        name="Bob",
        role=UserRole.INTERN,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def other_intern() -> User:
    return User(
        id="intern-2",
        email="carol@example.com",
        name="Carol",
        role=UserRole.INTERN,
        created_at=NOW,
        updated_at=NOW,
    )
