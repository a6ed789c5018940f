"""Domain value objects for the scrum board.

Value objects are immutable, self-validating and carry no identity.
They raise ValueError; aggregates turn that into an InvalidInputException
naming the field.
"""

from dataclasses import dataclass
from datetime import datetime

from scrumboard.shared.utils.datetime import ensure_utc


def _validate_required_text(value: str | None, max_length: int | None) -> None:
    """Validate non-empty after trim and raw length. Raises ValueError on failure."""
    if value is None or not value.strip():
        raise ValueError("cannot be empty")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"cannot exceed {max_length} characters")


@dataclass(frozen=True)
class RequiredText:
    """Non-blank text, trimmed on construction.

    The length limit applies to the text as supplied, before trimming
    (a 256-character title is rejected even if it ends in spaces).
    """

    value: str
    max_length: int | None = None

    def __post_init__(self) -> None:
        _validate_required_text(self.value, self.max_length)
        object.__setattr__(self, "value", self.value.strip())


@dataclass(frozen=True)
class Deadline:
    """Task deadline; must not be strictly before the moment it is set."""

    value: datetime
    now: datetime

    def __post_init__(self) -> None:
        value = ensure_utc(self.value)
        if value < self.now:
            raise ValueError("cannot be in the past")
        object.__setattr__(self, "value", value)
