"""Tagged result returned by aggregate operations.

Business-rule failures come back as Err(exception) rather than being
raised, so every call site decides what to do with them. unwrap() turns
an Err back into a raised exception at the use-case boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

from scrumboard.domain.exceptions import ScrumboardException

T = TypeVar("T")
E = TypeVar("E", bound=ScrumboardException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the new value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the value."""
        return self.value

    def unwrap_err(self) -> ScrumboardException:
        raise ValueError("unwrap_err() called on Ok")


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying the domain error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raise the carried domain error."""
        raise self.error

    def unwrap_err(self) -> E:
        return self.error


Result: TypeAlias = Union[Ok[T], Err[E]]
