"""Domain value objects."""

from scrumboard.domain.value_objects.core import Deadline, RequiredText

__all__ = [
    "Deadline",
    "RequiredText",
]
