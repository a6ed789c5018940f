"""Shared utilities: datetime and identifier generators."""

from scrumboard.shared.utils.datetime import (
    ensure_utc,
    start_of_day_utc,
    utc_now,
)
from scrumboard.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "start_of_day_utc",
]
