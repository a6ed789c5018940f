"""Client-side application services: board state and optimistic card moves."""

from scrumboard.application.services.kanban_board import KanbanBoardState
from scrumboard.application.services.optimistic_update_coordinator import (
    OptimisticUpdateCoordinator,
    OutcomeKind,
    PendingStatusChange,
    RollbackReason,
    StatusChangeOutcome,
)

__all__ = [
    "KanbanBoardState",
    "OptimisticUpdateCoordinator",
    "OutcomeKind",
    "PendingStatusChange",
    "RollbackReason",
    "StatusChangeOutcome",
]
