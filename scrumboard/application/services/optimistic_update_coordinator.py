"""Optimistic card moves on the Kanban board.

A drag is shown immediately, then confirmed with the server. If the server
refuses, the card goes back to where it was and the user is told why:
a dedicated dialog for the forbidden DONE -> TODO move, a generic error for
everything else. No retry.

Pending moves are keyed by task id. A second drag of the same card while the
first is in flight replaces it (last gesture wins); when the first one
finishes it leaves the display alone. Its rollback target is inherited by
the newer move, or advanced to the first move's status if the server
accepted it. If the newer move already failed and was rolled back, an
accepted older move is shown again, since that is what the server holds.

Cards removed from the board while a move is in flight are not put back.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, replace
from enum import Enum

from scrumboard.application.interfaces.services import (
    IKanbanFeedback,
    ITaskStatusGateway,
)
from scrumboard.application.services.kanban_board import KanbanBoardState
from scrumboard.domain.enums import TaskStatus
from scrumboard.domain.exceptions import (
    InvalidTaskTransitionException,
    ScrumboardException,
)
from scrumboard.shared.telemetry.logging import get_logger
from scrumboard.shared.telemetry.tracing import add_span_event, traced

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Impossible de mettre à jour le statut de la tâche."


def transition_rejected_message(from_status: TaskStatus, to_status: TaskStatus) -> str:
    """Dialog text for a refused move, naming both column labels."""
    return (
        f'Impossible de déplacer la tâche de "{TaskStatus(from_status).label}" '
        f'à "{TaskStatus(to_status).label}".'
    )


class OutcomeKind(str, Enum):
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    SUPERSEDED = "superseded"


class RollbackReason(str, Enum):
    INVALID_TRANSITION = "invalid_transition"
    GENERIC = "generic"


@dataclass(frozen=True)
class PendingStatusChange:
    """A move shown on the board but not yet confirmed by the server."""

    task_id: str
    previous_status: TaskStatus
    requested_status: TaskStatus
    sequence: int = 0


@dataclass(frozen=True)
class StatusChangeOutcome:
    """How one move ended.

    SUPERSEDED means a newer drag of the same card replaced this one before
    the server answered; the display was left to the newer move.
    """

    kind: OutcomeKind
    task_id: str
    status: TaskStatus
    reason: RollbackReason | None = None
    error: ScrumboardException | None = None


class OptimisticUpdateCoordinator:
    """Applies card moves locally, reconciles with the server, rolls back on refusal."""

    def __init__(
        self,
        board: KanbanBoardState,
        gateway: ITaskStatusGateway,
        feedback: IKanbanFeedback | None = None,
    ) -> None:
        self.board = board
        self.gateway = gateway
        self.feedback = feedback
        self._pending: dict[str, PendingStatusChange] = {}
        self._background: set[asyncio.Task] = set()
        self._sequence = itertools.count(1)
        # Unanswered server calls per task, and how the newest move ended
        # while older calls are still unanswered.
        self._in_flight: dict[str, int] = {}
        self._latest_outcome: dict[str, OutcomeKind] = {}

    def pending(self, task_id: str) -> PendingStatusChange | None:
        """Return the in-flight move for the card, if any."""
        return self._pending.get(task_id)

    def _apply(
        self, task_id: str, from_status: TaskStatus, to_status: TaskStatus
    ) -> PendingStatusChange:
        """Record the move and show it. Runs before any await."""
        prior = self._pending.get(task_id)
        previous = prior.previous_status if prior else TaskStatus(from_status)
        change = PendingStatusChange(
            task_id, previous, TaskStatus(to_status), next(self._sequence)
        )
        self._pending[task_id] = change
        self._in_flight[task_id] = self._in_flight.get(task_id, 0) + 1
        self._latest_outcome.pop(task_id, None)
        self.board.set_status(task_id, change.requested_status)
        return change

    def _release(self, task_id: str) -> None:
        remaining = self._in_flight.get(task_id, 1) - 1
        if remaining > 0:
            self._in_flight[task_id] = remaining
            return
        self._in_flight.pop(task_id, None)
        self._latest_outcome.pop(task_id, None)

    def _show(self, task_id: str, status: TaskStatus) -> None:
        """Write to the board unless the card has been removed meanwhile."""
        if task_id in self.board:
            self.board.set_status(task_id, status)

    def _is_current(self, change: PendingStatusChange) -> bool:
        latest = self._pending.get(change.task_id)
        return latest is not None and latest.sequence == change.sequence

    async def move(
        self, task_id: str, from_status: TaskStatus, to_status: TaskStatus
    ) -> StatusChangeOutcome | None:
        """Move a card optimistically and wait for the server's answer.

        Returns None when from_status == to_status (nothing to do).
        Exceptions that are not ScrumboardException roll the card back and
        propagate.
        """
        if TaskStatus(from_status) == TaskStatus(to_status):
            return None
        change = self._apply(task_id, from_status, to_status)
        return await self._reconcile(change)

    def drop(
        self, task_id: str, from_status: TaskStatus, to_status: TaskStatus
    ) -> asyncio.Task | None:
        """Entry point for synchronous UI callbacks.

        Shows the move right away and schedules the server call on the
        running event loop. Returns the scheduled task, or None when there
        is nothing to do.
        """
        if TaskStatus(from_status) == TaskStatus(to_status):
            return None
        loop = asyncio.get_running_loop()
        change = self._apply(task_id, from_status, to_status)
        task = loop.create_task(self._reconcile(change))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    @traced("kanban.reconcile_status")
    async def _reconcile(self, change: PendingStatusChange) -> StatusChangeOutcome:
        try:
            await self.gateway.update_status(change.task_id, change.requested_status)
        except ScrumboardException as e:
            return self._rollback(change, e)
        except Exception:
            if self._is_current(change):
                current = self._pending.pop(change.task_id)
                self._latest_outcome[change.task_id] = OutcomeKind.ROLLED_BACK
                self._show(change.task_id, current.previous_status)
            raise
        else:
            return self._commit(change)
        finally:
            self._release(change.task_id)

    def _commit(self, change: PendingStatusChange) -> StatusChangeOutcome:
        if not self._is_current(change):
            latest = self._pending.get(change.task_id)
            if latest is not None:
                self._pending[change.task_id] = replace(
                    latest, previous_status=change.requested_status
                )
            elif self._latest_outcome.get(change.task_id) is OutcomeKind.ROLLED_BACK:
                self._show(change.task_id, change.requested_status)
            logger.debug("Superseded move confirmed: task=%s", change.task_id)
            return StatusChangeOutcome(
                OutcomeKind.SUPERSEDED, change.task_id, change.requested_status
            )

        del self._pending[change.task_id]
        self._latest_outcome[change.task_id] = OutcomeKind.COMMITTED
        logger.info(
            "Task move confirmed: task=%s status=%s",
            change.task_id,
            change.requested_status.value,
        )
        if self.feedback:
            self.feedback.success(change.task_id, change.requested_status)
        return StatusChangeOutcome(
            OutcomeKind.COMMITTED, change.task_id, change.requested_status
        )

    def _rollback(
        self, change: PendingStatusChange, error: ScrumboardException
    ) -> StatusChangeOutcome:
        reason = (
            RollbackReason.INVALID_TRANSITION
            if isinstance(error, InvalidTaskTransitionException)
            else RollbackReason.GENERIC
        )
        if not self._is_current(change):
            logger.debug(
                "Superseded move refused: task=%s error=%s",
                change.task_id,
                error.error_code,
            )
            displayed = (
                self.board.status_of(change.task_id)
                if change.task_id in self.board
                else change.previous_status
            )
            return StatusChangeOutcome(
                OutcomeKind.SUPERSEDED,
                change.task_id,
                displayed,
                reason,
                error,
            )

        # A confirmed superseded move may have advanced the rollback target.
        change = self._pending.pop(change.task_id)
        self._latest_outcome[change.task_id] = OutcomeKind.ROLLED_BACK
        self._show(change.task_id, change.previous_status)
        add_span_event(
            "kanban.rollback",
            {"task_id": change.task_id, "reason": reason.value},
        )
        logger.info(
            "Task move rolled back: task=%s %s -> %s (%s)",
            change.task_id,
            change.requested_status.value,
            change.previous_status.value,
            error.error_code,
        )
        if self.feedback:
            if reason is RollbackReason.INVALID_TRANSITION:
                self.feedback.transition_rejected(
                    change.task_id,
                    change.previous_status,
                    change.requested_status,
                    transition_rejected_message(
                        change.previous_status, change.requested_status
                    ),
                )
            else:
                self.feedback.error(change.task_id, GENERIC_ERROR_MESSAGE)
        return StatusChangeOutcome(
            OutcomeKind.ROLLED_BACK,
            change.task_id,
            change.previous_status,
            reason,
            error,
        )
