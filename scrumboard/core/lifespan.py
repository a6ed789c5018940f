"""Runtime lifespan: startup and shutdown.

Single place for startup/shutdown logic and object wiring. No business
logic here: logging, telemetry, the notification trigger (Redis or
log-only) and the HTTP gateway are built from settings, and services are
assembled around the caller's repositories.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from scrumboard.application.interfaces.repositories import (
    IScrumNoteRepository,
    ITaskRepository,
    IUserRepository,
)
from scrumboard.application.interfaces.services import (
    IKanbanFeedback,
    INotificationTrigger,
)
from scrumboard.application.services.kanban_board import KanbanBoardState
from scrumboard.application.services.optimistic_update_coordinator import (
    OptimisticUpdateCoordinator,
)
from scrumboard.application.use_cases.scrum_notes import ScrumNoteService
from scrumboard.application.use_cases.tasks import TaskService
from scrumboard.core.config import Settings, get_settings
from scrumboard.domain.entities.scrum_note import ScrumNoteAggregate
from scrumboard.domain.entities.task import TaskAggregate
from scrumboard.domain.services.authorization import AuthorizationPolicy
from scrumboard.domain.services.notification_factory import NotificationFactory
from scrumboard.infrastructure.http.task_status_gateway import HttpTaskStatusGateway
from scrumboard.infrastructure.messaging.redis_notifications import (
    RedisNotificationPublisher,
)
from scrumboard.infrastructure.services.notification_trigger import (
    LogOnlyNotificationTrigger,
)
from scrumboard.shared.telemetry.logging import get_logger, setup_logging
from scrumboard.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = get_logger(__name__)


@dataclass
class Runtime:
    """Objects shared for the lifetime of the process."""

    settings: Settings
    policy: AuthorizationPolicy
    task_aggregate: TaskAggregate
    note_aggregate: ScrumNoteAggregate
    notification_factory: NotificationFactory
    notification_trigger: INotificationTrigger
    gateway: HttpTaskStatusGateway | None = None
    publisher: RedisNotificationPublisher | None = field(default=None, repr=False)

    def task_service(
        self, task_repo: ITaskRepository, user_repo: IUserRepository
    ) -> TaskService:
        return TaskService(
            task_repo,
            user_repo,
            self.task_aggregate,
            notification_trigger=self.notification_trigger,
            notification_factory=self.notification_factory,
        )

    def scrum_note_service(
        self, note_repo: IScrumNoteRepository, user_repo: IUserRepository
    ) -> ScrumNoteService:
        return ScrumNoteService(
            note_repo,
            user_repo,
            self.note_aggregate,
            self.policy,
            notification_trigger=self.notification_trigger,
            notification_factory=self.notification_factory,
        )

    def coordinator(
        self,
        board: KanbanBoardState,
        feedback: IKanbanFeedback | None = None,
    ) -> OptimisticUpdateCoordinator:
        """Board coordinator talking to the server through the HTTP gateway."""
        if self.gateway is None:
            raise RuntimeError("HTTP gateway is disabled for this runtime")
        return OptimisticUpdateCoordinator(board, self.gateway, feedback)


def configure_observability(settings: Settings) -> None:
    """Set up logging and, when enabled, OpenTelemetry tracing."""
    setup_logging()
    if not settings.telemetry_enabled:
        return
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    telemetry.instrument_logging()
    set_telemetry(telemetry)
    logger.info("Telemetry initialized")


async def create_notification_trigger(
    settings: Settings,
) -> tuple[INotificationTrigger, RedisNotificationPublisher | None]:
    """Redis publisher when enabled and reachable, else the log-only trigger."""
    if settings.redis_enabled:
        publisher = RedisNotificationPublisher(settings=settings)
        await publisher.connect()
        if publisher.is_available():
            return publisher, publisher
        logger.warning("Redis unavailable, falling back to log-only notifications")
    return LogOnlyNotificationTrigger(), None


@asynccontextmanager
async def create_lifespan(
    settings: Settings | None = None,
    *,
    with_gateway: bool = True,
) -> AsyncIterator[Runtime]:
    """Build the runtime, yield it, then release its resources.

    Startup order: observability, notification trigger, HTTP gateway.
    Shutdown order: gateway client close, Redis disconnect, telemetry shutdown.
    """
    settings = settings or get_settings()

    # ---- Startup ----
    configure_observability(settings)
    trigger, publisher = await create_notification_trigger(settings)
    policy = AuthorizationPolicy.default()
    runtime = Runtime(
        settings=settings,
        policy=policy,
        task_aggregate=TaskAggregate(policy, title_max_length=settings.title_max_length),
        note_aggregate=ScrumNoteAggregate(),
        notification_factory=NotificationFactory(
            max_message_length=settings.notification_message_max_length,
            retention_days=settings.notification_retention_days,
        ),
        notification_trigger=trigger,
        gateway=HttpTaskStatusGateway(settings) if with_gateway else None,
        publisher=publisher,
    )

    try:
        yield runtime
    finally:
        # ---- Shutdown ----
        if runtime.gateway is not None:
            await runtime.gateway.aclose()
            logger.info("Gateway HTTP client closed")
        if runtime.publisher is not None:
            await runtime.publisher.disconnect()
        telemetry = get_telemetry()
        if telemetry is not None:
            telemetry.shutdown()
            set_telemetry(None)
