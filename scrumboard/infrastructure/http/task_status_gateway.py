"""HTTP gateway behind a card drag: PATCH {api_base_url}/tasks/{id}/status.

Uses httpx.AsyncClient so the call does not block the event loop. Error
responses carry the envelope {"error": code, "message": ..., "details": {}}
and are turned back into the matching domain exception.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from scrumboard.core.config import Settings, get_settings
from scrumboard.domain.entities.task import FORBIDDEN_TRANSITIONS
from scrumboard.domain.enums import TaskStatus
from scrumboard.domain.exceptions import (
    InvalidTaskTransitionException,
    ScrumboardException,
    TaskNotAssignableException,
    TaskNotFoundException,
)
from scrumboard.infrastructure.exceptions import TaskStatusGatewayError
from scrumboard.shared.telemetry.logging import get_logger
from scrumboard.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


def _read_envelope(resp: httpx.Response) -> dict[str, Any]:
    """Return the JSON error envelope, or {} when the body is not one."""
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _source_status(details: dict[str, Any], to_status: TaskStatus) -> TaskStatus:
    """from_status of a refused move: from the envelope, else the forbidden edge into to_status."""
    raw = details.get("from_status")
    if raw in TaskStatus.values():
        return TaskStatus(raw)
    for source, target in FORBIDDEN_TRANSITIONS:
        if target == to_status:
            return source
    return to_status


def error_from_response(
    task_id: str, status: TaskStatus, resp: httpx.Response
) -> ScrumboardException:
    """Map an error response to the domain exception it stands for."""
    envelope = _read_envelope(resp)
    code = envelope.get("error")
    details = envelope.get("details") or {}
    message = envelope.get("message") or resp.reason_phrase or "unexpected response"
    if code == "INVALID_TRANSITION":
        return InvalidTaskTransitionException(_source_status(details, status), status)
    if code == "TASK_NOT_ASSIGNABLE":
        return TaskNotAssignableException(task_id, details.get("reason") or message)
    if code == "RESOURCE_NOT_FOUND" or resp.status_code == 404:
        return TaskNotFoundException(task_id)
    return TaskStatusGatewayError(task_id, str(message), resp.status_code)


class HttpTaskStatusGateway:
    """ITaskStatusGateway over the board's REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._base_url = self.settings.api_base_url.rstrip("/")
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.request_timeout_seconds)
            )
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.access_token:
            headers["Authorization"] = (
                f"Bearer {self.settings.access_token.get_secret_value()}"
            )
        return headers

    @traced("gateway.update_task_status")
    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        """Ask the server to move the task.

        Raises:
            InvalidTaskTransitionException: Server refused the DONE -> TODO move.
            TaskNotAssignableException: Requester may not move this task.
            TaskNotFoundException: Task no longer exists.
            TaskStatusGatewayError: Transport failure or any other error response.
        """
        status = TaskStatus(status)
        add_span_attributes(task_id=task_id, status=status.value)
        url = f"{self._base_url}/tasks/{quote(task_id, safe='')}/status"
        try:
            resp = await self._http.patch(
                url, headers=self._headers(), json={"status": status.value}
            )
        except httpx.HTTPError as e:
            logger.warning("Task status request failed: task=%s error=%s", task_id, e)
            raise TaskStatusGatewayError(task_id, str(e) or type(e).__name__) from e

        if resp.is_success:
            logger.debug("Task status updated remotely: task=%s status=%s", task_id, status.value)
            return
        error = error_from_response(task_id, status, resp)
        logger.info(
            "Task status refused: task=%s http=%d error=%s",
            task_id,
            resp.status_code,
            error.error_code,
        )
        raise error
