"""HttpTaskStatusGateway tests using httpx.MockTransport."""

import json

import httpx
import pytest

from scrumboard.core.config import Settings
from scrumboard.domain.enums import TaskStatus
from scrumboard.domain.exceptions import (
    InvalidTaskTransitionException,
    TaskNotAssignableException,
    TaskNotFoundException,
)
from scrumboard.infrastructure.exceptions import TaskStatusGatewayError
from scrumboard.infrastructure.http.task_status_gateway import HttpTaskStatusGateway


def _gateway(handler, **settings) -> HttpTaskStatusGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTaskStatusGateway(
        Settings(api_base_url="https://board.example.com/api/", **settings),
        http_client=client,
    )


def _envelope(status_code: int, error: str, details: dict | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            json={"error": error, "message": "refused", "details": details or {}},
        )

    return handler


class TestUpdateStatus:
    async def test_sends_patch_with_status(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "t1", "status": "DONE"})

        await _gateway(handler, access_token="secret").update_status("t1", TaskStatus.DONE)

        request = seen[0]
        assert request.method == "PATCH"
        assert str(request.url) == "https://board.example.com/api/tasks/t1/status"
        assert json.loads(request.content) == {"status": "DONE"}
        assert request.headers["Authorization"] == "Bearer secret"

    async def test_no_token_no_auth_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        await _gateway(handler).update_status("t1", "IN_PROGRESS")
        assert "Authorization" not in seen[0].headers

    async def test_task_id_is_escaped(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        await _gateway(handler).update_status("a/b", TaskStatus.DONE)
        assert seen[0].url.raw_path == b"/api/tasks/a%2Fb/status"

    async def test_invalid_transition(self) -> None:
        gateway = _gateway(
            _envelope(400, "INVALID_TRANSITION", {"from_status": "DONE", "to_status": "TODO"})
        )
        with pytest.raises(InvalidTaskTransitionException) as exc_info:
            await gateway.update_status("t1", TaskStatus.TODO)
        assert exc_info.value.from_status is TaskStatus.DONE
        assert exc_info.value.to_status is TaskStatus.TODO

    async def test_invalid_transition_without_details(self) -> None:
        gateway = _gateway(_envelope(400, "INVALID_TRANSITION"))
        with pytest.raises(InvalidTaskTransitionException) as exc_info:
            await gateway.update_status("t1", TaskStatus.TODO)
        assert exc_info.value.from_status is TaskStatus.DONE

    async def test_not_assignable(self) -> None:
        gateway = _gateway(
            _envelope(409, "TASK_NOT_ASSIGNABLE", {"reason": "Interns can only update their own assigned tasks"})
        )
        with pytest.raises(TaskNotAssignableException) as exc_info:
            await gateway.update_status("t1", TaskStatus.DONE)
        assert exc_info.value.reason == "Interns can only update their own assigned tasks"

    async def test_not_found(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(404, text="Not Found"))
        with pytest.raises(TaskNotFoundException):
            await gateway.update_status("t1", TaskStatus.DONE)

    async def test_server_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(TaskStatusGatewayError) as exc_info:
            await gateway.update_status("t1", TaskStatus.DONE)
        assert exc_info.value.status_code == 500

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TaskStatusGatewayError) as exc_info:
            await _gateway(handler).update_status("t1", TaskStatus.DONE)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestLifecycle:
    async def test_injected_client_not_closed(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        gateway = HttpTaskStatusGateway(Settings(), http_client=client)
        await gateway.aclose()
        assert not client.is_closed
        await client.aclose()

    async def test_owned_client_closed(self) -> None:
        gateway = HttpTaskStatusGateway(Settings(request_timeout_seconds=2.5))
        assert gateway._http.timeout.connect == 2.5
        await gateway.aclose()
        assert gateway._http.is_closed
