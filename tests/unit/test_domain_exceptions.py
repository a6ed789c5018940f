"""Tests for domain exceptions (error_code, message, details) and the result type."""

from datetime import date

import pytest

from scrumboard.domain.enums import TaskStatus
from scrumboard.domain.exceptions import (
    AuthorizationException,
    InvalidInputException,
    InvalidTaskTransitionException,
    ResourceNotFoundException,
    ScrumboardException,
    ScrumNoteAlreadyExistsException,
    ScrumNoteNotFoundException,
    TaskNotAssignableException,
    TaskNotFoundException,
    UserNotFoundException,
)
from scrumboard.domain.result import Err, Ok
from scrumboard.infrastructure.exceptions import TaskStatusGatewayError


def test_base_exception_default_error_code() -> None:
    """Base ScrumboardException uses class name as error_code when not provided."""
    exc = ScrumboardException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ScrumboardException"
    assert exc.details == {}


def test_to_dict_envelope() -> None:
    exc = ScrumboardException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_invalid_input_exception() -> None:
    exc = InvalidInputException("title", "cannot be empty")
    assert exc.error_code == "INVALID_INPUT"
    assert exc.field == "title"
    assert exc.reason == "cannot be empty"
    assert exc.details == {"field": "title", "reason": "cannot be empty"}
    assert "title" in exc.message


def test_invalid_transition_exception_coerces_strings() -> None:
    exc = InvalidTaskTransitionException("DONE", "TODO")
    assert exc.error_code == "INVALID_TRANSITION"
    assert exc.from_status is TaskStatus.DONE
    assert exc.to_status is TaskStatus.TODO
    assert exc.details == {"from_status": "DONE", "to_status": "TODO"}


def test_task_not_assignable_exception() -> None:
    exc = TaskNotAssignableException("t1", "Only admins can assign tasks")
    assert exc.error_code == "TASK_NOT_ASSIGNABLE"
    assert exc.task_id == "t1"
    assert exc.details["reason"] == "Only admins can assign tasks"


def test_authorization_exception() -> None:
    exc = AuthorizationException("u1", "delete scrum note")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"user_id": "u1", "action": "delete scrum note"}


@pytest.mark.parametrize(
    ("exc", "resource_type"),
    [
        (TaskNotFoundException("x"), "task"),
        (UserNotFoundException("x"), "user"),
        (ScrumNoteNotFoundException("x"), "scrum_note"),
    ],
)
def test_not_found_subclasses(exc: ResourceNotFoundException, resource_type: str) -> None:
    assert isinstance(exc, ResourceNotFoundException)
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": resource_type, "resource_id": "x"}


def test_scrum_note_already_exists() -> None:
    exc = ScrumNoteAlreadyExistsException("u1", date(2025, 3, 10))
    assert exc.error_code == "SCRUM_NOTE_ALREADY_EXISTS"
    assert exc.details == {"user_id": "u1", "date": "2025-03-10"}


def test_gateway_error_is_domain_exception() -> None:
    exc = TaskStatusGatewayError("t1", "timeout", 504)
    assert isinstance(exc, ScrumboardException)
    assert exc.error_code == "TASK_STATUS_GATEWAY_ERROR"
    assert exc.status_code == 504


class TestResult:
    def test_ok(self) -> None:
        r = Ok(42)
        assert r.is_ok() and not r.is_err()
        assert r.unwrap() == 42
        with pytest.raises(ValueError):
            r.unwrap_err()

    def test_err_unwrap_raises_carried_error(self) -> None:
        error = TaskNotFoundException("t1")
        r = Err(error)
        assert r.is_err() and not r.is_ok()
        assert r.unwrap_err() is error
        with pytest.raises(TaskNotFoundException) as exc_info:
            r.unwrap()
        assert exc_info.value is error

    def test_pattern_matching(self) -> None:
        match Ok("v"):
            case Ok(value):
                assert value == "v"
            case Err():
                pytest.fail("expected Ok")
