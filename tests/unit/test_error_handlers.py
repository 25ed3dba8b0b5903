"""Unit tests for error normalisation and the FastAPI envelope handlers."""

from __future__ import annotations

import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from pydantic import BaseModel
from pydantic import ValidationError

from devflow.core.handlers import UNEXPECTED_ERROR_MESSAGE
from devflow.core.handlers import flatten_validation_issues
from devflow.core.handlers import handle_error
from devflow.core.handlers import register_error_handlers
from devflow.core.http_errors import forbidden
from devflow.core.http_errors import not_found
from devflow.core.http_errors import validation_error
from devflow.schemas.user import UserCreate


class _Profile(BaseModel):
    email: str
    age: int


def _pydantic_error() -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        _Profile.model_validate({"age": "not-a-number"})
    return exc_info.value


def _body(response: JSONResponse) -> dict:
    return json.loads(response.body)


def _build_client() -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/query")
    def query(limit: int) -> dict[str, int]:
        return {"limit": limit}

    @app.get("/not-found")
    def missing() -> None:
        raise not_found("Question")

    @app.get("/validation")
    def invalid() -> None:
        raise validation_error({"title": ["Too short"]})

    @app.get("/crash")
    def crash() -> None:
        raise RuntimeError("database exploded")

    return TestClient(app, raise_server_exceptions=False)


def test_typed_error_in_api_mode_sets_status_and_message() -> None:
    response = handle_error(forbidden("Not yours"), "api")

    assert isinstance(response, JSONResponse)
    assert response.status_code == 403
    assert _body(response) == {"success": False, "error": {"message": "Not yours"}}


def test_typed_error_in_server_mode_returns_bare_envelope() -> None:
    result = handle_error(not_found("User"))

    assert result == {
        "status": 404,
        "success": False,
        "error": {"message": "User not found"},
    }


def test_field_errors_are_returned_as_details() -> None:
    result = handle_error(validation_error({"email": ["Required"]}), "server")

    assert result["status"] == 400
    assert result["error"] == {"message": "Email is required", "details": {"email": ["Required"]}}


def test_schema_validation_failures_become_validation_errors() -> None:
    response = handle_error(_pydantic_error(), "api")

    assert response.status_code == 400
    payload = _body(response)
    assert payload["success"] is False
    assert payload["error"]["details"]["email"] == ["Required"]
    assert "age" in payload["error"]["details"]
    assert payload["error"]["message"].startswith("Email is required, Age: ")


def test_custom_rule_messages_are_used_verbatim() -> None:
    with pytest.raises(ValidationError) as exc_info:
        UserCreate.model_validate({"name": "Ada", "username": "ada", "email": "not-an-email"})

    details = flatten_validation_issues(exc_info.value.errors())

    assert details == {"email": ["Please provide a valid email address."]}


@pytest.mark.parametrize("message", ["boom", "duplicate key", ""])
def test_generic_exceptions_always_map_to_500(message: str) -> None:
    result = handle_error(RuntimeError(message), "server")

    assert result["status"] == 500
    assert result["error"]["message"] == message


def test_non_exception_values_use_fixed_message() -> None:
    result = handle_error("a string was raised somehow", "server")

    assert result == {
        "status": 500,
        "success": False,
        "error": {"message": UNEXPECTED_ERROR_MESSAGE},
    }


def test_every_branch_logs_at_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="devflow.core.handlers"):
        handle_error(not_found("User"))
        handle_error(_pydantic_error())
        handle_error(ValueError("bad"))
        handle_error(42)

    assert len(caplog.records) == 4
    assert all(record.levelno == logging.ERROR for record in caplog.records)


def test_request_validation_errors_are_normalized_to_envelope() -> None:
    client = _build_client()

    response = client.get("/query")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {"message": "Limit is required", "details": {"limit": ["Required"]}},
    }


def test_raised_typed_errors_use_shared_envelope() -> None:
    client = _build_client()

    response = client.get("/not-found")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": {"message": "Question not found"}}

    response = client.get("/validation")

    assert response.status_code == 400
    assert response.json()["error"] == {
        "message": "Title: Too short",
        "details": {"title": ["Too short"]},
    }


def test_unknown_routes_are_wrapped_in_shared_envelope() -> None:
    client = _build_client()

    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": {"message": "Not Found"}}


def test_unhandled_exceptions_become_500_envelopes() -> None:
    client = _build_client()

    response = client.get("/crash")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": {"message": "database exploded"}}
