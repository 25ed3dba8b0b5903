"""Unit tests for the typed request error taxonomy."""

from __future__ import annotations

import pytest

from devflow.core.http_errors import ErrorKind
from devflow.core.http_errors import RequestError
from devflow.core.http_errors import format_field_errors
from devflow.core.http_errors import forbidden
from devflow.core.http_errors import generic
from devflow.core.http_errors import not_found
from devflow.core.http_errors import unauthorized
from devflow.core.http_errors import validation_error


@pytest.mark.parametrize("field", ["email", "name", "providerAccountId"])
def test_single_required_message_renders_is_required(field: str) -> None:
    expected = f"{field[0].upper()}{field[1:]} is required"

    assert format_field_errors({field: ["Required"]}) == expected


def test_multiple_messages_and_fields_are_joined() -> None:
    message = format_field_errors(
        {
            "password": ["Too short", "Needs a number"],
            "email": ["Required"],
            "username": ["Taken"],
        }
    )

    assert message == "Password: Too short and Needs a number, Email is required, Username: Taken"


def test_required_among_other_messages_is_not_special_cased() -> None:
    assert format_field_errors({"email": ["Required", "Invalid"]}) == "Email: Required and Invalid"


def test_validation_error_carries_400_and_field_errors() -> None:
    error = validation_error({"email": ["Required"]})

    assert error.kind is ErrorKind.VALIDATION
    assert error.status_code == 400
    assert error.message == "Email is required"
    assert error.field_errors == {"email": ["Required"]}
    assert str(error) == "Email is required"


def test_validation_error_requires_field_errors() -> None:
    with pytest.raises(ValueError):
        validation_error({})


def test_not_found_defaults_and_resource_name() -> None:
    assert not_found().message == "Resource not found"
    error = not_found("User")
    assert error.kind is ErrorKind.NOT_FOUND
    assert error.status_code == 404
    assert error.message == "User not found"
    assert error.field_errors is None


def test_forbidden_and_unauthorized_defaults() -> None:
    assert (forbidden().status_code, forbidden().message) == (403, "Forbidden")
    assert (unauthorized().status_code, unauthorized().message) == (401, "Unauthorized")
    assert forbidden("No access").message == "No access"


def test_generic_defaults_to_500_and_accepts_upstream_status() -> None:
    assert generic("boom").status_code == 500
    error = generic("HTTP error: 404", status_code=404)
    assert error.kind is ErrorKind.GENERIC
    assert error.status_code == 404


@pytest.mark.parametrize("status_code", [200, 302, 399, 600])
def test_status_codes_outside_error_range_are_rejected(status_code: int) -> None:
    with pytest.raises(ValueError):
        RequestError(ErrorKind.GENERIC, "nope", status_code=status_code)
