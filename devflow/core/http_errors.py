"""Typed request errors carrying an HTTP status and optional field errors."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    GENERIC = "generic"


DEFAULT_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.GENERIC: 500,
}

FieldErrors = dict[str, list[str]]


class RequestError(Exception):
    """Expected failure with a status code in the 4xx/5xx range.

    ``kind`` is a closed tag; callers dispatch on it rather than on
    subclasses. Build instances with the module-level constructors.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        field_errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        status = DEFAULT_STATUS_CODES[kind] if status_code is None else status_code
        if not 400 <= status <= 599:
            raise ValueError(f"status_code must be within 400-599, got {status}")
        if kind is ErrorKind.VALIDATION and (status != 400 or not field_errors):
            raise ValueError("validation errors require status 400 and field errors")

        super().__init__(message)
        self.kind = kind
        self.status_code = status
        self.message = message
        self.field_errors: FieldErrors | None = (
            {field: list(messages) for field, messages in field_errors.items()}
            if field_errors
            else None
        )

    def __repr__(self) -> str:
        return f"RequestError(kind={self.kind.value!r}, status_code={self.status_code}, message={self.message!r})"


def format_field_errors(field_errors: Mapping[str, Sequence[str]]) -> str:
    """Render field errors as one human-readable sentence.

    ``{"email": ["Required"], "name": ["Too short", "Bad chars"]}`` becomes
    ``"Email is required, Name: Too short and Bad chars"``.
    """
    formatted: list[str] = []
    for field, messages in field_errors.items():
        field_name = field[:1].upper() + field[1:]
        messages = list(messages)
        if messages == ["Required"]:
            formatted.append(f"{field_name} is required")
        else:
            formatted.append(f"{field_name}: {' and '.join(messages)}")
    return ", ".join(formatted)


def validation_error(field_errors: Mapping[str, Sequence[str]]) -> RequestError:
    return RequestError(
        ErrorKind.VALIDATION,
        format_field_errors(field_errors),
        field_errors=field_errors,
    )


def not_found(resource: str = "Resource") -> RequestError:
    return RequestError(ErrorKind.NOT_FOUND, f"{resource} not found")


def forbidden(message: str = "Forbidden") -> RequestError:
    return RequestError(ErrorKind.FORBIDDEN, message)


def unauthorized(message: str = "Unauthorized") -> RequestError:
    return RequestError(ErrorKind.UNAUTHORIZED, message)


def generic(message: str, *, status_code: int = 500) -> RequestError:
    return RequestError(ErrorKind.GENERIC, message, status_code=status_code)
