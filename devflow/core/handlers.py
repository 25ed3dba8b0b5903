"""Error normalisation into the response envelope, plus FastAPI handler wiring."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
import logging
from typing import Any
from typing import Literal

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devflow.core.http_errors import FieldErrors
from devflow.core.http_errors import RequestError
from devflow.core.http_errors import validation_error
from devflow.schemas.envelope import ErrorObject
from devflow.schemas.envelope import ErrorResponse
from devflow.schemas.validators import RuleViolation

logger = logging.getLogger(__name__)

ResponseType = Literal["api", "server"]

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _format_response(
    response_type: ResponseType,
    status_code: int,
    message: str,
    details: FieldErrors | None = None,
) -> JSONResponse | dict[str, Any]:
    payload = ErrorResponse(error=ErrorObject(message=message, details=details))
    content = payload.model_dump(exclude_none=True)
    if response_type == "api":
        return JSONResponse(status_code=status_code, content=content)
    return {"status": status_code, **content}


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in _LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _issue_messages(issue: Mapping[str, Any]) -> list[str]:
    if issue.get("type") == "missing":
        return ["Required"]

    ctx = issue.get("ctx") or {}
    error = ctx.get("error")
    if isinstance(error, RuleViolation):
        return list(error.messages)
    if isinstance(error, Exception) and str(error):
        return [str(error)]
    return [str(issue.get("msg", "Invalid value"))]


def flatten_validation_issues(issues: Iterable[Mapping[str, Any]]) -> FieldErrors:
    """Group schema issues by field, keeping every message in order."""
    field_errors: FieldErrors = {}
    for issue in issues:
        field = _format_location(issue.get("loc", ()))
        field_errors.setdefault(field, []).extend(_issue_messages(issue))
    return field_errors


def handle_error(
    error: object,
    response_type: ResponseType = "server",
) -> JSONResponse | dict[str, Any]:
    """Turn any raised value into the failure envelope.

    ``"api"`` returns a ``JSONResponse`` carrying the status code; ``"server"``
    returns the bare envelope dict with a ``status`` key, for call sites that
    are not HTTP handlers.
    """
    if isinstance(error, RequestError):
        logger.error("%s error: %s", error.kind.value, error.message)
        return _format_response(response_type, error.status_code, error.message, error.field_errors)

    if isinstance(error, (ValidationError, RequestValidationError)):
        converted = validation_error(flatten_validation_issues(error.errors()))
        logger.error("schema validation error: %s", converted.message)
        return _format_response(
            response_type,
            converted.status_code,
            converted.message,
            converted.field_errors,
        )

    if isinstance(error, Exception):
        logger.error("unexpected %s: %s", type(error).__name__, error, exc_info=error)
        return _format_response(response_type, status.HTTP_500_INTERNAL_SERVER_ERROR, str(error))

    logger.error("non-exception value raised: %r", error)
    return _format_response(
        response_type,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        UNEXPECTED_ERROR_MESSAGE,
    )


async def request_error_handler(_: Request, exc: RequestError) -> JSONResponse:
    """Return typed errors in the shared envelope."""

    return handle_error(exc, "api")


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI payload validation errors to a 400 envelope."""

    return handle_error(exc, "api")


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, bad method) in the envelope."""

    message = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
    logger.error("http error %s: %s", exc.status_code, message)
    return _format_response("api", exc.status_code, message)


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Keep the response shape stable for anything nothing else caught."""

    return handle_error(exc, "api")


def register_error_handlers(app: FastAPI) -> None:
    """Attach all envelope error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestError, request_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
