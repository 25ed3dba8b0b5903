"""Shared validate, authorize and connect sequence for server-side actions."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError

from devflow.core.auth import AuthSession
from devflow.core.auth import SessionProvider
from devflow.core.auth import get_session_provider
from devflow.core.handlers import flatten_validation_issues
from devflow.core.http_errors import generic
from devflow.core.http_errors import unauthorized
from devflow.core.http_errors import validation_error
from devflow.db.base import Database
from devflow.db.base import get_database

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT", bound=BaseModel)


@dataclass(frozen=True)
class ActionContext(Generic[ParamsT]):
    """Validated params and the caller's session (``None`` unless authorized)."""

    params: ParamsT | Any
    session: AuthSession | None


def run_action(
    params: Any = None,
    schema: type[ParamsT] | None = None,
    authorize: bool = False,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> ActionContext[ParamsT]:
    """Validate params, require a session if asked, then ensure storage is connected.

    Each step raises a ``RequestError`` on failure and the remaining steps do
    not run. When both ``schema`` and ``params`` are given the returned params
    are the validated model instance.
    """
    validated: Any = params
    if schema is not None and params is not None:
        try:
            validated = schema.model_validate(params)
        except ValidationError as exc:
            raise validation_error(flatten_validation_issues(exc.errors())) from exc
        except Exception as exc:
            logger.error("Schema %s failed unexpectedly: %s", schema.__name__, exc)
            raise generic("Schema validation failed: Unexpected error occurred.") from exc

    session: AuthSession | None = None
    if authorize:
        session = (session_provider or get_session_provider()).get_session()
        if session is None:
            raise unauthorized()

    (database or get_database()).connect()

    return ActionContext(params=validated, session=session)
