"""Response envelope schemas shared across routes and server actions."""

from __future__ import annotations

from typing import Generic
from typing import Literal
from typing import TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ErrorObject(BaseModel):
    """Canonical error payload object."""

    message: str
    details: dict[str, list[str]] | None = None


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    success: Literal[False] = False
    error: ErrorObject


class SuccessResponse(BaseModel, Generic[DataT]):
    """Envelope returned for every successful request."""

    success: Literal[True] = True
    data: DataT
