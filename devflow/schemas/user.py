"""Pydantic schemas for user API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import ConfigDict

from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import Email
from devflow.schemas.validators import PersonName
from devflow.schemas.validators import Url
from devflow.schemas.validators import Username
from devflow.schemas.validators import not_null


class UserCreate(CamelModel):
    """Payload to create a user."""

    name: PersonName
    username: Username
    email: Email
    bio: str | None = None
    image: Url | None = None
    location: str | None = None
    portfolio: Url | None = None
    reputation: int | None = None


class UserUpdate(CamelModel):
    """Partial payload to update a user."""

    name: Annotated[PersonName | None, not_null("Name cannot be null.")] = None
    username: Annotated[Username | None, not_null("Username cannot be null.")] = None
    email: Annotated[Email | None, not_null("Email cannot be null.")] = None
    bio: str | None = None
    image: Url | None = None
    location: str | None = None
    portfolio: Url | None = None
    reputation: Annotated[int | None, not_null("Reputation cannot be null.")] = None


class EmailLookup(CamelModel):
    """Payload to look up a user by email."""

    email: Email


class User(CamelModel):
    """User response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    username: str
    email: str
    bio: str | None = None
    image: str | None = None
    location: str | None = None
    portfolio: str | None = None
    reputation: int
    created_at: datetime
    updated_at: datetime
