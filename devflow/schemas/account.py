"""Pydantic schemas for account API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import ConfigDict

from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import ObjectId
from devflow.schemas.validators import Password
from devflow.schemas.validators import PersonName
from devflow.schemas.validators import Url
from devflow.schemas.validators import matching
from devflow.schemas.validators import non_empty
from devflow.schemas.validators import not_null

ProviderName = Annotated[str, non_empty("Provider is required.")]
ProviderAccountId = Annotated[
    str,
    matching(r"^[a-zA-Z0-9_-]+$", "Invalid Provider Account ID format."),
]


class AccountCreate(CamelModel):
    """Payload to link a provider account to a user."""

    user_id: ObjectId
    name: PersonName
    image: Url | None = None
    password: Password | None = None
    provider: ProviderName
    provider_account_id: ProviderAccountId


class AccountUpdate(CamelModel):
    """Partial payload to update an account."""

    user_id: Annotated[ObjectId | None, not_null("User ID cannot be null.")] = None
    name: Annotated[PersonName | None, not_null("Name cannot be null.")] = None
    image: Url | None = None
    password: Password | None = None
    provider: Annotated[ProviderName | None, not_null("Provider cannot be null.")] = None
    provider_account_id: Annotated[
        ProviderAccountId | None,
        not_null("Provider Account ID cannot be null."),
    ] = None


class ProviderLookup(CamelModel):
    """Payload to look up an account by its provider account id."""

    provider_account_id: ProviderAccountId


class Account(CamelModel):
    """Account response payload; the password never leaves the service."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    image: str | None = None
    provider: str
    provider_account_id: str
    created_at: datetime
    updated_at: datetime
