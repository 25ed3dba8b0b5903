"""Pydantic schemas for the OAuth sign-in flow."""

from __future__ import annotations

from typing import Annotated
from typing import Literal

from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import Email
from devflow.schemas.validators import PersonName
from devflow.schemas.validators import Url
from devflow.schemas.validators import Username
from devflow.schemas.validators import non_empty


class OAuthUser(CamelModel):
    """Profile fields supplied by the identity provider."""

    name: PersonName
    username: Username
    email: Email
    image: Url | None = None


class SignInWithOAuth(CamelModel):
    """Payload posted after a successful provider login."""

    provider: Literal["google", "github"]
    provider_account_id: Annotated[str, non_empty("Provider Account ID is required.")]
    user: OAuthUser
