"""Unit tests for request schema rules and their error messages."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import BaseModel
from pydantic import ValidationError

from devflow.core.handlers import flatten_validation_issues
from devflow.schemas.account import AccountCreate
from devflow.schemas.account import ProviderLookup
from devflow.schemas.auth import SignInWithOAuth
from devflow.schemas.question import AskQuestion
from devflow.schemas.user import UserCreate
from devflow.schemas.user import UserUpdate
from devflow.schemas.validators import Password

USER_ID = "5f8d0d55b54764421b7156c9"


class _PasswordHolder(BaseModel):
    password: Password


def _field_errors(model: type[BaseModel], payload: dict[str, Any]) -> dict[str, list[str]]:
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(payload)
    return flatten_validation_issues(exc_info.value.errors())


def test_weak_password_reports_every_failed_rule() -> None:
    errors = _field_errors(_PasswordHolder, {"password": "abc"})

    assert errors == {
        "password": [
            "Password must be at least 6 characters long.",
            "Password must contain at least one uppercase letter.",
            "Password must contain at least one number.",
            "Password must contain at least one special character.",
        ]
    }


def test_strong_password_is_accepted() -> None:
    assert _PasswordHolder(password="Secr3t!pass").password == "Secr3t!pass"


@pytest.mark.parametrize(
    ("username", "message"),
    [
        ("ab", "Username must be at least 3 characters long."),
        ("a" * 31, "Username cannot exceed 30 characters."),
        ("ada lovelace", "Username can only contain letters, numbers, and underscores."),
        ("ada__l", "Username cannot contain consecutive underscores."),
        ("_ada", "Username cannot start or end with an underscore."),
    ],
)
def test_username_rules(username: str, message: str) -> None:
    errors = _field_errors(
        UserCreate,
        {"name": "Ada", "username": username, "email": "ada@example.com"},
    )

    assert message in errors["username"]


def test_user_create_requires_core_fields() -> None:
    errors = _field_errors(UserCreate, {})

    assert errors == {"name": ["Required"], "username": ["Required"], "email": ["Required"]}


def test_user_create_rejects_bad_urls_and_accepts_camel_case() -> None:
    errors = _field_errors(
        UserCreate,
        {
            "name": "Ada",
            "username": "ada_l",
            "email": "ada@example.com",
            "image": "not a url",
            "portfolio": "https://ada.dev",
        },
    )
    assert errors == {"image": ["Please provide a valid URL."]}


def test_user_update_accepts_partial_payload() -> None:
    update = UserUpdate.model_validate({"bio": "Mathematician"})

    assert update.model_dump(exclude_unset=True) == {"bio": "Mathematician"}


def test_account_create_uses_camel_case_keys() -> None:
    account = AccountCreate.model_validate(
        {
            "userId": USER_ID,
            "name": "Ada",
            "provider": "github",
            "providerAccountId": "gh_123-x",
        }
    )

    assert account.user_id == USER_ID
    assert account.provider_account_id == "gh_123-x"


def test_account_create_reports_id_formats() -> None:
    errors = _field_errors(
        AccountCreate,
        {
            "userId": "not-an-id",
            "name": "Ada",
            "provider": "github",
            "providerAccountId": "has spaces",
        },
    )

    assert errors == {
        "userId": ["Invalid ID format."],
        "providerAccountId": ["Invalid Provider Account ID format."],
    }


def test_provider_lookup_only_needs_provider_account_id() -> None:
    lookup = ProviderLookup.model_validate({"providerAccountId": "12345"})

    assert lookup.provider_account_id == "12345"


def test_oauth_sign_in_validates_provider_and_nested_user() -> None:
    errors = _field_errors(
        SignInWithOAuth,
        {
            "provider": "gitlab",
            "providerAccountId": "",
            "user": {"name": "Ada", "username": "ada", "email": "nope"},
        },
    )

    assert set(errors) == {"provider", "providerAccountId", "user.email"}
    assert errors["providerAccountId"] == ["Provider Account ID is required."]
    assert errors["user.email"] == ["Please provide a valid email address."]


@pytest.mark.parametrize(
    ("tags", "message"),
    [
        ([], "At least one tag is required."),
        (["a", "b", "c", "d"], "Cannot add more than 3 tags."),
    ],
)
def test_question_tag_count(tags: list[str], message: str) -> None:
    errors = _field_errors(
        AskQuestion,
        {"title": "A fine title", "content": "Body", "tags": tags},
    )

    assert errors == {"tags": [message]}


def test_question_tag_length_and_title_bounds() -> None:
    errors = _field_errors(
        AskQuestion,
        {"title": "x" * 101, "content": "Body", "tags": ["t" * 31]},
    )

    assert errors == {
        "title": ["Title cannot exceed 100 characters."],
        "tags.0": ["Tag cannot exceed 30 characters."],
    }
