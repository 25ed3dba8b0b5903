"""Service helpers for user API operations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devflow.core.http_errors import generic
from devflow.core.http_errors import not_found
from devflow.db.base import violates
from devflow.db.repository.users import create_user
from devflow.db.repository.users import delete_user
from devflow.db.repository.users import find_user_by_email_or_username
from devflow.db.repository.users import get_user
from devflow.db.repository.users import get_user_by_email
from devflow.db.repository.users import list_users
from devflow.db.repository.users import update_user
from devflow.schemas.user import UserCreate
from devflow.schemas.user import UserUpdate

DUPLICATE_EMAIL_MESSAGE = "A user with this email already exists"
DUPLICATE_USERNAME_MESSAGE = "The username is already taken"


def _is_duplicate_email(exc: IntegrityError) -> bool:
    return violates(exc, "uq_users_email", sqlite_message="users.email")


def list_users_service(session: Session):
    """List all users."""
    return list_users(session)


def create_user_service(session: Session, payload: UserCreate):
    """Create a user unless the email or username is already in use.

    The existence check and the insert are separate statements; two identical
    concurrent requests can both pass the check, and the loser then trips the
    email unique constraint, reported with the same generic 500.
    """
    existing = find_user_by_email_or_username(session, email=payload.email, username=payload.username)
    if existing is not None:
        raise generic(
            DUPLICATE_EMAIL_MESSAGE if existing.email == payload.email else DUPLICATE_USERNAME_MESSAGE
        )

    try:
        user = create_user(session, **payload.model_dump(exclude_none=True))
        session.commit()
        return user
    except IntegrityError as exc:
        session.rollback()
        if _is_duplicate_email(exc):
            raise generic(DUPLICATE_EMAIL_MESSAGE) from exc
        raise


def get_user_service(session: Session, user_id: str):
    """Fetch a user or raise not found."""
    if not user_id:
        raise not_found("User")
    user = get_user(session, user_id)
    if user is None:
        raise not_found("User")
    return user


def get_user_by_email_service(session: Session, email: str):
    """Fetch a user by email or raise not found."""
    user = get_user_by_email(session, email)
    if user is None:
        raise not_found("User")
    return user


def update_user_service(session: Session, user_id: str, payload: UserUpdate):
    """Apply a partial update to an existing user."""
    user = get_user_service(session, user_id)
    try:
        user = update_user(session, user, **payload.model_dump(exclude_unset=True))
        session.commit()
        return user
    except IntegrityError as exc:
        session.rollback()
        if _is_duplicate_email(exc):
            raise generic(DUPLICATE_EMAIL_MESSAGE) from exc
        raise


def delete_user_service(session: Session, user_id: str):
    """Delete a user and return the removed row."""
    user = get_user_service(session, user_id)
    user = delete_user(session, user)
    session.commit()
    return user
