"""Repository primitives for user documents."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_
from sqlalchemy import select
from sqlalchemy.orm import Session

from devflow.db.models.user import User


def create_user(session: Session, **fields: Any) -> User:
    """Create and return a user row."""
    user = User(**fields)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: str) -> User | None:
    """Fetch a user by id."""
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalars(select(User).where(User.email == email)).first()


def find_user_by_email_or_username(session: Session, *, email: str, username: str) -> User | None:
    """Return any user already holding the email or the username."""
    stmt = select(User).where(or_(User.email == email, User.username == username))
    return session.scalars(stmt.limit(1)).first()


def list_users(session: Session, *, limit: int = 100, offset: int = 0) -> list[User]:
    """List users, newest first."""
    stmt = select(User).order_by(User.created_at.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def update_user(session: Session, user: User, **changes: Any) -> User:
    """Apply the given field changes to a user."""
    for field, value in changes.items():
        setattr(user, field, value)
    session.flush()
    session.refresh(user)
    return user


def delete_user(session: Session, user: User) -> User:
    """Delete a user; linked accounts go with it."""
    session.delete(user)
    session.flush()
    return user
