"""Repository primitives for account documents."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from devflow.db.models.account import Account


def create_account(session: Session, **fields: Any) -> Account:
    """Create and return an account row."""
    account = Account(**fields)
    session.add(account)
    session.flush()
    session.refresh(account)
    return account


def get_account(session: Session, account_id: str) -> Account | None:
    """Fetch an account by id."""
    return session.get(Account, account_id)


def find_account(
    session: Session,
    *,
    provider: str,
    provider_account_id: str,
    user_id: str | None = None,
) -> Account | None:
    """Find the account for a provider identity, optionally scoped to a user."""
    stmt = select(Account).where(
        Account.provider == provider,
        Account.provider_account_id == provider_account_id,
    )
    if user_id is not None:
        stmt = stmt.where(Account.user_id == user_id)
    return session.scalars(stmt.limit(1)).first()


def get_account_by_provider_account_id(session: Session, provider_account_id: str) -> Account | None:
    stmt = select(Account).where(Account.provider_account_id == provider_account_id)
    return session.scalars(stmt.limit(1)).first()


def list_accounts(
    session: Session,
    *,
    user_id: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Account]:
    """List accounts with optional owner filtering."""
    stmt = select(Account)
    if user_id is not None:
        stmt = stmt.where(Account.user_id == user_id)
    stmt = stmt.order_by(Account.created_at.desc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def update_account(session: Session, account: Account, **changes: Any) -> Account:
    """Apply the given field changes to an account."""
    for field, value in changes.items():
        setattr(account, field, value)
    session.flush()
    session.refresh(account)
    return account


def delete_account(session: Session, account: Account) -> Account:
    """Delete an account row."""
    session.delete(account)
    session.flush()
    return account
