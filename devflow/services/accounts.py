"""Service helpers for account API operations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devflow.core.http_errors import forbidden
from devflow.core.http_errors import not_found
from devflow.core.http_errors import validation_error
from devflow.db.base import violates
from devflow.db.repository.accounts import create_account
from devflow.db.repository.accounts import delete_account
from devflow.db.repository.accounts import find_account
from devflow.db.repository.accounts import get_account
from devflow.db.repository.accounts import get_account_by_provider_account_id
from devflow.db.repository.accounts import list_accounts
from devflow.db.repository.accounts import update_account
from devflow.schemas.account import AccountCreate
from devflow.schemas.account import AccountUpdate


def _raise_unknown_user(exc: IntegrityError) -> None:
    if violates(exc, "fk_accounts_user_id_users", sqlite_message="FOREIGN KEY constraint failed"):
        raise validation_error({"userId": ["User does not exist."]}) from exc
    raise exc


def list_accounts_service(session: Session):
    """List all accounts."""
    return list_accounts(session)


def create_account_service(session: Session, payload: AccountCreate):
    """Link a provider identity unless that identity is already linked."""
    existing = find_account(
        session,
        provider=payload.provider,
        provider_account_id=payload.provider_account_id,
    )
    if existing is not None:
        raise forbidden("An account with the same provider already exists")

    try:
        account = create_account(session, **payload.model_dump(exclude_none=True))
        session.commit()
        return account
    except IntegrityError as exc:
        session.rollback()
        _raise_unknown_user(exc)


def get_account_service(session: Session, account_id: str):
    """Fetch an account or raise not found."""
    if not account_id:
        raise not_found("Account")
    account = get_account(session, account_id)
    if account is None:
        raise not_found("Account")
    return account


def get_account_by_provider_service(session: Session, provider_account_id: str):
    """Fetch the account for a provider account id or raise not found."""
    account = get_account_by_provider_account_id(session, provider_account_id)
    if account is None:
        raise not_found("Account")
    return account


def update_account_service(session: Session, account_id: str, payload: AccountUpdate):
    """Apply a partial update to an existing account."""
    account = get_account_service(session, account_id)
    try:
        account = update_account(session, account, **payload.model_dump(exclude_unset=True))
        session.commit()
        return account
    except IntegrityError as exc:
        session.rollback()
        _raise_unknown_user(exc)


def delete_account_service(session: Session, account_id: str):
    """Delete an account and return the removed row."""
    account = get_account_service(session, account_id)
    account = delete_account(session, account)
    session.commit()
    return account
