"""Account API routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from sqlalchemy.orm import Session

from devflow.api.dependencies import get_db_session
from devflow.schemas.account import Account
from devflow.schemas.account import AccountCreate
from devflow.schemas.account import AccountUpdate
from devflow.schemas.account import ProviderLookup
from devflow.schemas.envelope import SuccessResponse
from devflow.services.accounts import create_account_service
from devflow.services.accounts import delete_account_service
from devflow.services.accounts import get_account_by_provider_service
from devflow.services.accounts import get_account_service
from devflow.services.accounts import list_accounts_service
from devflow.services.accounts import update_account_service

router = APIRouter(prefix="/api", tags=["accounts"])


@router.get("/accounts", response_model=SuccessResponse[list[Account]])
def list_accounts_endpoint(session: Session = Depends(get_db_session)) -> dict:
    """List all accounts."""
    return {"success": True, "data": list_accounts_service(session)}


@router.post("/accounts", response_model=SuccessResponse[Account], status_code=201)
def create_account_endpoint(
    payload: AccountCreate,
    session: Session = Depends(get_db_session),
) -> dict:
    """Link a provider account to a user."""
    return {"success": True, "data": create_account_service(session, payload)}


@router.post("/accounts/provider", response_model=SuccessResponse[Account])
def get_account_by_provider_endpoint(
    payload: ProviderLookup,
    session: Session = Depends(get_db_session),
) -> dict:
    """Look an account up by its provider account id."""
    account = get_account_by_provider_service(session, payload.provider_account_id)
    return {"success": True, "data": account}


@router.get("/accounts/{account_id}", response_model=SuccessResponse[Account])
def get_account_endpoint(
    account_id: str,
    session: Session = Depends(get_db_session),
) -> dict:
    """Get a single account by id."""
    return {"success": True, "data": get_account_service(session, account_id)}


@router.put("/accounts/{account_id}", response_model=SuccessResponse[Account])
def update_account_endpoint(
    account_id: str,
    payload: AccountUpdate,
    session: Session = Depends(get_db_session),
) -> dict:
    """Partially update an account."""
    return {"success": True, "data": update_account_service(session, account_id, payload)}


@router.delete("/accounts/{account_id}", response_model=SuccessResponse[Account])
def delete_account_endpoint(
    account_id: str,
    session: Session = Depends(get_db_session),
) -> dict:
    """Delete an account and return it."""
    return {"success": True, "data": delete_account_service(session, account_id)}
