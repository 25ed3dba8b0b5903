"""User API routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from sqlalchemy.orm import Session

from devflow.api.dependencies import get_db_session
from devflow.schemas.envelope import SuccessResponse
from devflow.schemas.user import EmailLookup
from devflow.schemas.user import User
from devflow.schemas.user import UserCreate
from devflow.schemas.user import UserUpdate
from devflow.services.users import create_user_service
from devflow.services.users import delete_user_service
from devflow.services.users import get_user_by_email_service
from devflow.services.users import get_user_service
from devflow.services.users import list_users_service
from devflow.services.users import update_user_service

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=SuccessResponse[list[User]])
def list_users_endpoint(session: Session = Depends(get_db_session)) -> dict:
    """List all users."""
    return {"success": True, "data": list_users_service(session)}


@router.post("/users", response_model=SuccessResponse[User], status_code=201)
def create_user_endpoint(
    payload: UserCreate,
    session: Session = Depends(get_db_session),
) -> dict:
    """Create a user."""
    return {"success": True, "data": create_user_service(session, payload)}


@router.post("/users/email", response_model=SuccessResponse[User])
def get_user_by_email_endpoint(
    payload: EmailLookup,
    session: Session = Depends(get_db_session),
) -> dict:
    """Look a user up by email."""
    return {"success": True, "data": get_user_by_email_service(session, payload.email)}


@router.get("/users/{user_id}", response_model=SuccessResponse[User])
def get_user_endpoint(
    user_id: str,
    session: Session = Depends(get_db_session),
) -> dict:
    """Get a single user by id."""
    return {"success": True, "data": get_user_service(session, user_id)}


@router.put("/users/{user_id}", response_model=SuccessResponse[User])
def update_user_endpoint(
    user_id: str,
    payload: UserUpdate,
    session: Session = Depends(get_db_session),
) -> dict:
    """Partially update a user."""
    return {"success": True, "data": update_user_service(session, user_id, payload)}


@router.delete("/users/{user_id}", response_model=SuccessResponse[User])
def delete_user_endpoint(
    user_id: str,
    session: Session = Depends(get_db_session),
) -> dict:
    """Delete a user and return it."""
    return {"success": True, "data": delete_user_service(session, user_id)}
