"""OAuth sign-in route called by the identity provider callback."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from sqlalchemy.orm import Session

from devflow.api.dependencies import get_db_session
from devflow.schemas.auth import SignInWithOAuth
from devflow.schemas.envelope import SuccessResponse
from devflow.services.auth import sign_in_with_oauth_service

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth/signin-with-oauth", response_model=SuccessResponse[bool])
def sign_in_with_oauth_endpoint(
    payload: SignInWithOAuth,
    session: Session = Depends(get_db_session),
) -> dict:
    """Create or refresh the user and provider account for a login."""
    return {"success": True, "data": sign_in_with_oauth_service(session, payload)}
