"""OAuth sign-in: find or create the user, then link the provider account."""

from __future__ import annotations

import logging
import re

from sqlalchemy.orm import Session

from devflow.db.repository.accounts import create_account
from devflow.db.repository.accounts import find_account
from devflow.db.repository.users import create_user
from devflow.db.repository.users import get_user_by_email
from devflow.db.repository.users import update_user
from devflow.schemas.auth import SignInWithOAuth

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9_]+")


def slugify_username(username: str) -> str:
    return _SLUG_INVALID.sub("", username.strip().lower())


def sign_in_with_oauth_service(session: Session, payload: SignInWithOAuth) -> bool:
    """Create or refresh the user and account in a single transaction."""
    profile = payload.user
    try:
        user = get_user_by_email(session, profile.email)
        if user is None:
            user = create_user(
                session,
                name=profile.name,
                username=slugify_username(profile.username),
                email=profile.email,
                image=profile.image,
            )
            logger.info("Created user %s from %s sign-in", user.id, payload.provider)
        else:
            changes = {}
            if user.name != profile.name:
                changes["name"] = profile.name
            if profile.image is not None and user.image != profile.image:
                changes["image"] = profile.image
            if changes:
                user = update_user(session, user, **changes)

        account = find_account(
            session,
            provider=payload.provider,
            provider_account_id=payload.provider_account_id,
            user_id=user.id,
        )
        if account is None:
            create_account(
                session,
                user_id=user.id,
                name=profile.name,
                image=profile.image,
                provider=payload.provider,
                provider_account_id=payload.provider_account_id,
            )
        session.commit()
    except Exception:
        session.rollback()
        raise
    return True
