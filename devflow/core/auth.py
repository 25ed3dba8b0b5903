"""Authentication session seam.

Session issuance belongs to an external identity provider; this module only
defines how the application asks for the current session.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from contextvars import ContextVar
from contextvars import Token

from pydantic import BaseModel


class AuthSession(BaseModel):
    """Authenticated caller as reported by the identity provider."""

    user_id: str
    name: str | None = None
    email: str | None = None


class SessionProvider(ABC):
    """Provider-neutral access to the current authenticated session."""

    @abstractmethod
    def get_session(self) -> AuthSession | None:
        """Return the current session, or ``None`` when signed out."""


class StaticSessionProvider(SessionProvider):
    """Always returns the session it was built with; for scripts and tests."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self._session = session

    def get_session(self) -> AuthSession | None:
        return self._session


_current_session: ContextVar[AuthSession | None] = ContextVar("current_session", default=None)


class ContextSessionProvider(SessionProvider):
    """Reads the session bound to the current execution context."""

    def get_session(self) -> AuthSession | None:
        return _current_session.get()


def bind_session(session: AuthSession | None) -> Token[AuthSession | None]:
    """Bind a session for the current context, e.g. after the provider verified a cookie."""
    return _current_session.set(session)


def reset_session(token: Token[AuthSession | None]) -> None:
    _current_session.reset(token)


_default_provider: SessionProvider = ContextSessionProvider()


def get_session_provider() -> SessionProvider:
    return _default_provider
