"""Typed client for the DevFlow HTTP API built on ``fetch_handler``."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from devflow.core.config import Settings
from devflow.core.config import get_settings
from devflow.lib.fetch import DEFAULT_TIMEOUT_SECONDS
from devflow.lib.fetch import fetch_handler


class DevflowApiClient:
    """Call the users, accounts and auth endpoints of a DevFlow deployment.

    Every method returns the decoded envelope; failures never raise.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        normalized = base_url.rstrip("/")
        if not normalized:
            raise ValueError("base_url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._base_url = normalized
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "DevflowApiClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            timeout_seconds=settings.http_timeout_seconds,
            **kwargs,
        )

    def _call(self, method: str, path: str, json: Any = None) -> dict[str, Any]:
        return fetch_handler(
            f"{self._base_url}{path}",
            method=method,
            json=json,
            timeout=self._timeout_seconds,
            session=self._session,
        )

    def oauth_sign_in(self, *, user: dict[str, Any], provider: str, provider_account_id: str) -> dict[str, Any]:
        """Create or refresh the user and account for a provider login."""
        return self._call(
            "POST",
            "/auth/signin-with-oauth",
            {"user": user, "provider": provider, "providerAccountId": provider_account_id},
        )

    def list_users(self) -> dict[str, Any]:
        return self._call("GET", "/users")

    def get_user(self, user_id: str) -> dict[str, Any]:
        return self._call("GET", f"/users/{quote(user_id, safe='')}")

    def get_user_by_email(self, email: str) -> dict[str, Any]:
        return self._call("POST", "/users/email", {"email": email})

    def create_user(self, user_data: dict[str, Any]) -> dict[str, Any]:
        return self._call("POST", "/users", user_data)

    def update_user(self, user_id: str, user_data: dict[str, Any]) -> dict[str, Any]:
        return self._call("PUT", f"/users/{quote(user_id, safe='')}", user_data)

    def delete_user(self, user_id: str) -> dict[str, Any]:
        return self._call("DELETE", f"/users/{quote(user_id, safe='')}")

    def list_accounts(self) -> dict[str, Any]:
        return self._call("GET", "/accounts")

    def get_account(self, account_id: str) -> dict[str, Any]:
        return self._call("GET", f"/accounts/{quote(account_id, safe='')}")

    def get_account_by_provider(self, provider_account_id: str) -> dict[str, Any]:
        return self._call("POST", "/accounts/provider", {"providerAccountId": provider_account_id})

    def create_account(self, account_data: dict[str, Any]) -> dict[str, Any]:
        return self._call("POST", "/accounts", account_data)

    def update_account(self, account_id: str, account_data: dict[str, Any]) -> dict[str, Any]:
        return self._call("PUT", f"/accounts/{quote(account_id, safe='')}", account_data)

    def delete_account(self, account_id: str) -> dict[str, Any]:
        return self._call("DELETE", f"/accounts/{quote(account_id, safe='')}")
