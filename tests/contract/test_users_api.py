"""Contract tests for the users API endpoints."""

from __future__ import annotations

import re

from fastapi.testclient import TestClient

API_PREFIX = "/api"

ADA = {
    "name": "Ada Lovelace",
    "username": "ada_l",
    "email": "ada@example.com",
    "bio": "First programmer",
    "portfolio": "https://ada.dev",
}


def _assert_object_id(value: str) -> None:
    assert re.fullmatch(r"[0-9a-f]{24}", value)


def _assert_user_contract(payload: dict) -> None:
    for field in ("id", "name", "username", "email", "reputation", "createdAt", "updatedAt"):
        assert field in payload
    _assert_object_id(payload["id"])
    assert "created_at" not in payload


def _assert_error_envelope(payload: dict, message: str) -> None:
    assert payload["success"] is False
    assert payload["error"]["message"] == message


def _create_user(client: TestClient, **overrides: object) -> dict:
    response = client.post(f"{API_PREFIX}/users", json={**ADA, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_user_crud_contract(client: TestClient) -> None:
    created = _create_user(client)
    _assert_user_contract(created)
    assert created["reputation"] == 0
    assert created["portfolio"] == "https://ada.dev"

    list_response = client.get(f"{API_PREFIX}/users")
    assert list_response.status_code == 200
    assert list_response.json()["success"] is True
    assert [user["id"] for user in list_response.json()["data"]] == [created["id"]]

    get_response = client.get(f"{API_PREFIX}/users/{created['id']}")
    assert get_response.status_code == 200
    assert get_response.json() == {"success": True, "data": created}

    update_response = client.put(
        f"{API_PREFIX}/users/{created['id']}",
        json={"location": "London", "reputation": 10},
    )
    assert update_response.status_code == 200
    updated = update_response.json()["data"]
    assert updated["location"] == "London"
    assert updated["reputation"] == 10
    assert updated["name"] == ADA["name"]

    delete_response = client.delete(f"{API_PREFIX}/users/{created['id']}")
    assert delete_response.status_code == 200
    assert delete_response.json()["data"]["id"] == created["id"]

    missing_response = client.get(f"{API_PREFIX}/users/{created['id']}")
    assert missing_response.status_code == 404
    _assert_error_envelope(missing_response.json(), "User not found")


def test_lookup_by_email(client: TestClient) -> None:
    created = _create_user(client)

    response = client.post(f"{API_PREFIX}/users/email", json={"email": ADA["email"]})
    assert response.status_code == 200
    assert response.json()["data"]["id"] == created["id"]

    missing = client.post(f"{API_PREFIX}/users/email", json={"email": "nobody@example.com"})
    assert missing.status_code == 404
    _assert_error_envelope(missing.json(), "User not found")


def test_lookup_by_email_validates_body(client: TestClient) -> None:
    response = client.post(f"{API_PREFIX}/users/email", json={})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {"message": "Email is required", "details": {"email": ["Required"]}},
    }


def test_create_user_validation_errors(client: TestClient) -> None:
    response = client.post(
        f"{API_PREFIX}/users",
        json={"name": "", "username": "x", "email": "ada@example.com"},
    )

    assert response.status_code == 400
    details = response.json()["error"]["details"]
    assert details["name"] == ["Name is required."]
    assert details["username"] == ["Username must be at least 3 characters long."]


def test_duplicate_email_and_username_are_rejected(client: TestClient) -> None:
    _create_user(client)

    same_email = client.post(f"{API_PREFIX}/users", json={**ADA, "username": "another"})
    assert same_email.status_code == 500
    _assert_error_envelope(same_email.json(), "A user with this email already exists")

    same_username = client.post(f"{API_PREFIX}/users", json={**ADA, "email": "other@example.com"})
    assert same_username.status_code == 500
    _assert_error_envelope(same_username.json(), "The username is already taken")

    assert len(client.get(f"{API_PREFIX}/users").json()["data"]) == 1


def test_unknown_or_malformed_ids_are_not_found(client: TestClient) -> None:
    for user_id in ("0" * 24, "not-an-id"):
        response = client.get(f"{API_PREFIX}/users/{user_id}")
        assert response.status_code == 404
        _assert_error_envelope(response.json(), "User not found")

    update = client.put(f"{API_PREFIX}/users/{'0' * 24}", json={"bio": "x"})
    assert update.status_code == 404

    delete = client.delete(f"{API_PREFIX}/users/{'0' * 24}")
    assert delete.status_code == 404


def test_update_rejects_invalid_fields(client: TestClient) -> None:
    created = _create_user(client)

    response = client.put(f"{API_PREFIX}/users/{created['id']}", json={"email": "nope"})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"email": ["Please provide a valid email address."]}


def test_update_rejects_null_for_required_fields(client: TestClient) -> None:
    created = _create_user(client)

    response = client.put(
        f"{API_PREFIX}/users/{created['id']}",
        json={"name": None, "reputation": None, "bio": None},
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {
        "name": ["Name cannot be null."],
        "reputation": ["Reputation cannot be null."],
    }
    assert client.get(f"{API_PREFIX}/users/{created['id']}").json()["data"]["name"] == ADA["name"]


def test_update_clears_nullable_fields(client: TestClient) -> None:
    created = _create_user(client)

    response = client.put(f"{API_PREFIX}/users/{created['id']}", json={"bio": None})

    assert response.status_code == 200
    assert response.json()["data"]["bio"] is None


def test_update_to_taken_email_reports_duplicate(client: TestClient) -> None:
    _create_user(client)
    other = _create_user(client, username="grace", email="grace@example.com")

    response = client.put(f"{API_PREFIX}/users/{other['id']}", json={"email": ADA["email"]})

    assert response.status_code == 500
    _assert_error_envelope(response.json(), "A user with this email already exists")
