"""HTTP helper utilities for API tests."""

from __future__ import annotations

from typing import Any

API = "/api/v1"


def json_headers(access_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers, with a bearer token when given.

    Parameters
    ----------
    access_token:
        Optional access token to send as ``Authorization: Bearer``.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def sign_up(client, email: str, password: str = "Passw0rd!") -> dict[str, Any]:
    """Register through the API and return the token pair body."""

    resp = client.post(f"{API}/auth/sign-up", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def assert_problem(resp, status: int, code: str) -> dict[str, Any]:
    """Check an RFC 7807 error response and return its body."""

    assert resp.status_code == status, resp.get_json()
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == status
    assert body["code"] == code
    assert body["request_id"]
    return body
