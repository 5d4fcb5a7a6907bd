"""HTTP tests for the ``/auth`` endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from account_service.models.refresh_token import RefreshToken
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory
from tests.helpers.http import API, assert_problem, json_headers, sign_up

CREDS = {"email": "ana@example.com", "password": "Passw0rd!"}


def test_sign_up_returns_token_pair(client) -> None:
    resp = client.post(f"{API}/auth/sign-up", json=CREDS)

    assert resp.status_code == 201
    body = resp.get_json()
    assert set(body) == {"accessToken", "refreshToken"}
    assert len(body["refreshToken"]) == 44


def test_sign_up_access_token_opens_protected_routes(client) -> None:
    tokens = sign_up(client, "bob@example.com")

    resp = client.get(f"{API}/settings", headers=json_headers(tokens["accessToken"]))

    assert resp.status_code == 200
    assert resp.get_json()["name"] == "bob"


def test_sign_up_duplicate_email(client) -> None:
    sign_up(client, CREDS["email"])

    resp = client.post(
        f"{API}/auth/sign-up", json={"email": "ANA@example.com", "password": "another1"}
    )

    assert_problem(resp, 409, "email_exist")


def test_sign_up_rejects_malformed_body(client) -> None:
    resp = client.post(f"{API}/auth/sign-up", json={"email": "not-an-email", "password": "x"})

    body = assert_problem(resp, 422, "validation_error")
    assert set(body["details"]["errors"]) == {"email", "password"}


def test_sign_in_with_device(client, session) -> None:
    user = UserFactory(email="dev@example.com")

    resp = client.post(
        f"{API}/auth/sign-in",
        json={"email": user.email, "password": "Passw0rd!", "deviceName": "Pixel 9"},
    )

    assert resp.status_code == 200
    refresh = resp.get_json()["refreshToken"]
    session.expire_all()
    row = session.query(RefreshToken).filter_by(token=refresh).one()
    assert row.name_device == "Pixel 9"


def test_sign_in_wrong_password_and_unknown_email_match(client) -> None:
    UserFactory(email="dev@example.com")

    wrong = client.post(
        f"{API}/auth/sign-in", json={"email": "dev@example.com", "password": "wrong-pass"}
    )
    unknown = client.post(
        f"{API}/auth/sign-in", json={"email": "ghost@example.com", "password": "Passw0rd!"}
    )

    a = assert_problem(wrong, 401, "invalid_credentials")
    b = assert_problem(unknown, 401, "invalid_credentials")
    assert a["detail"] == b["detail"]


def test_refresh_keeps_value_far_from_expiry(client) -> None:
    tokens = sign_up(client, CREDS["email"])

    resp = client.post(f"{API}/auth/refresh", json={"refreshToken": tokens["refreshToken"]})

    assert resp.status_code == 200
    assert resp.get_json()["refreshToken"] == tokens["refreshToken"]


def test_refresh_rotates_near_expiry(client) -> None:
    rt = RefreshTokenFactory(expires_at=datetime.now(UTC) + timedelta(days=10))
    old = rt.token

    resp = client.post(f"{API}/auth/refresh", json={"refreshToken": old})
    assert resp.status_code == 200
    assert resp.get_json()["refreshToken"] != old

    again = client.post(f"{API}/auth/refresh", json={"refreshToken": old})
    assert_problem(again, 401, "invalid_token")


def test_refresh_expired_token(client) -> None:
    rt = RefreshTokenFactory(expires_at=datetime.now(UTC) - timedelta(minutes=1))

    resp = client.post(f"{API}/auth/refresh", json={"refreshToken": rt.token})

    assert_problem(resp, 401, "invalid_token")


def test_logout_revokes_and_is_idempotent(client) -> None:
    tokens = sign_up(client, CREDS["email"])
    body = {"refreshToken": tokens["refreshToken"]}

    first = client.post(f"{API}/auth/logout", json=body)
    second = client.post(f"{API}/auth/logout", json=body)

    assert first.status_code == second.status_code == 204
    assert_problem(client.post(f"{API}/auth/refresh", json=body), 401, "invalid_token")


def test_logout_all_revokes_every_session(client) -> None:
    sign_up(client, CREDS["email"])
    client.post(f"{API}/auth/sign-in", json=CREDS)

    resp = client.post(f"{API}/auth/logout-all", json=CREDS)

    assert resp.status_code == 200
    assert resp.get_json() == {"revoked": 2}


def test_logout_all_requires_credentials(client) -> None:
    sign_up(client, CREDS["email"])

    resp = client.post(
        f"{API}/auth/logout-all", json={"email": CREDS["email"], "password": "wrong-pass"}
    )

    assert_problem(resp, 401, "invalid_credentials")


def test_auth_routes_limit_each_client_ip(client, fake_redis) -> None:
    payload = {"email": "ghost@example.com", "password": "Passw0rd!"}
    statuses = [client.post(f"{API}/auth/sign-in", json=payload).status_code for _ in range(11)]

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429
    assert int(fake_redis.get("rate_limit_auth:127.0.0.1")) == 11


def test_auth_routes_fail_open_without_redis(client, app) -> None:
    from account_service.core.extensions import REDIS_EXTENSION_KEY

    app.extensions.pop(REDIS_EXTENSION_KEY, None)
    payload = {"email": "ghost@example.com", "password": "Passw0rd!"}

    statuses = {client.post(f"{API}/auth/sign-in", json=payload).status_code for _ in range(12)}

    assert statuses == {401}
