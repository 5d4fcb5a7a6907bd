"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from account_service.api.deps import (
    get_session_service,
    ip_rate_limit,
    json_response,
    timing,
)
from account_service.schemas import (
    CredentialsSchema,
    RefreshTokenSchema,
    SignInSchema,
    TokenPairSchema,
)
from account_service.services.sessions.dto import CredentialsIn, DeviceIn

bp = Blueprint("auth", __name__)
bp.before_request(ip_rate_limit)

credentials_schema = CredentialsSchema()
sign_in_schema = SignInSchema()
refresh_schema = RefreshTokenSchema()
token_schema = TokenPairSchema()


def _body() -> dict:
    return request.get_json(silent=True) or {}


@bp.post("/sign-up")
@timing
def sign_up():
    """Register an identity and sign it in right away."""

    data = credentials_schema.load(_body())
    creds = CredentialsIn(email=data["email"], password=data["password"])
    service = get_session_service()
    service.register(creds)
    tokens = service.login(creds)
    return json_response(token_schema.dump(tokens), status=201)


@bp.post("/sign-in")
@timing
def sign_in():
    """Authenticate credentials and issue an access/refresh pair."""

    data = sign_in_schema.load(_body())
    tokens = get_session_service().login(
        CredentialsIn(email=data["email"], password=data["password"]),
        DeviceIn(name=data["device_name"], info=data["device_info"]),
    )
    return json_response(token_schema.dump(tokens))


@bp.post("/refresh")
@timing
def refresh():
    data = refresh_schema.load(_body())
    tokens = get_session_service().refresh(data["refresh_token"])
    return json_response(token_schema.dump(tokens))


@bp.post("/logout")
@timing
def logout():
    """Revoke one refresh token. Unknown tokens still answer 204."""

    data = refresh_schema.load(_body())
    get_session_service().revoke(data["refresh_token"])
    return "", 204


@bp.post("/logout-all")
@timing
def logout_all():
    """Re-check credentials and revoke every refresh token of the identity."""

    data = credentials_schema.load(_body())
    removed = get_session_service().revoke_all(
        CredentialsIn(email=data["email"], password=data["password"])
    )
    return json_response({"revoked": removed})
