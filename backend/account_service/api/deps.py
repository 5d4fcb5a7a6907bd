"""Shared API helpers: service wiring, rate gates, auth and response helpers."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from account_service.core.extensions import get_redis
from account_service.infra.jwt.flask_jwt_token_signer import JWTTokenSigner
from account_service.infra.redis.redis_quota_gate import RedisQuotaGate
from account_service.infra.security.credential_hasher import CredentialHasher
from account_service.services._shared.errors import (
    InvalidTokenError,
    RateLimitedError,
    RateScope,
)
from account_service.services._shared.ports import QuotaDecision
from account_service.services.profile.service import ProfileService
from account_service.services.rewards.dto import RewardConfig
from account_service.services.rewards.service import RewardGranter
from account_service.services.sessions.dto import SessionTokenConfig
from account_service.services.sessions.service import SessionService

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "Bearer "

# ------------------------------ Service wiring -------------------------------


def get_quota_gate() -> RedisQuotaGate:
    return RedisQuotaGate(get_redis())


def get_profile_service() -> ProfileService:
    return ProfileService(payment_token=current_app.config.get("PAYMENT_MOCK_TOKEN"))


def get_session_service() -> SessionService:
    cfg = current_app.config
    return SessionService(
        token_signer=JWTTokenSigner(),
        hasher=CredentialHasher(cfg["PASSWORD_SALT"]),
        profile=get_profile_service(),
        token_cfg=SessionTokenConfig(
            refresh_ttl=timedelta(days=cfg.get("REFRESH_TOKEN_TTL_DAYS", 365)),
            rotate_before=timedelta(days=cfg.get("REFRESH_TOKEN_ROTATE_DAYS", 90)),
        ),
    )


def get_reward_granter() -> RewardGranter:
    cfg = current_app.config
    return RewardGranter(
        gate=get_quota_gate(),
        profile=get_profile_service(),
        cfg=RewardConfig(
            coins=cfg.get("DAILY_REWARD_COINS", 3),
            marker_ttl=timedelta(hours=cfg.get("DAILY_REWARD_TTL_HOURS", 25)),
        ),
    )


# ------------------------------ Request parsing ------------------------------


def bearer_token() -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, if any."""
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


def client_ip() -> str:
    """Client address; ProxyFix rewrites it from ``X-Forwarded-For`` when enabled."""
    return request.remote_addr or "unknown"


# -------------------------------- Rate gates ---------------------------------


def _enforce(scope: RateScope, key: str, limit: int) -> None:
    window = int(current_app.config.get("RATE_LIMIT_WINDOW_SECONDS", 60))
    decision = get_quota_gate().check_and_increment(scope, key, limit, window)
    if decision is QuotaDecision.DENIED:
        raise RateLimitedError(scope)


def ip_rate_limit() -> None:
    """``before_request`` hook for unauthenticated auth routes."""
    _enforce(RateScope.IP, client_ip(), int(current_app.config["AUTH_RATE_LIMIT_PER_MINUTE"]))


def identity_rate_limit() -> None:
    """``before_request`` hook for protected routes; skipped without a bearer token."""
    token = bearer_token()
    if token is None:
        return
    _enforce(RateScope.IDENTITY, token, int(current_app.config["RATE_LIMIT_PER_MINUTE"]))


# ----------------------------------- Auth ------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token; sets ``g.user_id``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = bearer_token()
        if token is None:
            raise InvalidTokenError()
        g.user_id = get_session_service().parse_access_token(token)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# --------------------------------- Responses ---------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
