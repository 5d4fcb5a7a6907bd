"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are the stable contract between repositories, infrastructure adapters
and application services.

The translation to HTTP responses (RFC 7807) is handled by
``BaseService.translate_exceptions()`` and ``core/errors.py``.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"


def violates_unique(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a uniqueness constraint.

    PostgreSQL reports SQLSTATE ``23505`` (and usually the constraint name);
    SQLite only reports ``UNIQUE constraint failed: <table>.<column>``.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint (or ``table.column``) to match.
    :returns: ``True`` if the IntegrityError is a unique violation on it.
    """
    if getattr(exc.orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(exc.orig).lower() if exc.orig else ""
    return "unique" in message and constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Business-rule violations are raised as the specific subclass as soon as
      they are detected and propagate unchanged to the API boundary.
    """

    message = "service error"

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class IdentityExistsError(ServiceError):
    """Raised when registering an email that is already taken."""

    message = "user with this email already exists"


class InvalidCredentialsError(ServiceError):
    """Raised for a wrong email/password pair, whichever half is wrong."""

    message = "invalid email or password"


class InvalidTokenError(ServiceError):
    """
    Raised for any unusable access or refresh token.

    Malformed, expired, wrongly signed, wrong algorithm, missing claims,
    unknown refresh value: all collapse into this one error.
    """

    message = "authorization token is invalid"


class RateScope(str, Enum):
    """Key space a rate counter belongs to."""

    IDENTITY = "rate_limit"
    IP = "rate_limit_auth"


class RateLimitedError(ServiceError):
    """
    Raised when a rate window is exhausted.

    :param scope: Which gate denied the request.
    :type scope: RateScope
    """

    def __init__(self, scope: RateScope) -> None:
        super().__init__(scope)
        self.scope = scope
        if scope is RateScope.IP:
            self.message = "too many requests by ip"
        else:
            self.message = "too many requests by access token"


class InsufficientBalanceError(ServiceError):
    """Raised when a balance change would leave the account negative."""

    message = "there are not enough coins in the account"


class AlreadyGrantedTodayError(ServiceError):
    """Raised when the daily reward was already claimed for the current UTC day."""

    message = "daily reward already claimed today"


class ValidationFailedError(ServiceError):
    """Raised when input is structurally unusable."""

    def __init__(self, message: str = "invalid request body or parameters") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Raised when the identity (or its settings record) does not exist."""

    message = "user not found"


class PaymentFailedError(ServiceError):
    """Raised when a subscription payment token is rejected."""

    message = "payment failed"


class InternalFailureError(ServiceError):
    """
    Wrap an unexpected lower-layer error.

    The original exception is kept as ``__cause__`` (``raise ... from exc``)
    for logging only; clients always get the same generic code.
    """

    message = "an internal server error occurred"
