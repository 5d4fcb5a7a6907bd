from __future__ import annotations

from datetime import UTC, datetime

from account_service.core import errors as api_errors
from account_service.services._shared.errors import (
    AlreadyGrantedTodayError,
    IdentityExistsError,
    InsufficientBalanceError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PaymentFailedError,
    RateLimitedError,
    ServiceError,
    ValidationFailedError,
)
from account_service.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Domain error → (HTTP status, stable code). Order matters only for subclasses.
_ERROR_TABLE: tuple[tuple[type[ServiceError], int, str], ...] = (
    (IdentityExistsError, 409, "email_exist"),
    (InvalidCredentialsError, 401, "invalid_credentials"),
    (InvalidTokenError, 401, "invalid_token"),
    (RateLimitedError, 429, "too_many_requests"),
    (InsufficientBalanceError, 402, "no_coins"),
    (AlreadyGrantedTodayError, 409, "day_coin"),
    (ValidationFailedError, 422, "validation_error"),
    (NotFoundError, 404, "user_not_found"),
    (PaymentFailedError, 402, "payment_failed"),
)


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes read back from the database.

    SQLite drops the offset on storage; every stored value is written as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        for error_type, status, code in _ERROR_TABLE:
            if isinstance(exc, error_type):
                return api_errors.APIError(message=str(exc), status_code=status, code=code)

        # Any other ServiceError (InternalFailureError included) → generic 500
        if isinstance(exc, ServiceError):
            return api_errors.InternalServerError()

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
