"""
ProfileService
==============

Per-identity settings: display name, icon, coin balance and the paid
subscription. Every identity gets one row at registration time.
"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from account_service.models.user_settings import UserSettings
from account_service.services._shared.base import BaseService, as_utc, now_utc
from account_service.services._shared.errors import (
    InsufficientBalanceError,
    InternalFailureError,
    NotFoundError,
    PaymentFailedError,
    ValidationFailedError,
)
from account_service.services.profile.dto import (
    ActivateSubscriptionIn,
    SettingsOut,
    UpdateInfoIn,
)

log = logging.getLogger(__name__)


class ProfileService(BaseService):
    """
    Orchestrates reads and writes of :class:`UserSettings`.

    :param payment_token: Token value the mock payment check accepts.
    :type payment_token: str | None
    """

    def __init__(self, *, payment_token: str | None = None) -> None:
        super().__init__()
        self.payment_token = payment_token

    def create_initial_settings(self, user_id: int, name: str) -> SettingsOut:
        """
        Insert the default settings row for a newly registered identity.

        :raises ValidationFailedError: If ``name`` is blank.
        :raises InternalFailureError: On any store failure.
        """
        try:
            with self.rw_uow() as uow:
                row = uow.settings.add(UserSettings(user_id=user_id, name=name, coin=0))
                out = SettingsOut.from_model(row)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc
        return out

    def get_by_user_id(self, user_id: int) -> SettingsOut:
        """
        :raises NotFoundError: If the identity has no settings row.
        """
        try:
            with self.ro_uow() as uow:
                row = uow.settings.get(user_id)
                if row is None:
                    raise NotFoundError()
                return SettingsOut.from_model(row)
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

    def update_info(self, user_id: int, dto: UpdateInfoIn) -> SettingsOut:
        """Replace the name; the icon changes only when a new one is given."""
        try:
            with self.rw_uow() as uow:
                row = uow.settings.get(user_id)
                if row is None:
                    raise NotFoundError()
                updates: dict[str, str] = {"name": dto.name}
                if dto.icon:
                    updates["icon"] = dto.icon
                uow.settings.assign_updates(row, updates)
                out = SettingsOut.from_model(row)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc
        return out

    def change_coins(self, user_id: int, delta: int) -> int:
        """
        Add ``delta`` (may be negative) to the balance under a row lock.

        :returns: The new balance.
        :raises InsufficientBalanceError: If the balance would drop below zero.
        :raises NotFoundError: If the identity has no settings row.
        """
        try:
            with self.rw_uow() as uow:
                row = uow.settings.get_for_update(user_id)
                if row is None:
                    raise NotFoundError()
                balance = row.coin + delta
                if balance < 0:
                    raise InsufficientBalanceError()
                row.coin = balance
                uow.settings.flush()
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc
        return balance

    def activate_subscription(self, user_id: int, dto: ActivateSubscriptionIn) -> SettingsOut:
        """
        Extend the paid subscription by ``dto.days`` after a payment check.

        The new period starts at the current expiry while the subscription
        is still running, otherwise at now.

        :raises ValidationFailedError: If ``days`` is not positive.
        :raises PaymentFailedError: If the payment token is rejected.
        """
        if dto.days <= 0:
            raise ValidationFailedError("days must be positive")
        if not self._payment_accepted(dto.payment_token):
            raise PaymentFailedError()

        now = now_utc()
        try:
            with self.rw_uow() as uow:
                row = uow.settings.get_for_update(user_id)
                if row is None:
                    raise NotFoundError()
                start = now
                current = row.date_of_paid_subscription
                if row.paid_subscription and current is not None and as_utc(current) > now:
                    start = as_utc(current)
                row.paid_subscription = True
                row.date_of_paid_subscription = start + timedelta(days=dto.days)
                uow.settings.flush()
                out = SettingsOut.from_model(row)
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

        log.info(
            "Subscription activated until %s",
            out.date_of_paid_subscription,
            extra={"user_id": user_id},
        )
        return out

    def deactivate_expired_subscriptions(self, now: datetime | None = None) -> int:
        """
        Flip every subscription whose expiry is before ``now`` to inactive.

        :returns: Number of rows affected.
        """
        try:
            with self.rw_uow() as uow:
                return uow.settings.deactivate_expired(now or now_utc())
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

    def _payment_accepted(self, token: str) -> bool:
        # Mock provider: one configured token always succeeds.
        if not self.payment_token or not token:
            return False
        return hmac.compare_digest(token, self.payment_token)
