from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from account_service.models.user_settings import UserSettings
from account_service.services._shared.base import as_utc


@dataclass(frozen=True, slots=True)
class UpdateInfoIn:
    """
    Input DTO for profile edits.

    :param name: New display name (non-blank).
    :type name: str
    :param icon: New picture URL/path; ``None`` or empty keeps the stored one.
    :type icon: str | None
    """

    name: str
    icon: str | None = None


@dataclass(frozen=True, slots=True)
class ActivateSubscriptionIn:
    """
    Input DTO for a subscription purchase.

    :param days: Number of days to add (> 0).
    :type days: int
    :param payment_token: Token returned by the payment provider.
    :type payment_token: str
    """

    days: int
    payment_token: str


@dataclass(frozen=True, slots=True)
class SettingsOut:
    """Read model of a :class:`UserSettings` row."""

    user_id: int
    name: str
    icon: str | None
    coin: int
    date_of_registration: datetime | None
    paid_subscription: bool
    date_of_paid_subscription: datetime | None

    @classmethod
    def from_model(cls, row: UserSettings) -> SettingsOut:
        registered = row.date_of_registration
        expiry = row.date_of_paid_subscription
        return cls(
            user_id=row.user_id,
            name=row.name,
            icon=row.icon,
            coin=row.coin,
            date_of_registration=as_utc(registered) if registered else None,
            paid_subscription=bool(row.paid_subscription),
            date_of_paid_subscription=as_utc(expiry) if expiry else None,
        )
