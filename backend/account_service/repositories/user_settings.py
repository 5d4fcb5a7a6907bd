"""User settings repository: profile rows, balances and subscriptions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import update

from account_service.models.user_settings import UserSettings
from account_service.repositories.base import BaseRepository


class UserSettingsRepository(BaseRepository[UserSettings]):
    """Persistence-only repository for :class:`UserSettings` (keyed by ``user_id``)."""

    model = UserSettings

    def _pk_attr(self):
        return UserSettings.user_id

    def _updatable_fields(self):
        return {"name", "icon"}

    def deactivate_expired(self, now: datetime) -> int:
        """
        Clear ``paid_subscription`` on every row whose expiry is before ``now``.

        Executed as a single bulk ``UPDATE``.

        :returns: Number of rows affected.
        """
        stmt = (
            update(UserSettings)
            .where(
                UserSettings.paid_subscription.is_(True),
                UserSettings.date_of_paid_subscription < now,
            )
            .values(paid_subscription=False)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)
