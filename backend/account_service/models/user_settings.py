"""Per-identity profile and balance record."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from account_service.core.extensions import db

from .base import ReprMixin

if TYPE_CHECKING:
    from .user import User


class UserSettings(ReprMixin, db.Model):
    """
    Profile state created alongside every identity.

    Fields
    ------
    user_id : int
        Primary key and foreign key to ``users.id``.
    name : str
        Display name; defaults to the email local part on registration.
    icon : str | None
        URL or path of the profile picture.
    coin : int
        Balance in reward units. Never negative.
    date_of_registration : datetime
        Set by the database on insert.
    paid_subscription : bool
        Whether the paid subscription is active.
    date_of_paid_subscription : datetime | None
        Subscription expiry; the background sweep flips ``paid_subscription``
        once it is in the past.
    """

    __tablename__ = "user_settings"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    coin: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    date_of_registration: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    paid_subscription: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    date_of_paid_subscription: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    user: Mapped[User] = relationship(back_populates="settings")

    __table_args__ = (CheckConstraint("coin >= 0", name="coin_non_negative"),)

    @property
    def id(self) -> int:
        """Alias so generic repository helpers can address the row by ``id``."""
        return self.user_id

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        """
        Trim the display name.

        :raises ValueError: If the name is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()
