"""User repository for identity lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from account_service.models.user import User
from account_service.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes secrets nor issues tokens; it only stores and finds rows.
    """

    model = User

    def _filterable_fields(self):
        return {"email": User.email}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_credentials(self, email: str, password_hash: str) -> User | None:
        """Return the user whose email and stored digest both match."""
        user = self.get_by_email(email)
        if user is None or user.password_hash != password_hash:
            return None
        return user
