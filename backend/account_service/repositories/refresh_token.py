"""Refresh token repository: persistence of issued refresh tokens."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, select, update

from account_service.models.refresh_token import RefreshToken
from account_service.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Lookups are always by exact token value. Deletion by value is idempotent:
    removing a token that is not stored is a no-op.
    """

    model = RefreshToken

    def _filterable_fields(self):
        return {"token": RefreshToken.token, "user_id": RefreshToken.user_id}

    def save(
        self,
        *,
        user_id: int,
        token: str,
        expires_at: datetime,
        name_device: str | None = None,
        device_info: str | None = None,
    ) -> RefreshToken:
        """Insert a new refresh token row and flush."""
        row = RefreshToken(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            name_device=name_device,
            device_info=device_info,
        )
        return self.add(row)

    def get_by_token(self, token: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def replace(self, old_token: str, new_token: str, expires_at: datetime) -> int:
        """
        Swap ``old_token`` for ``new_token`` in place, keeping device metadata.

        :returns: Number of rows updated (0 when ``old_token`` is unknown).
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token == old_token)
            .values(token=new_token, expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def delete_by_token(self, token: str) -> int:
        """Remove the row holding ``token``; returns rows removed."""
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.token == token)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def delete_all_for_user(self, user_id: int) -> int:
        """Remove every refresh token of ``user_id``; returns rows removed."""
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def list_for_user(self, user_id: int) -> list[RefreshToken]:
        """Return the user's tokens, newest first."""
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .order_by(RefreshToken.created_at.desc(), RefreshToken.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())
