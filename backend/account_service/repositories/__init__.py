"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from account_service.repositories.base import BaseRepository
from account_service.repositories.refresh_token import RefreshTokenRepository
from account_service.repositories.user import UserRepository
from account_service.repositories.user_settings import UserSettingsRepository

__all__ = [
    "BaseRepository",
    "RefreshTokenRepository",
    "UserRepository",
    "UserSettingsRepository",
]
