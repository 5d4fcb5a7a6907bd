"""Marshmallow schemas for request validation and response shaping."""

from __future__ import annotations

from .auth import (
    CredentialsSchema,
    RefreshTokenSchema,
    SessionSchema,
    SignInSchema,
    TokenPairSchema,
)
from .settings import SettingsSchema, SettingsUpdateSchema, SubscriptionSchema

__all__ = [
    "CredentialsSchema",
    "RefreshTokenSchema",
    "SessionSchema",
    "SignInSchema",
    "TokenPairSchema",
    "SettingsSchema",
    "SettingsUpdateSchema",
    "SubscriptionSchema",
]
