"""Service layer public API.

This package exposes the building blocks of the service layer so that callers
can import from :mod:`account_service.services` without knowing the internal
structure.

Re-exports
----------
- :class:`BaseService`
- :class:`SessionService` with its DTOs
- :class:`ProfileService` with its DTOs
- :class:`RewardGranter` with :class:`GrantResult`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .profile.dto import ActivateSubscriptionIn, SettingsOut, UpdateInfoIn
from .profile.service import ProfileService
from .rewards.dto import GrantResult, RewardConfig
from .rewards.service import RewardGranter
from .sessions.dto import (
    CredentialsIn,
    DeviceIn,
    SessionOut,
    SessionTokenConfig,
    TokenPairOut,
)
from .sessions.service import SessionService

__all__ = [
    "BaseService",
    "ActivateSubscriptionIn",
    "SettingsOut",
    "UpdateInfoIn",
    "ProfileService",
    "GrantResult",
    "RewardConfig",
    "RewardGranter",
    "CredentialsIn",
    "DeviceIn",
    "SessionOut",
    "SessionTokenConfig",
    "TokenPairOut",
    "SessionService",
]
