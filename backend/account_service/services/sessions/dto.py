from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Input DTO carrying an email/password pair.

    :param email: User email (normalized by the model layer).
    :type email: str
    :param password: Raw password (hashed before any lookup).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class DeviceIn:
    """Optional description of the device a session is opened from."""

    name: str | None = None
    info: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Opaque refresh value.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """One signed-in device. Never carries the refresh value itself."""

    id: int
    name_device: str | None
    device_info: str | None
    created_at: datetime | None
    expires_at: datetime


# --------------------------- Configuration -------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionTokenConfig:
    """
    Refresh token lifetime policy.

    :param refresh_ttl: Lifetime of a newly minted refresh value.
    :param rotate_before: Remaining validity under which a refresh rotates.
    """

    refresh_ttl: timedelta = timedelta(days=365)
    rotate_before: timedelta = timedelta(days=90)
