"""
SessionService
==============

Identity registration and the session lifecycle: sign-in, access token
renewal through rotating refresh tokens, and sign-out (one device or all).

Refresh token states: ``Active`` → ``Rotated`` (value replaced in place) or
``Active`` → ``Expired``/``Revoked`` (row deleted).
"""

from __future__ import annotations

import base64
import logging
import secrets

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from account_service.infra.security.credential_hasher import CredentialHasher
from account_service.models.user import User
from account_service.services._shared.base import BaseService, as_utc, now_utc
from account_service.services._shared.errors import (
    IdentityExistsError,
    InternalFailureError,
    InvalidCredentialsError,
    InvalidTokenError,
    ServiceError,
    ValidationFailedError,
    violates_unique,
)
from account_service.services._shared.ports import TokenSigner
from account_service.services.profile.service import ProfileService
from account_service.services.sessions.dto import (
    CredentialsIn,
    DeviceIn,
    SessionOut,
    SessionTokenConfig,
    TokenPairOut,
)

log = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32


def new_refresh_value() -> str:
    """Return 256 random bits as URL-safe base64 with padding (44 chars)."""
    return base64.urlsafe_b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")


class SessionService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / logout).

    :param token_signer: Adapter issuing and verifying access tokens.
    :param hasher: Salted digest used for stored credentials.
    :param profile: Settings service, used to create the default profile.
    :param token_cfg: Refresh lifetime and rotation threshold.
    """

    def __init__(
        self,
        *,
        token_signer: TokenSigner,
        hasher: CredentialHasher,
        profile: ProfileService,
        token_cfg: SessionTokenConfig | None = None,
    ) -> None:
        super().__init__()
        self.tokens = token_signer
        self.hasher = hasher
        self.profile = profile
        self.cfg = token_cfg or SessionTokenConfig()

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: CredentialsIn) -> int:
        """
        Create an identity and its default settings.

        The identity row is committed before the settings row is written, so
        a failing second step leaves the identity in place and still reports
        the registration as failed.

        :returns: The new identity id.
        :raises IdentityExistsError: If the email is already registered.
        :raises InternalFailureError: If the default settings cannot be created.
        """
        digest = self._digest(dto.password)
        try:
            with self.rw_uow() as uow:
                user = uow.users.add(User(email=dto.email, password_hash=digest))
                user_id = user.id
                email = user.email
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        except IntegrityError as exc:
            if violates_unique(exc, "users.email") or violates_unique(exc, "uq_users_email"):
                raise IdentityExistsError() from exc
            raise InternalFailureError() from exc
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

        try:
            self.profile.create_initial_settings(user_id, name=email.split("@", 1)[0])
        except InternalFailureError:
            log.error("Default settings not created", extra={"user_id": user_id})
            raise
        except ServiceError as exc:
            log.error("Default settings not created", extra={"user_id": user_id})
            raise InternalFailureError() from exc
        return user_id

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: CredentialsIn, device: DeviceIn | None = None) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises InvalidCredentialsError: If no identity matches email and secret.
        """
        user_id = self._authenticate(dto)
        device = device or DeviceIn()
        refresh = new_refresh_value()
        try:
            with self.rw_uow() as uow:
                uow.refresh_tokens.save(
                    user_id=user_id,
                    token=refresh,
                    expires_at=now_utc() + self.cfg.refresh_ttl,
                    name_device=device.name,
                    device_info=device.info,
                )
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

        return TokenPairOut(access_token=self.tokens.issue(user_id), refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> TokenPairOut:
        """
        Exchange a refresh value for a new access token.

        - Unknown value → :class:`InvalidTokenError`.
        - Expired value → the row is deleted, then :class:`InvalidTokenError`.
        - Less than ``rotate_before`` left → the value is replaced in place
          and the new value is returned; otherwise the presented value is.
        - A rotation that no longer matches the row (lost to a concurrent
          refresh) → :class:`InvalidTokenError`.
        """
        if not refresh_token:
            raise InvalidTokenError()

        now = now_utc()
        expired = False
        current = refresh_token
        try:
            with self.rw_uow() as uow:
                row = uow.refresh_tokens.get_by_token(refresh_token)
                if row is None:
                    raise InvalidTokenError()
                user_id = row.user_id
                expires_at = as_utc(row.expires_at)
                if now > expires_at:
                    uow.refresh_tokens.delete_by_token(refresh_token)
                    expired = True
                elif expires_at - now < self.cfg.rotate_before:
                    # Not serialized: of two concurrent rotations only one matches the row.
                    current = new_refresh_value()
                    replaced = uow.refresh_tokens.replace(
                        refresh_token, current, now + self.cfg.refresh_ttl
                    )
                    if replaced == 0:
                        raise InvalidTokenError()
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

        if expired:
            raise InvalidTokenError()
        return TokenPairOut(access_token=self.tokens.issue(user_id), refresh_token=current)

    # ------------------------------------------------------------------ #
    # Access tokens
    # ------------------------------------------------------------------ #

    def parse_access_token(self, token: str) -> int:
        """Return the identity id carried by a valid access token."""
        return self.tokens.verify(token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def revoke(self, refresh_token: str) -> int:
        """Delete one refresh value. Unknown values are not an error."""
        if not refresh_token:
            return 0
        try:
            with self.rw_uow() as uow:
                return uow.refresh_tokens.delete_by_token(refresh_token)
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

    def revoke_all(self, dto: CredentialsIn) -> int:
        """
        Re-check credentials, then delete every refresh value of the identity.

        :returns: Number of sessions removed.
        :raises InvalidCredentialsError: On an email/secret mismatch.
        """
        user_id = self._authenticate(dto)
        try:
            with self.rw_uow() as uow:
                removed = uow.refresh_tokens.delete_all_for_user(user_id)
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc
        log.info("Logged out everywhere", extra={"user_id": user_id, "affected": removed})
        return removed

    def list_sessions(self, user_id: int) -> list[SessionOut]:
        """Return the identity's signed-in devices, newest first."""
        try:
            with self.ro_uow() as uow:
                return [
                    SessionOut(
                        id=row.id,
                        name_device=row.name_device,
                        device_info=row.device_info,
                        created_at=as_utc(row.created_at) if row.created_at else None,
                        expires_at=as_utc(row.expires_at),
                    )
                    for row in uow.refresh_tokens.list_for_user(user_id)
                ]
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _digest(self, password: str) -> str:
        try:
            return self.hasher.hash(password)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc

    def _authenticate(self, dto: CredentialsIn) -> int:
        digest = self._digest(dto.password)
        try:
            with self.ro_uow() as uow:
                user = uow.users.find_by_credentials(dto.email, digest)
                if user is None:
                    raise InvalidCredentialsError()
                return user.id
        except SQLAlchemyError as exc:
            raise InternalFailureError() from exc
