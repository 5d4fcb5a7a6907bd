from __future__ import annotations

from typing import Protocol

from account_service.services._shared.errors import InvalidTokenError


class TokenSigner(Protocol):
    """
    Port for issuing and verifying short-lived access tokens.

    Implementations must reject any token not signed with the configured
    symmetric algorithm family, whatever its header claims.
    """

    def issue(self, subject_id: int) -> str: ...

    def verify(self, token: str) -> int:
        """Return the subject id, or raise :class:`InvalidTokenError`."""
        ...


class StubTokenSigner(TokenSigner):
    """Predictable signer for service unit tests: ``access-<id>`` tokens."""

    PREFIX = "access-"

    def __init__(self) -> None:
        self.issued: list[int] = []

    def issue(self, subject_id: int) -> str:
        self.issued.append(subject_id)
        return f"{self.PREFIX}{subject_id}"

    def verify(self, token: str) -> int:
        if not token or not token.startswith(self.PREFIX):
            raise InvalidTokenError()
        try:
            return int(token[len(self.PREFIX) :])
        except ValueError as exc:
            raise InvalidTokenError() from exc
