from __future__ import annotations

from enum import Enum, auto
from typing import Protocol

from account_service.services._shared.errors import RateScope


class QuotaDecision(Enum):
    """Outcome of a rate-limit check."""

    ALLOWED = auto()
    DENIED = auto()
    # Counter store unreachable; callers let the request through.
    INDETERMINATE = auto()


class QuotaGate(Protocol):
    """
    Shared counter store used for rate windows and once-per-day markers.

    ``check_and_increment`` never raises: backend failures surface as
    :attr:`QuotaDecision.INDETERMINATE`. The set operations do raise, so
    callers that must not double-grant can fail closed.
    """

    def check_and_increment(
        self, scope: RateScope, key: str, limit: int, window_seconds: int
    ) -> QuotaDecision: ...

    def mark_once(self, set_key: str, member: str, ttl_seconds: int) -> bool:
        """Add ``member`` to ``set_key``; ``True`` only if it was not present."""
        ...

    def unmark(self, set_key: str, member: str) -> None: ...
