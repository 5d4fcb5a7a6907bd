"""
account_service.services._shared.ports
======================================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_signer`:
    Defines :class:`~.TokenSigner`, the abstraction for access token issuing
    and verification, plus :class:`~.StubTokenSigner` for unit tests.

- :mod:`quota_gate`:
    Defines :class:`~.QuotaGate` and :class:`~.QuotaDecision`, the abstraction
    over the shared counter store used for rate windows and daily markers.

Concrete adapters live under ``account_service.infra``.
"""

from __future__ import annotations

from .quota_gate import QuotaDecision, QuotaGate
from .token_signer import StubTokenSigner, TokenSigner

__all__ = [
    "QuotaDecision",
    "QuotaGate",
    "StubTokenSigner",
    "TokenSigner",
]
