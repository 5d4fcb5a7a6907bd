from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class GrantResult(str, Enum):
    """Outcome of a daily reward claim."""

    GRANTED = "granted"
    ALREADY_GRANTED = "already_granted"


@dataclass(frozen=True, slots=True)
class RewardConfig:
    """
    Daily reward policy.

    :param coins: Balance credited per successful claim.
    :param marker_ttl: Lifetime of the per-day claim marker.
    """

    coins: int = 3
    marker_ttl: timedelta = timedelta(hours=25)
