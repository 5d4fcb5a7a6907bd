from __future__ import annotations

import logging

from redis.exceptions import RedisError  # type: ignore[import-untyped]

from account_service.services._shared.base import BaseService, now_utc
from account_service.services._shared.errors import InternalFailureError
from account_service.services._shared.ports import QuotaGate
from account_service.services.profile.service import ProfileService
from account_service.services.rewards.dto import GrantResult, RewardConfig

log = logging.getLogger(__name__)


class RewardGranter(BaseService):
    """
    Once-per-UTC-day coin grant.

    The claim marker lives in the fast store (set ``reward:{YYYY-MM-DD}``);
    the balance lives in the database. A failed balance update removes the
    marker again so the claim can be retried. An unreachable fast store
    blocks the claim instead of risking a double grant.
    """

    KEY_PREFIX = "reward"

    def __init__(
        self,
        *,
        gate: QuotaGate,
        profile: ProfileService,
        cfg: RewardConfig | None = None,
    ) -> None:
        super().__init__()
        self.gate = gate
        self.profile = profile
        self.cfg = cfg or RewardConfig()

    def day_key(self) -> str:
        return f"{self.KEY_PREFIX}:{now_utc().date().isoformat()}"

    def grant_daily(self, user_id: int) -> GrantResult:
        key = self.day_key()
        member = str(user_id)
        ttl = int(self.cfg.marker_ttl.total_seconds())
        try:
            added = self.gate.mark_once(key, member, ttl)
        except RedisError as exc:
            raise InternalFailureError() from exc

        if not added:
            return GrantResult.ALREADY_GRANTED

        try:
            self.profile.change_coins(user_id, self.cfg.coins)
        except Exception:
            try:
                self.gate.unmark(key, member)
            except RedisError:
                log.error(
                    "Reward marker not removed after failed grant",
                    extra={"user_id": user_id},
                    exc_info=True,
                )
            raise

        log.info("Daily reward granted", extra={"user_id": user_id})
        return GrantResult.GRANTED
