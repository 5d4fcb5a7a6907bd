from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from account_service.services._shared.errors import RateScope
from account_service.services._shared.ports import QuotaDecision, QuotaGate

log = logging.getLogger(__name__)


class RedisQuotaGate(QuotaGate):
    """
    Fixed-window counters and day markers on Redis.

    Keys
    ----
    - ``rate_limit:{access token}`` / ``rate_limit_auth:{client ip}``:
      integer counters (INCR + EXPIRE).
    - caller-provided set keys for ``mark_once`` (SADD + EXPIRE).
    """

    def __init__(self, r: redis.Redis | None):
        self.r = r

    @staticmethod
    def _k(scope: RateScope, key: str) -> str:
        return f"{scope.value}:{key}"

    def check_and_increment(
        self, scope: RateScope, key: str, limit: int, window_seconds: int
    ) -> QuotaDecision:
        if self.r is None:
            log.warning("Rate limit skipped: redis not configured", extra={"scope": scope.value})
            return QuotaDecision.INDETERMINATE
        k = self._k(scope, key)
        try:
            with self.r.pipeline(transaction=True) as pipe:
                pipe.incr(k)
                # Re-armed on every hit: the window slides while traffic continues.
                pipe.expire(k, window_seconds)
                count, _ = pipe.execute()
        except RedisError:
            log.warning(
                "Rate limit skipped: redis unavailable",
                extra={"scope": scope.value},
                exc_info=True,
            )
            return QuotaDecision.INDETERMINATE
        if int(count) > limit:
            return QuotaDecision.DENIED
        return QuotaDecision.ALLOWED

    def _client(self) -> redis.Redis:
        if self.r is None:
            raise redis.ConnectionError("redis is not configured")
        return self.r

    def mark_once(self, set_key: str, member: str, ttl_seconds: int) -> bool:
        with self._client().pipeline(transaction=True) as pipe:
            pipe.sadd(set_key, member)
            pipe.expire(set_key, ttl_seconds)
            added, _ = pipe.execute()
        return int(added) == 1

    def unmark(self, set_key: str, member: str) -> None:
        self._client().srem(set_key, member)
