"""Recurring job that turns off paid subscriptions once they expire."""

from __future__ import annotations

import logging
import threading

from flask import Flask

from account_service.services.profile.service import ProfileService

log = logging.getLogger(__name__)

EXTENSION_KEY = "subscription_sweeper"


class SubscriptionSweeper:
    """
    Daemon thread calling :meth:`ProfileService.deactivate_expired_subscriptions`
    every ``interval`` seconds.

    The thread owns no request state; it talks to the database through its
    own application context. A failed tick is logged and retried on the next
    one.
    """

    def __init__(self, app: Flask, *, interval: float = 600.0) -> None:
        self.app = app
        self.interval = max(1.0, float(interval))
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._loop, name="account_service.subscription_sweep", daemon=True
        )

    def run_once(self) -> int:
        """Run one sweep; returns the number of subscriptions turned off."""
        with self.app.app_context():
            affected = ProfileService().deactivate_expired_subscriptions()
        log.info("Subscription sweep finished", extra={"affected": affected})
        return affected

    def start(self) -> None:
        if not self._thread.is_alive():
            self._thread.start()
            log.info("Subscription sweep started (every %ss)", self.interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.run_once()
            except Exception:
                log.exception("Subscription sweep failed; retrying next tick")


def init_app(app: Flask) -> SubscriptionSweeper | None:
    """Start the sweeper once per app when ``SUBSCRIPTION_SWEEP_ENABLED``."""
    if not app.config.get("SUBSCRIPTION_SWEEP_ENABLED", True):
        return None
    existing = app.extensions.get(EXTENSION_KEY)
    if existing is not None:
        return existing
    sweeper = SubscriptionSweeper(app, interval=app.config.get("SUBSCRIPTION_SWEEP_INTERVAL", 600))
    app.extensions[EXTENSION_KEY] = sweeper
    sweeper.start()
    return sweeper
