from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from unittest import mock

from account_service.models.user_settings import UserSettings
from account_service.tasks import subscription_sweep
from account_service.tasks.subscription_sweep import SubscriptionSweeper
from tests.factories.user import UserSettingsFactory


def test_run_once_reports_affected_rows(app, session):
    UserSettingsFactory(
        paid_subscription=True,
        date_of_paid_subscription=datetime.now(UTC) - timedelta(hours=1),
    )
    UserSettingsFactory(
        paid_subscription=True,
        date_of_paid_subscription=datetime.now(UTC) + timedelta(hours=1),
    )

    sweeper = SubscriptionSweeper(app, interval=600)
    assert sweeper.run_once() == 1
    assert sweeper.run_once() == 0

    session.expire_all()
    assert session.query(UserSettings).filter_by(paid_subscription=True).count() == 1


def test_loop_survives_failures_and_stops(app, db):
    ticked = threading.Event()
    calls = []

    def flaky(self):
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("db went away")
        ticked.set()
        return 0

    with mock.patch.object(SubscriptionSweeper, "run_once", flaky):
        sweeper = SubscriptionSweeper(app, interval=1)
        sweeper.interval = 0.01
        sweeper.start()
        try:
            assert ticked.wait(2.0)
        finally:
            sweeper.stop()

    assert len(calls) >= 2
    assert sweeper.running is False


def test_init_app_respects_the_enable_flag(app):
    assert app.config["SUBSCRIPTION_SWEEP_ENABLED"] is False
    assert subscription_sweep.init_app(app) is None
    assert subscription_sweep.EXTENSION_KEY not in app.extensions
