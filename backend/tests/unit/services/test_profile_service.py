from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time

from account_service.models.user_settings import UserSettings
from account_service.services._shared.base import as_utc
from account_service.services._shared.errors import (
    InsufficientBalanceError,
    NotFoundError,
    PaymentFailedError,
    ValidationFailedError,
)
from account_service.services.profile.dto import ActivateSubscriptionIn, UpdateInfoIn
from tests.factories.user import UserFactory, UserSettingsFactory

PAY = "mock-success-payment-token"


def test_get_by_user_id_returns_read_model(profile_service):
    row = UserSettingsFactory(name="Ana", coin=4)

    out = profile_service.get_by_user_id(row.user_id)

    assert out.name == "Ana"
    assert out.coin == 4
    assert out.paid_subscription is False
    assert out.date_of_registration is not None


def test_get_by_user_id_missing_row(profile_service, db):
    with pytest.raises(NotFoundError):
        profile_service.get_by_user_id(999)


def test_create_initial_settings(profile_service):
    user = UserFactory()
    out = profile_service.create_initial_settings(user.id, name="newcomer")
    assert (out.user_id, out.name, out.coin) == (user.id, "newcomer", 0)


def test_update_info_trims_name_and_sets_icon(profile_service, session):
    row = UserSettingsFactory(name="Old")

    out = profile_service.update_info(
        row.user_id, UpdateInfoIn(name="  New Name ", icon="https://cdn.example.com/a.png")
    )

    assert out.name == "New Name"
    assert out.icon == "https://cdn.example.com/a.png"
    session.expire_all()
    assert session.get(UserSettings, row.user_id).name == "New Name"


@pytest.mark.parametrize("icon", [None, ""])
def test_update_info_without_icon_keeps_stored_icon(profile_service, session, icon):
    row = UserSettingsFactory(name="Old", icon="/static/icons/a.png")

    out = profile_service.update_info(row.user_id, UpdateInfoIn(name="New", icon=icon))

    assert (out.name, out.icon) == ("New", "/static/icons/a.png")
    session.expire_all()
    assert session.get(UserSettings, row.user_id).icon == "/static/icons/a.png"


def test_update_info_rejects_blank_name(profile_service):
    row = UserSettingsFactory(name="Keep")
    with pytest.raises(ValidationFailedError):
        profile_service.update_info(row.user_id, UpdateInfoIn(name="   "))
    assert profile_service.get_by_user_id(row.user_id).name == "Keep"


def test_change_coins_adds_and_subtracts(profile_service):
    row = UserSettingsFactory(coin=5)
    assert profile_service.change_coins(row.user_id, 3) == 8
    assert profile_service.change_coins(row.user_id, -8) == 0


def test_change_coins_never_goes_negative(profile_service):
    row = UserSettingsFactory(coin=2)
    with pytest.raises(InsufficientBalanceError):
        profile_service.change_coins(row.user_id, -3)
    assert profile_service.get_by_user_id(row.user_id).coin == 2


def test_change_coins_unknown_identity(profile_service, db):
    with pytest.raises(NotFoundError):
        profile_service.change_coins(12345, 1)


def test_activate_subscription_starts_now_when_inactive(profile_service):
    row = UserSettingsFactory()
    with freeze_time("2026-03-01 10:00:00"):
        out = profile_service.activate_subscription(
            row.user_id, ActivateSubscriptionIn(days=30, payment_token=PAY)
        )
    assert out.paid_subscription is True
    assert out.date_of_paid_subscription == datetime(2026, 3, 31, 10, 0, tzinfo=UTC)


def test_activate_subscription_extends_running_period(profile_service):
    expiry = datetime(2026, 3, 10, tzinfo=UTC)
    row = UserSettingsFactory(paid_subscription=True, date_of_paid_subscription=expiry)
    with freeze_time("2026-03-01 10:00:00"):
        out = profile_service.activate_subscription(
            row.user_id, ActivateSubscriptionIn(days=5, payment_token=PAY)
        )
    assert out.date_of_paid_subscription == expiry + timedelta(days=5)


def test_activate_subscription_after_lapse_restarts_from_now(profile_service):
    row = UserSettingsFactory(
        paid_subscription=True, date_of_paid_subscription=datetime(2026, 1, 1, tzinfo=UTC)
    )
    with freeze_time("2026-03-01 00:00:00"):
        out = profile_service.activate_subscription(
            row.user_id, ActivateSubscriptionIn(days=1, payment_token=PAY)
        )
    assert out.date_of_paid_subscription == datetime(2026, 3, 2, tzinfo=UTC)


def test_activate_subscription_rejects_bad_payment(profile_service):
    row = UserSettingsFactory()
    with pytest.raises(PaymentFailedError):
        profile_service.activate_subscription(
            row.user_id, ActivateSubscriptionIn(days=30, payment_token="declined")
        )
    assert profile_service.get_by_user_id(row.user_id).paid_subscription is False


def test_activate_subscription_rejects_non_positive_days(profile_service, db):
    with pytest.raises(ValidationFailedError):
        profile_service.activate_subscription(1, ActivateSubscriptionIn(days=0, payment_token=PAY))


def test_deactivate_expired_subscriptions_only_touches_lapsed_rows(profile_service, session):
    now = datetime.now(UTC)
    lapsed = UserSettingsFactory(
        paid_subscription=True, date_of_paid_subscription=now - timedelta(minutes=1)
    )
    running = UserSettingsFactory(
        paid_subscription=True, date_of_paid_subscription=now + timedelta(days=3)
    )
    free = UserSettingsFactory(paid_subscription=False)
    ids = (lapsed.user_id, running.user_id, free.user_id)

    assert profile_service.deactivate_expired_subscriptions() == 1
    assert profile_service.deactivate_expired_subscriptions() == 0

    session.expire_all()
    states = [session.get(UserSettings, i).paid_subscription for i in ids]
    assert states == [False, True, False]
    kept = session.get(UserSettings, ids[0]).date_of_paid_subscription
    assert as_utc(kept) < now
