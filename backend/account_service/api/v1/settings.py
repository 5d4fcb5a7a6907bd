"""Profile endpoints: settings, daily reward and subscription."""

from __future__ import annotations

from flask import Blueprint, g, request

from account_service.api.deps import (
    get_profile_service,
    get_reward_granter,
    identity_rate_limit,
    json_response,
    require_auth,
    timing,
)
from account_service.schemas import SettingsSchema, SettingsUpdateSchema, SubscriptionSchema
from account_service.services._shared.errors import AlreadyGrantedTodayError
from account_service.services.profile.dto import ActivateSubscriptionIn, UpdateInfoIn
from account_service.services.rewards.dto import GrantResult

bp = Blueprint("settings", __name__)
bp.before_request(identity_rate_limit)

settings_schema = SettingsSchema()
update_schema = SettingsUpdateSchema()
subscription_schema = SubscriptionSchema()


@bp.get("")
@require_auth
@timing
def get_settings():
    settings = get_profile_service().get_by_user_id(g.user_id)
    return json_response(settings_schema.dump(settings))


@bp.put("")
@require_auth
@timing
def update_settings():
    data = update_schema.load(request.get_json(silent=True) or {})
    settings = get_profile_service().update_info(
        g.user_id, UpdateInfoIn(name=data["name"], icon=data["icon"])
    )
    return json_response(settings_schema.dump(settings))


@bp.post("/day-coin")
@require_auth
@timing
def claim_day_coin():
    """Grant the daily coins once per UTC day."""

    if get_reward_granter().grant_daily(g.user_id) is GrantResult.ALREADY_GRANTED:
        raise AlreadyGrantedTodayError()
    settings = get_profile_service().get_by_user_id(g.user_id)
    return json_response(settings_schema.dump(settings))


@bp.post("/subscription")
@require_auth
@timing
def activate_subscription():
    data = subscription_schema.load(request.get_json(silent=True) or {})
    settings = get_profile_service().activate_subscription(
        g.user_id, ActivateSubscriptionIn(days=data["days"], payment_token=data["payment_token"])
    )
    return json_response(settings_schema.dump(settings))
