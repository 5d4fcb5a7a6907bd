"""Signed-in device listing."""

from __future__ import annotations

from flask import Blueprint, g

from account_service.api.deps import (
    get_session_service,
    identity_rate_limit,
    json_response,
    require_auth,
    timing,
)
from account_service.schemas import SessionSchema

bp = Blueprint("sessions", __name__)
bp.before_request(identity_rate_limit)

session_schema = SessionSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_sessions():
    sessions = get_session_service().list_sessions(g.user_id)
    return json_response({"data": session_schema.dump(sessions)})
