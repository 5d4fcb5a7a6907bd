"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from account_service.api.deps import json_response, timing
from account_service.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and Redis health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    finally:
        db.session.rollback()

    r = get_redis()
    redis_status = "disabled"
    if r is not None:
        try:
            redis_status = "ok" if r.ping() else "fail"
        except RedisError:
            current_app.logger.warning("healthcheck.redis_error", exc_info=True)
            redis_status = "fail"

    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"status": "ok", "db": db_status, "redis": redis_status, "version": version}
    return json_response(payload)
