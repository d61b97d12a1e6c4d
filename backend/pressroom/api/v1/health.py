"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from pressroom.api.deps import json_response, timing
from pressroom.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report database and key-value store reachability; 503 when either fails."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    redis_status = "ok"
    try:
        get_redis(current_app).ping()
    except RedisError:
        current_app.logger.exception("healthcheck.redis_error")
        redis_status = "fail"

    healthy = db_status == redis_status == "ok"
    payload = {
        "status": "ok" if healthy else "degraded",
        "db": db_status,
        "redis": redis_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if healthy else 503)
