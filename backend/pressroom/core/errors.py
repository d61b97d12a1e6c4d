"""Centralized JSON (RFC 7807) error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from pressroom.core.extensions import jwt
from pressroom.core.logger import ensure_request_id
from pressroom.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
)

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        415: "unsupported_media_type",
        422: "unprocessable_entity",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Problem+JSON dictionary.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def problem_response(status: int, message: str, *, code: str | None = None, details: dict[str, Any] | None = None) -> tuple[Response, int]:
    """Return a ``(response, status)`` pair with ``application/problem+json``."""
    problem = _as_problem(
        status=status,
        code=code or _http_status_to_code(status),
        message=message,
        details=details,
    )
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, status


def service_error_status(err: ServiceError) -> int:
    """HTTP status for a service-level error."""
    if isinstance(err, NotFoundError):
        return HTTPStatus.NOT_FOUND
    if isinstance(err, ConflictError):
        return HTTPStatus.CONFLICT
    if isinstance(err, AuthenticationError):
        return HTTPStatus.UNAUTHORIZED
    if isinstance(err, ForbiddenError):
        return HTTPStatus.FORBIDDEN
    return HTTPStatus.BAD_REQUEST


def _register_jwt_callbacks() -> None:
    """Render Flask-JWT-Extended rejections as problem+json too."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, "Missing access token")

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, "Invalid access token")

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return problem_response(HTTPStatus.UNAUTHORIZED, "Access token has expired", code="token_expired")

    @jwt.token_verification_failed_loader
    def _wrong_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return problem_response(HTTPStatus.UNAUTHORIZED, "Invalid access token")


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error becomes an RFC 7807 response carrying ``request_id``.
    - 5xx are logged with ``exc_info``; 4xx as warnings or info.
    """
    _register_jwt_callbacks()

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status = service_error_status(err)
        level = log.info if status == HTTPStatus.UNAUTHORIZED else log.warning
        level("service error", extra={"reason": type(err).__name__})
        return problem_response(status, str(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("http exception", extra={"reason": error_code})
        return problem_response(status, message, code=error_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        log.warning("validation error")
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            code="validation_error",
            details={"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.error("integrity error", exc_info=True)
        return problem_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("database unavailable", exc_info=True)
        return problem_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(RedisError)
    def handle_redis_error(err: RedisError):
        log.error("key-value store unavailable", exc_info=True)
        return problem_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled exception", exc_info=True)
        return problem_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error", code="internal_server_error")
