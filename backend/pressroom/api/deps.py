"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from pressroom.container import Container
from pressroom.core.logger import ensure_request_id
from pressroom.services._shared.base import ServiceContext
from pressroom.services._shared.dto import PaginationIn
from pressroom.services._shared.errors import ForbiddenError
from pressroom.schemas.common import PaginationQuerySchema

F = TypeVar("F", bound=Callable[..., Any])

CONTAINER_KEY = "container"


def get_container() -> Container:
    """Return the composition root built by :func:`pressroom.factory.create_app`."""
    return cast(Container, current_app.extensions[CONTAINER_KEY])


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> PaginationIn:
    """Parse ``page``/``limit`` from ``request.args`` using Marshmallow."""
    data = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit).load(request.args)
    return PaginationIn(page=data["page"], limit=data["limit"])


def load_json(schema) -> dict[str, Any]:
    """Validate the JSON body; a missing body is treated as ``{}``."""
    return cast(dict[str, Any], schema.load(request.get_json(silent=True) or {}))


def service_context() -> ServiceContext:
    """Build the caller context from the verified access token."""
    claims = get_jwt() or {}
    return ServiceContext(
        actor_id=str(get_jwt_identity()),
        actor_role=claims.get("role"),
        request_id=ensure_request_id(),
    )


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*roles: str) -> Callable[[F], F]:
    """Ensure the verified access token's ``role`` claim is one of ``roles``."""

    allowed = frozenset(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            verify_jwt_in_request(optional=False)
            claims = get_jwt() or {}
            if claims.get("role") not in allowed:
                raise ForbiddenError("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
