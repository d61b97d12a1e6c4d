"""
Service-level exceptions.

These are framework-agnostic: services raise them, ``pressroom.core.errors``
turns them into RFC 7807 responses. Token errors are raised by the token
issuer and collapsed into :class:`AuthenticationError` by the auth service
before they reach a client.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name, e.g. ``uq_users_email``.
    :returns: ``True`` when the driver message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


class ServiceError(Exception):
    """Base class for all service-level errors (never HTTP-aware)."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :param key: Identifier or search key.
    """

    entity: str
    key: str

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """Raised when a unique constraint or business rule conflict occurs."""

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Credentials or tokens were rejected. Maps to HTTP 401."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """The caller is authenticated but not allowed. Maps to HTTP 403."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Refresh-token failures
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base for refresh-token rejections; ``reason`` is a stable log label."""

    reason = "token_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)


class TokenInvalid(TokenError):
    """Bad signature, expired, malformed, or not a refresh token."""

    reason = "invalid"


class TokenRevoked(TokenError):
    """The token is present in the revocation registry."""

    reason = "revoked"


class TokenUnknown(TokenError):
    """No active stored record matches the token (already rotated or purged)."""

    reason = "unknown"


class UserInactiveOrMissing(TokenError):
    """The token's subject no longer exists or has been deactivated."""

    reason = "user_inactive"
