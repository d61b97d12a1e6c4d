"""
DTOs for UserService.

Output DTOs double as cache payloads, so each one knows how to turn itself
into JSON-safe primitives and back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pressroom.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Input DTO for profile updates; ``None`` fields are left untouched.

    :param username: New display name.
    :type username: str | None
    :param avatar: New avatar URL.
    :type avatar: str | None
    """

    username: str | None = None
    avatar: str | None = None

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in (("username", self.username), ("avatar", self.avatar)) if v is not None}


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    """
    Input DTO for changing one's own password.

    :param old_password: Current password.
    :type old_password: str
    :param new_password: New raw password.
    :type new_password: str
    """

    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public-safe user representation (never includes the password hash)."""

    id: str
    email: str
    username: str | None
    avatar: str | None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            avatar=user.avatar,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "avatar": self.avatar,
            "role": self.role,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserOut:
        return cls(
            id=data["id"],
            email=data["email"],
            username=data["username"],
            avatar=data["avatar"],
            role=data["role"],
            is_active=bool(data["is_active"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
