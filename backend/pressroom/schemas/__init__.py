"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthResultSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .common import MetaSchema, PaginationQuerySchema
from .post import PostCreateSchema, PostSchema, PostUpdateSchema
from .user import PasswordChangeSchema, ProfileUpdateSchema, RoleUpdateSchema, UserSchema

__all__ = [
    "AuthResultSchema",
    "LoginSchema",
    "LogoutSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "PostCreateSchema",
    "PostSchema",
    "PostUpdateSchema",
    "PasswordChangeSchema",
    "ProfileUpdateSchema",
    "RoleUpdateSchema",
    "UserSchema",
]
