"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from pressroom.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from pressroom.repositories.post import PostRepository
from pressroom.repositories.refresh_token import RefreshTokenRepository
from pressroom.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "apply_sorting",
    # Domain
    "PostRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
