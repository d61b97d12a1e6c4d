"""Service layer public API.

Callers can import the application services and their DTOs from
:mod:`pressroom.services` without knowing the internal layout.

Re-exports
----------
- Base primitives (from ``pressroom.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``pressroom.services._shared.dto``)
    * :class:`PaginationIn`, :class:`PageMeta`, :class:`PageOut`

- Auth (from ``pressroom.services.auth``)
    * :class:`AuthService`, :class:`TokenIssuer`, :class:`RevocationRegistry`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`AuthOut`,
      :class:`TokenPairOut`, :class:`TokenLifetimes`

- Users and posts
    * :class:`UserService`, :class:`PostService` and their DTOs
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Shared DTOs
from ._shared.dto import PageMeta, PageOut, PaginationIn

# Auth
from .auth.dto import AuthOut, LoginIn, RegisterIn, TokenLifetimes, TokenPairOut
from .auth.revocation import RevocationRegistry
from .auth.service import AuthService
from .auth.tokens import TokenIssuer

# Posts
from .posts.dto import PostCreateIn, PostOut, PostUpdateIn
from .posts.service import PostService

# Users
from .users.dto import PasswordChangeIn, ProfileUpdateIn, UserOut
from .users.service import UserService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    "PageOut",
    # Auth
    "AuthService",
    "TokenIssuer",
    "RevocationRegistry",
    "RegisterIn",
    "LoginIn",
    "AuthOut",
    "TokenPairOut",
    "TokenLifetimes",
    # Posts
    "PostService",
    "PostCreateIn",
    "PostUpdateIn",
    "PostOut",
    # Users
    "UserService",
    "ProfileUpdateIn",
    "PasswordChangeIn",
    "UserOut",
]
