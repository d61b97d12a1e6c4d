"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pressroom.repositories import PostRepository, RefreshTokenRepository, UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one use-case.

    Repositories exposed on the instance share the same session, so
    everything done inside one ``with`` block lands in one transaction.
    """

    users: UserRepository
    posts: PostRepository
    refresh_tokens: RefreshTokenRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
