"""Post repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from pressroom.models.post import Post
from pressroom.repositories.base import BaseRepository, Page, Pagination

NEWEST_FIRST = ["-created_at"]


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for :class:`Post`."""

    model = Post

    def _default_eagerload(self, stmt):
        # 1:1 author, joined to avoid N+1 when listing
        return stmt.options(joinedload(Post.author))

    def _sortable_fields(self):
        return {"created_at": Post.created_at, "title": Post.title}

    def _updatable_fields(self):
        return {"title", "content", "published"}

    def list_page(self, *, page: int, limit: int, published: bool | None = None) -> Page[Post]:
        """Newest-first page, optionally filtered by publication state."""
        where = [] if published is None else [Post.published.is_(published)]
        return self.paginate(Pagination(page=page, limit=limit, sort=NEWEST_FIRST), where=where)

    def ids_by_author(self, author_id: str) -> list[str]:
        stmt = select(Post.id).where(Post.author_id == author_id)
        return list(self.session.execute(stmt).scalars())

    def list_by_author(self, author_id: str, *, page: int, limit: int) -> Page[Post]:
        return self.paginate(
            Pagination(page=page, limit=limit, sort=NEWEST_FIRST),
            where=[Post.author_id == author_id],
        )
