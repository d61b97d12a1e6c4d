"""Post model authored by a user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from pressroom.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Post(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Blog-style post.

    Fields
    ------
    title : str
        Up to 200 characters, required.
    content : str | None
        Free-form body.
    published : bool
        Only published posts appear in the public listing.
    author_id : str
        Owning user; posts are removed together with their author.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    author: Mapped[User] = relationship(back_populates="posts", lazy="joined")

    __table_args__ = (
        Index("ix_posts_author_id", "author_id"),
        Index("ix_posts_published_created_at", "published", "created_at"),
    )

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        return value.strip()
