from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pressroom.models.post import Post


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for a new post.

    :param title: Up to 200 characters.
    :param content: Optional body.
    :param published: Publish immediately.
    """

    title: str
    content: str | None = None
    published: bool = False


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """Partial update; ``None`` fields are left untouched."""

    title: str | None = None
    content: str | None = None
    published: bool | None = None

    def changes(self) -> dict[str, Any]:
        fields = (("title", self.title), ("content", self.content), ("published", self.published))
        return {k: v for k, v in fields if v is not None}


@dataclass(frozen=True, slots=True)
class AuthorOut:
    id: str
    email: str
    username: str | None


@dataclass(frozen=True, slots=True)
class PostOut:
    """Post with a summary of its author; also the cached shape."""

    id: str
    title: str
    content: str | None
    published: bool
    author_id: str
    author: AuthorOut
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, post: Post) -> PostOut:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            published=post.published,
            author_id=post.author_id,
            author=AuthorOut(
                id=post.author.id,
                email=post.author.email,
                username=post.author.username,
            ),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "published": self.published,
            "author_id": self.author_id,
            "author": {
                "id": self.author.id,
                "email": self.author.email,
                "username": self.author.username,
            },
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PostOut:
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            published=bool(data["published"]),
            author_id=data["author_id"],
            author=AuthorOut(**data["author"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
