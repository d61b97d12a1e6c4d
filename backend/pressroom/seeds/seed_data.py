"""Idempotent demo data: a super admin, a regular user and a few posts."""

from __future__ import annotations

import logging
from typing import Any, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from pressroom.models.post import Post
from pressroom.models.user import Role, User

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "admin@example.com",
        "username": "Admin",
        "password": "admin123",
        "role": Role.SUPER_ADMIN,
    },
    {
        "email": "user@example.com",
        "username": "TestUser",
        "password": "user123",
        "role": Role.USER,
    },
]

POST_FIXTURES: list[dict[str, Any]] = [
    {
        "title": "Welcome to Pressroom",
        "content": "A sample project built with Flask, SQLAlchemy, Redis and JWT.",
        "published": True,
        "author_email": "admin@example.com",
    },
    {
        "title": "Getting started with SQLAlchemy",
        "content": "SQLAlchemy gives Python applications a typed, composable way to talk to databases.",
        "published": True,
        "author_email": "admin@example.com",
    },
    {
        "title": "Caching with Redis",
        "content": "Redis is a fast key-value store, often used for caching and session state.",
        "published": False,
        "author_email": "user@example.com",
    },
]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def seed_users(session: Session, summary: dict[str, dict[str, int]]) -> dict[str, User]:
    """Create the fixture accounts; existing accounts are left untouched."""
    by_email: dict[str, User] = {}
    for fixture in USER_FIXTURES:
        email = fixture["email"]
        user = session.execute(select(User).filter_by(email=email)).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(
                email=email,
                username=fixture["username"],
                password=fixture["password"],
                role=fixture["role"],
            )
            session.add(user)
            session.flush()
        by_email[email] = user
        _touch(summary, "users", created)
    return by_email


def seed_posts(session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]) -> None:
    """Create sample posts, matched on ``(title, author)``."""
    for fixture in POST_FIXTURES:
        author = users[fixture["author_email"]]
        post = session.execute(
            select(Post).filter_by(title=fixture["title"], author_id=author.id)
        ).scalar_one_or_none()
        created = post is None
        if post is None:
            session.add(
                Post(
                    title=fixture["title"],
                    content=fixture["content"],
                    published=fixture["published"],
                    author_id=author.id,
                )
            )
        _touch(summary, "posts", created)


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed users then posts in one transaction and return per-table counters."""
    if verbose:
        LOGGER.info("Running demo seed...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    try:
        users = seed_users(session, summary)
        seed_posts(session, users, summary)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return summary


__all__ = ["POST_FIXTURES", "USER_FIXTURES", "run_all", "seed_posts", "seed_users"]
