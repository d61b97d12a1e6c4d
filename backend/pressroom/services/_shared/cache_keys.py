"""Cache key layout shared by the user and post services."""

from __future__ import annotations

POSTS_LIST_PATTERN = "posts:list:*"


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


def post_key(post_id: str) -> str:
    return f"post:{post_id}"


def posts_list_key(page: int, limit: int, published: bool) -> str:
    """Key of one cached page of the post listing, e.g. ``posts:list:1:10:true``."""
    return f"posts:list:{page}:{limit}:{str(published).lower()}"
