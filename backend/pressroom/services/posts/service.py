"""
PostService
===========

CRUD and publication workflow for posts.

Caching
-------
* ``post:<id>`` holds one post.
* ``posts:list:<page>:<limit>:<published>`` holds one page of the listing.

Any write drops the affected ``post:<id>`` entry and every cached listing
page, since a single change can shift items across pages.
"""

from __future__ import annotations

import logging

from pressroom.models.post import Post
from pressroom.repositories.post import PostRepository
from pressroom.services._shared.base import BaseService, ServiceContext
from pressroom.services._shared.cache import CacheAside
from pressroom.services._shared.cache_keys import POSTS_LIST_PATTERN, post_key, posts_list_key
from pressroom.services._shared.dto import PageMeta, PageOut
from pressroom.services._shared.errors import NotFoundError
from pressroom.services.posts.dto import PostCreateIn, PostOut, PostUpdateIn

logger = logging.getLogger(__name__)


def _page_from_dict(data) -> PageOut[PostOut]:
    return PageOut.from_dict(data, PostOut.from_dict)


def _page_to_dict(page: PageOut[PostOut]):
    return page.to_dict(PostOut.to_dict)


class PostService(BaseService):
    """
    Application service for posts.

    :param cache: Cache-aside helper on the shared key-value store.
    :param ttl: Lifetime of cached posts and listing pages in seconds.
    """

    def __init__(self, *, cache: CacheAside, ttl: int) -> None:
        self.cache = cache
        self.ttl = ttl

    # --------------------------------------------------------------------- #
    # Reads
    # --------------------------------------------------------------------- #

    def list_posts(self, page: int = 1, limit: int = 10, *, published_only: bool = True) -> PageOut[PostOut]:
        """Cached newest-first listing."""
        p = self.ensure_pagination(page, limit)
        return self.cache.get_or_compute(
            posts_list_key(p.page, p.limit, published_only),
            lambda: self._load_page(p.page, p.limit, published_only),
            self.ttl,
            dumps=_page_to_dict,
            loads=_page_from_dict,
        )

    def _load_page(self, page: int, limit: int, published_only: bool) -> PageOut[PostOut]:
        with self.ro_uow() as uow:
            result = uow.posts.list_page(page=page, limit=limit, published=True if published_only else None)
            return PageOut(
                items=[PostOut.from_model(post) for post in result.items],
                meta=PageMeta.build(total=result.total, page=page, limit=limit),
            )

    def get_post(self, post_id: str) -> PostOut:
        """
        Return one post, from cache when possible.

        :raises NotFoundError: If the post does not exist.
        """
        return self.cache.get_or_compute(
            post_key(post_id),
            lambda: self._load(post_id),
            self.ttl,
            dumps=PostOut.to_dict,
            loads=PostOut.from_dict,
        )

    def _load(self, post_id: str) -> PostOut:
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            return PostOut.from_model(post)

    def list_by_author(self, author_id: str, page: int = 1, limit: int = 10) -> PageOut[PostOut]:
        """All of an author's posts, drafts included (not cached)."""
        p = self.ensure_pagination(page, limit)
        with self.ro_uow() as uow:
            result = uow.posts.list_by_author(author_id, page=p.page, limit=p.limit)
            return PageOut(
                items=[PostOut.from_model(post) for post in result.items],
                meta=PageMeta.build(total=result.total, page=p.page, limit=p.limit),
            )

    # --------------------------------------------------------------------- #
    # Writes
    # --------------------------------------------------------------------- #

    def create_post(self, ctx: ServiceContext, dto: PostCreateIn) -> PostOut:
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.add(
                Post(
                    title=dto.title,
                    content=dto.content,
                    published=dto.published,
                    author_id=ctx.actor_id,
                )
            )
            out = PostOut.from_model(post)

        self.cache.invalidate_by_pattern(POSTS_LIST_PATTERN)
        return out

    def update_post(self, ctx: ServiceContext, post_id: str, dto: PostUpdateIn) -> PostOut:
        """
        Apply a partial update.

        :raises NotFoundError: Unknown post.
        :raises ForbiddenError: Caller is neither the author nor an admin.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = self._owned(repo, ctx, post_id)
            repo.assign_updates(post, dto.changes())
            out = PostOut.from_model(post)

        self._invalidate(post_id)
        return out

    def delete_post(self, ctx: ServiceContext, post_id: str) -> None:
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            repo.delete(self._owned(repo, ctx, post_id))

        self._invalidate(post_id)

    def publish(self, ctx: ServiceContext, post_id: str) -> PostOut:
        return self.update_post(ctx, post_id, PostUpdateIn(published=True))

    def unpublish(self, ctx: ServiceContext, post_id: str) -> PostOut:
        return self.update_post(ctx, post_id, PostUpdateIn(published=False))

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    def _owned(self, repo: PostRepository, ctx: ServiceContext, post_id: str) -> Post:
        post = repo.get(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        self.ensure_owner_or_admin(ctx, post.author_id, msg="You can only modify your own posts.")
        return post

    def _invalidate(self, post_id: str) -> None:
        self.cache.invalidate(post_key(post_id))
        self.cache.invalidate_by_pattern(POSTS_LIST_PATTERN)
