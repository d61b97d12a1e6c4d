from __future__ import annotations

from datetime import datetime

import pytest

from pressroom.repositories.post import PostRepository
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> PostRepository:
    return PostRepository(session=session)


def test_list_page_filters_and_orders(repo):
    author = UserFactory()
    a = PostFactory(author=author, created_at=datetime(2026, 1, 1))
    b = PostFactory(author=author, created_at=datetime(2026, 1, 2))
    draft = PostFactory(author=author, published=False, created_at=datetime(2026, 1, 3))

    published = repo.list_page(page=1, limit=10, published=True)
    assert [p.id for p in published.items] == [b.id, a.id]

    everything = repo.list_page(page=1, limit=10)
    assert [p.id for p in everything.items] == [draft.id, b.id, a.id]


def test_list_page_second_page(repo):
    author = UserFactory()
    posts = [PostFactory(author=author, created_at=datetime(2026, 1, day)) for day in range(1, 6)]

    page = repo.list_page(page=2, limit=2, published=True)

    assert page.total == 5
    assert page.pages == 3
    assert [p.id for p in page.items] == [posts[2].id, posts[1].id]


def test_ids_by_author(repo):
    author = UserFactory()
    mine = {PostFactory(author=author).id for _ in range(2)}
    PostFactory()
    assert set(repo.ids_by_author(author.id)) == mine


def test_assign_updates_rejects_unknown_fields(repo):
    post = PostFactory()
    with pytest.raises(ValueError):
        repo.assign_updates(post, {"author_id": "someone-else"})
