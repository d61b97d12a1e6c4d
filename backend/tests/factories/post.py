"""Factory Boy definition for :class:`pressroom.models.post.Post`."""

from __future__ import annotations

import factory

from pressroom.models.post import Post
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class PostFactory(BaseFactory):
    class Meta:
        model = Post

    title = factory.Sequence(lambda n: f"Post {n}")
    content = factory.Faker("paragraph")
    published = True
    author = factory.SubFactory(UserFactory)
