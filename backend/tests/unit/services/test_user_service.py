from __future__ import annotations

import json

import pytest
from sqlalchemy import func, select

from pressroom.models.post import Post
from pressroom.models.refresh_token import RefreshToken
from pressroom.models.user import Role, User
from pressroom.services._shared.base import ServiceContext
from pressroom.services._shared.errors import ForbiddenError, NotFoundError, ServiceError
from pressroom.services.auth.dto import LoginIn
from pressroom.services.users.dto import PasswordChangeIn, ProfileUpdateIn
from tests.factories.post import PostFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def service(container):
    return container.users


def _ctx(user: User) -> ServiceContext:
    return ServiceContext(actor_id=user.id, actor_role=user.role.value)


def _count(session, model, *where) -> int:
    return int(session.execute(select(func.count()).select_from(model).where(*where)).scalar_one())


class TestReads:
    def test_get_user_is_cached(self, service, redis_client):
        user = UserFactory(username="cached")
        out = service.get_user(user.id)

        raw = redis_client.get(f"user:{user.id}")
        assert raw is not None
        assert json.loads(raw)["username"] == "cached"
        assert 0 < redis_client.ttl(f"user:{user.id}") <= 3600

        # served from the cache entry, not the database
        payload = json.loads(raw)
        payload["username"] = "from-cache"
        redis_client.set(f"user:{user.id}", json.dumps(payload))
        assert service.get_user(user.id).username == "from-cache"
        assert out.username == "cached"

    def test_cached_user_never_contains_password(self, service, redis_client):
        user = UserFactory()
        service.get_user(user.id)
        assert "password" not in redis_client.get(f"user:{user.id}")

    def test_missing_user(self, service, redis_client):
        with pytest.raises(NotFoundError):
            service.get_user("missing")
        assert redis_client.get("user:missing") is None

    def test_list_users_paginates(self, service):
        for _ in range(3):
            UserFactory()
        page = service.list_users(page=1, limit=2)
        assert len(page.items) == 2
        assert page.meta.total == 3
        assert page.meta.total_pages == 2


class TestProfile:
    def test_update_profile_invalidates_cache(self, service, redis_client):
        user = UserFactory(username="before")
        service.get_user(user.id)

        out = service.update_profile(user.id, ProfileUpdateIn(username="after", avatar="https://x/a.png"))

        assert out.username == "after"
        assert out.avatar == "https://x/a.png"
        assert redis_client.get(f"user:{user.id}") is None
        assert service.get_user(user.id).username == "after"

    def test_change_password(self, service, container):
        user = UserFactory()
        service.change_password(user.id, PasswordChangeIn(old_password=DEFAULT_PASSWORD, new_password="brandnew1"))
        assert container.auth.login(LoginIn(email=user.email, password="brandnew1")).user.id == user.id

    def test_change_password_requires_old_password(self, service):
        user = UserFactory()
        with pytest.raises(ServiceError, match="Old password is incorrect"):
            service.change_password(user.id, PasswordChangeIn(old_password="nope-nope", new_password="brandnew1"))


class TestAdmin:
    def test_change_role_by_super_admin(self, service, redis_client):
        boss = UserFactory(super_admin=True)
        user = UserFactory()
        service.get_user(user.id)

        out = service.change_role(_ctx(boss), user.id, Role.ADMIN)

        assert out.role == "ADMIN"
        assert redis_client.get(f"user:{user.id}") is None

    def test_change_role_by_admin_is_forbidden(self, service):
        admin = UserFactory(admin=True)
        user = UserFactory()
        with pytest.raises(ForbiddenError):
            service.change_role(_ctx(admin), user.id, Role.ADMIN)

    def test_toggle_status_flips_and_invalidates(self, service, redis_client):
        admin = UserFactory(admin=True)
        user = UserFactory()
        service.get_user(user.id)

        assert service.toggle_status(_ctx(admin), user.id).is_active is False
        assert redis_client.get(f"user:{user.id}") is None
        assert service.toggle_status(_ctx(admin), user.id).is_active is True

    def test_toggle_status_by_regular_user_is_forbidden(self, service):
        actor = UserFactory()
        with pytest.raises(ForbiddenError):
            service.toggle_status(_ctx(actor), UserFactory().id)

    def test_delete_user_cascades_and_invalidates(self, service, container, session, redis_client):
        boss = UserFactory(super_admin=True)
        victim = UserFactory()
        post = PostFactory(author=victim)
        container.auth.login(LoginIn(email=victim.email, password=DEFAULT_PASSWORD))
        service.get_user(victim.id)
        container.posts.get_post(post.id)
        container.posts.list_posts()

        victim_id, post_id = victim.id, post.id

        service.delete_user(_ctx(boss), victim_id)

        assert _count(session, User, User.id == victim_id) == 0
        assert _count(session, Post, Post.author_id == victim_id) == 0
        assert _count(session, RefreshToken, RefreshToken.user_id == victim_id) == 0
        assert redis_client.get(f"user:{victim_id}") is None
        assert redis_client.get(f"post:{post_id}") is None
        assert list(redis_client.scan_iter("posts:list:*")) == []

    def test_delete_user_requires_super_admin(self, service):
        admin = UserFactory(admin=True)
        with pytest.raises(ForbiddenError):
            service.delete_user(_ctx(admin), UserFactory().id)

    def test_delete_missing_user(self, service):
        boss = UserFactory(super_admin=True)
        with pytest.raises(NotFoundError):
            service.delete_user(_ctx(boss), "missing")
