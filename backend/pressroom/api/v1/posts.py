"""Post endpoints."""

from __future__ import annotations

from flask import Blueprint

from pressroom.api.deps import (
    get_container,
    json_response,
    load_json,
    parse_pagination,
    require_auth,
    service_context,
    timing,
)
from pressroom.schemas import MetaSchema, PostCreateSchema, PostSchema, PostUpdateSchema
from pressroom.services.posts.dto import PostCreateIn, PostUpdateIn

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
meta_schema = MetaSchema()
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()


def _page_response(page):
    return json_response({"data": post_list_schema.dump(page.items), "meta": meta_schema.dump(page.meta)})


@bp.get("")
@timing
def list_posts():
    """Published posts, newest first."""

    pagination = parse_pagination()
    return _page_response(get_container().posts.list_posts(pagination.page, pagination.limit))


@bp.get("/<string:post_id>")
@timing
def get_post(post_id: str):
    post = get_container().posts.get_post(post_id)
    return json_response({"data": post_schema.dump(post)})


@bp.get("/author/<string:author_id>")
@timing
def list_by_author(author_id: str):
    pagination = parse_pagination()
    return _page_response(get_container().posts.list_by_author(author_id, pagination.page, pagination.limit))


@bp.post("")
@require_auth
@timing
def create_post():
    payload = load_json(post_create_schema)
    post = get_container().posts.create_post(service_context(), PostCreateIn(**payload))
    return json_response({"data": post_schema.dump(post)}, status=201)


@bp.put("/<string:post_id>")
@require_auth
@timing
def update_post(post_id: str):
    payload = load_json(post_update_schema)
    post = get_container().posts.update_post(service_context(), post_id, PostUpdateIn(**payload))
    return json_response({"data": post_schema.dump(post)})


@bp.delete("/<string:post_id>")
@require_auth
@timing
def delete_post(post_id: str):
    get_container().posts.delete_post(service_context(), post_id)
    return json_response({"data": {"message": "Post deleted"}})


@bp.patch("/<string:post_id>/publish")
@require_auth
@timing
def publish_post(post_id: str):
    post = get_container().posts.publish(service_context(), post_id)
    return json_response({"data": post_schema.dump(post)})


@bp.patch("/<string:post_id>/unpublish")
@require_auth
@timing
def unpublish_post(post_id: str):
    post = get_container().posts.unpublish(service_context(), post_id)
    return json_response({"data": post_schema.dump(post)})
