"""User endpoints: self-service profile plus admin management."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import get_jwt_identity

from pressroom.api.deps import (
    get_container,
    json_response,
    load_json,
    parse_pagination,
    require_auth,
    require_roles,
    service_context,
    timing,
)
from pressroom.models.user import Role
from pressroom.schemas import (
    MetaSchema,
    PasswordChangeSchema,
    ProfileUpdateSchema,
    RoleUpdateSchema,
    UserSchema,
)
from pressroom.services.users.dto import PasswordChangeIn, ProfileUpdateIn

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
meta_schema = MetaSchema()
profile_update_schema = ProfileUpdateSchema()
password_change_schema = PasswordChangeSchema()
role_update_schema = RoleUpdateSchema()

ADMINS = (Role.ADMIN.value, Role.SUPER_ADMIN.value)


@bp.get("/profile")
@require_auth
@timing
def get_profile():
    user = get_container().users.get_user(str(get_jwt_identity()))
    return json_response({"data": user_schema.dump(user)})


@bp.put("/profile")
@require_auth
@timing
def update_profile():
    payload = load_json(profile_update_schema)
    user = get_container().users.update_profile(str(get_jwt_identity()), ProfileUpdateIn(**payload))
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/password")
@require_auth
@timing
def change_password():
    payload = load_json(password_change_schema)
    get_container().users.change_password(str(get_jwt_identity()), PasswordChangeIn(**payload))
    return json_response({"data": {"message": "Password updated"}})


@bp.get("")
@require_roles(*ADMINS)
@timing
def list_users():
    """Return paginated users, newest first."""

    pagination = parse_pagination()
    page = get_container().users.list_users(pagination.page, pagination.limit)
    return json_response({"data": user_list_schema.dump(page.items), "meta": meta_schema.dump(page.meta)})


@bp.get("/<string:user_id>")
@require_roles(*ADMINS)
@timing
def get_user(user_id: str):
    user = get_container().users.get_user(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<string:user_id>/role")
@require_roles(Role.SUPER_ADMIN.value)
@timing
def change_role(user_id: str):
    payload = load_json(role_update_schema)
    user = get_container().users.change_role(service_context(), user_id, Role(payload["role"]))
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<string:user_id>/status")
@require_roles(*ADMINS)
@timing
def toggle_status(user_id: str):
    """Flip the account between active and disabled."""

    user = get_container().users.toggle_status(service_context(), user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<string:user_id>")
@require_roles(Role.SUPER_ADMIN.value)
@timing
def delete_user(user_id: str):
    get_container().users.delete_user(service_context(), user_id)
    return json_response({"data": {"message": "User deleted"}})
