"""Authentication endpoints."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import get_jwt_identity

from pressroom.api.deps import get_container, json_response, load_json, require_auth, timing
from pressroom.schemas import (
    AuthResultSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from pressroom.services.auth.dto import LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
auth_result_schema = AuthResultSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return it with a first token pair."""

    payload = load_json(register_schema)
    result = get_container().auth.register(RegisterIn(**payload))
    return json_response({"data": auth_result_schema.dump(result)}, status=201)


@bp.post("/login")
@timing
def login():
    payload = load_json(login_schema)
    result = get_container().auth.login(LoginIn(**payload))
    return json_response({"data": auth_result_schema.dump(result)})


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new pair; the old one stops working."""

    payload = load_json(refresh_schema)
    pair = get_container().auth.refresh(payload["refresh_token"])
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the given refresh token, or every session when none is sent."""

    payload = load_json(logout_schema)
    revoked = get_container().auth.logout(str(get_jwt_identity()), payload.get("refresh_token"))
    return json_response({"data": {"revoked": revoked}})
