"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

# Signed refresh JWTs stay well below this.
MAX_TOKEN_LENGTH = 2048


class RegisterSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=20))
    username = fields.String(load_default=None, validate=validate.Length(min=2, max=20))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=20))


class RefreshSchema(Schema):
    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=MAX_TOKEN_LENGTH))


class LogoutSchema(Schema):
    """Omit ``refresh_token`` to end every session of the caller."""

    refresh_token = fields.String(load_default=None, validate=validate.Length(min=1, max=MAX_TOKEN_LENGTH))


class TokenPairSchema(Schema):
    """Access/refresh pair; lifetimes are in seconds."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    access_expires_in = fields.Integer(required=True)
    refresh_expires_in = fields.Integer(required=True)
    token_type = fields.String(dump_default="Bearer")


class AuthUserSchema(Schema):
    id = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)
    role = fields.String(required=True)


class AuthResultSchema(Schema):
    """Response of register/login."""

    user = fields.Nested(AuthUserSchema, required=True)
    tokens = fields.Nested(TokenPairSchema, required=True)
