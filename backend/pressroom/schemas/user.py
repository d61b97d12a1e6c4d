"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from pressroom.models.user import Role


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)
    avatar = fields.String(allow_none=True)
    role = fields.String(required=True)
    is_active = fields.Boolean(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)


class ProfileUpdateSchema(Schema):
    username = fields.String(validate=validate.Length(min=1, max=20))
    avatar = fields.String(validate=validate.Length(max=255))


class PasswordChangeSchema(Schema):
    old_password = fields.String(required=True, validate=validate.Length(min=6))
    new_password = fields.String(required=True, validate=validate.Length(min=6, max=32))


class RoleUpdateSchema(Schema):
    role = fields.String(required=True, validate=validate.OneOf([r.value for r in Role]))
