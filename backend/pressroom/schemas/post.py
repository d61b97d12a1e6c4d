"""Post resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class PostCreateSchema(Schema):
    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    content = fields.String(load_default=None)
    published = fields.Boolean(load_default=False)


class PostUpdateSchema(Schema):
    """Partial update; every field is optional."""

    title = fields.String(validate=validate.Length(min=1, max=200))
    content = fields.String()
    published = fields.Boolean()


class AuthorSchema(Schema):
    id = fields.String(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)


class PostSchema(Schema):
    """Public representation of a post with its author."""

    id = fields.String(required=True)
    title = fields.String(required=True)
    content = fields.String(allow_none=True)
    published = fields.Boolean(required=True)
    author_id = fields.String(required=True)
    author = fields.Nested(AuthorSchema, required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
