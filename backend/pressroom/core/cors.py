"""CORS policy for the API blueprints."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from pressroom.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Apply ``CORS_ORIGINS`` (comma-separated, ``*`` for any) to ``/api/*``.

    Browsers may send ``Authorization`` and read back the request id. With a
    wildcard origin, credentials are not allowed.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
