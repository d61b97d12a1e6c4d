"""Application factory wiring Flask extensions, the container and blueprints."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask

from pressroom.core.config import BaseConfig, get_config
from pressroom.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    redis_client: redis.Redis | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    ``redis_client`` overrides the connection opened from ``REDIS_URL``;
    tests pass a ``fakeredis`` instance here.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from pressroom.core import extensions

    extensions.init_app(app)
    client = extensions.init_redis(app, redis_client)

    from pressroom.api.deps import CONTAINER_KEY
    from pressroom.container import build_container

    app.extensions[CONTAINER_KEY] = build_container(app.config, client)

    init_logging(app)

    from pressroom.core import cors

    cors.init_app(app)

    from pressroom.api import init_app as init_api

    init_api(app)

    from pressroom.core import errors

    errors.init_app(app)

    from pressroom import cli as app_cli

    app_cli.init_app(app)

    return app
