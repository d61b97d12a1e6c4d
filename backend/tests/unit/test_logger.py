"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from pressroom.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("INFO")


def test_json_formatter_includes_known_extras() -> None:
    record = logging.LogRecord("pressroom.test", logging.INFO, __file__, 1, "refresh rejected", None, None)
    record.reason = "revoked"
    record.password = "never-logged"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "refresh rejected"
    assert payload["level"] == "INFO"
    assert payload["reason"] == "revoked"
    assert "password" not in payload
