"""Unit tests for settings read from environment variables."""

import logging

import pytest
import structlog

from anyof import anyof as anyof_module
from anyof import logging as logging_module
from anyof.anyof import AnyOf
from anyof.config import Settings
from anyof.logging import LoggingSettings, configure_logging
from tests.errors import UserNotFound, user_error_schema


def test_defaults() -> None:
    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.media_type == "application/json"
    assert settings.warn_on_skipped_variants is True


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANYOF_MEDIA_TYPE", "application/problem+json")
    monkeypatch.setenv("ANYOF_WARN_ON_SKIPPED_VARIANTS", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert Settings(_env_file=None).media_type == "application/problem+json"  # type: ignore[call-arg]
    assert Settings(_env_file=None).warn_on_skipped_variants is False  # type: ignore[call-arg]
    assert LoggingSettings(_env_file=None).log_level == "DEBUG"  # type: ignore[call-arg]


def test_any_of_falls_back_to_configured_media_type(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(anyof_module.settings, "media_type", "application/vnd.errors+json")

    response = AnyOf(user_error_schema)({UserNotFound: 404}).render(UserNotFound(name="1"))

    assert response.headers["content-type"] == "application/vnd.errors+json"


def test_logging_format_selects_renderer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "console")

    settings = LoggingSettings(_env_file=None)  # type: ignore[call-arg]

    assert settings.log_format == "console"
    assert isinstance(logging_module._renderer(settings), structlog.dev.ConsoleRenderer)
    assert isinstance(
        logging_module._renderer(LoggingSettings(_env_file=None, LOG_FORMAT="json")),  # type: ignore[call-arg]
        structlog.processors.JSONRenderer,
    )


def test_configure_logging_installs_console_renderer() -> None:
    try:
        configure_logging(LoggingSettings(_env_file=None, LOG_FORMAT="console", LOG_LEVEL="DEBUG"))  # type: ignore[call-arg]

        root = logging.getLogger()
        handler = next(h for h in root.handlers if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter))
        assert root.level == logging.DEBUG
        assert isinstance(handler.formatter.processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        configure_logging(LoggingSettings(_env_file=None))  # type: ignore[call-arg]
