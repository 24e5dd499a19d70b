"""Unit tests for the logging configuration module."""

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest
import structlog

from winget_autoupdate.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Reset root logger state before and after each test."""
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level
    logging.root.handlers.clear()
    logging.root.setLevel(logging.WARNING)
    yield
    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)
    structlog.reset_defaults()


def _mock_settings(level: str = "INFO", development: bool = False) -> MagicMock:
    mock_settings = MagicMock()
    mock_settings.log_level = level
    mock_settings.is_development = development
    return mock_settings


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_uses_settings_level(self):
        """Test that the root logger gets the configured level."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings("DEBUG")):
            setup_logging()

        assert logging.root.level == logging.DEBUG

    def test_explicit_level_overrides_settings(self):
        """Test that an explicit level wins over settings."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings("DEBUG")):
            setup_logging("warning")

        assert logging.root.level == logging.WARNING

    def test_invalid_level_defaults_to_info(self):
        """Test setup_logging falls back to INFO for an invalid log level."""
        with patch(
            "winget_autoupdate.logging.get_settings", return_value=_mock_settings("NONEXISTENT")
        ):
            setup_logging()

        assert logging.root.level == logging.INFO

    def test_console_handler_writes_to_stderr(self):
        """Test that diagnostics never go to stdout."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings()):
            setup_logging()

        stream_handlers = [h for h in logging.root.handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr
        assert isinstance(stream_handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_configures_structlog(self):
        """Test that setup_logging calls structlog.configure with correct params."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings()):
            with patch("winget_autoupdate.logging.structlog.configure") as mock_configure:
                setup_logging()

        mock_configure.assert_called_once()
        call_kwargs = mock_configure.call_args[1]
        assert call_kwargs["context_class"] is dict
        assert call_kwargs["cache_logger_on_first_use"] is True

    def test_development_uses_console_renderer(self):
        """Test that development mode uses ConsoleRenderer."""
        with patch(
            "winget_autoupdate.logging.get_settings",
            return_value=_mock_settings(development=True),
        ):
            with patch("winget_autoupdate.logging.structlog.dev.ConsoleRenderer") as mock_renderer:
                setup_logging()

        mock_renderer.assert_called_once_with(colors=True)

    def test_production_uses_json_renderer(self):
        """Test that production mode uses JSONRenderer."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings()):
            with patch(
                "winget_autoupdate.logging.structlog.processors.JSONRenderer"
            ) as mock_renderer:
                setup_logging()

        mock_renderer.assert_called_once_with()

    def test_events_rendered_as_json(self, capsys):
        """Test that an event reaches stderr as JSON and stdout stays clean."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings()):
            setup_logging()
        # Handler captured the real stderr at setup; point it at the capture.
        handler = next(h for h in logging.root.handlers if type(h) is logging.StreamHandler)
        handler.setStream(sys.stderr)

        get_logger("winget_autoupdate.test").info("upgrade_completed", returncode=0)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert '"event": "upgrade_completed"' in captured.err
        assert '"returncode": 0' in captured.err


class TestRepeatedSetup:
    """Tests for calling setup_logging more than once."""

    def test_single_console_handler(self):
        """Test that a second call replaces the handler instead of adding one."""
        with patch("winget_autoupdate.logging.get_settings", return_value=_mock_settings()):
            setup_logging()
            setup_logging("DEBUG")

        stream_handlers = [h for h in logging.root.handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1
        assert logging.root.level == logging.DEBUG


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_bound_logger(self):
        """Test that get_logger returns a structlog logger."""
        logger = get_logger("test.module")
        assert logger is not None
