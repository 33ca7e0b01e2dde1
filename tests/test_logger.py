"""Tests for envoverlay.logger module."""

import io
import json
import logging
from unittest import mock

import pytest

from envoverlay.logger import (
    JsonFormatter,
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        """Test that Logger cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        for method in ("debug", "info", "warning", "error", "critical", "get_session_id"):
            assert hasattr(Logger, method)


class TestStructuredLogger:
    """Tests for the StructuredLogger implementation."""

    def test_session_id_is_truncated_uuid(self):
        logger = StructuredLogger(name="envoverlay-test-session", stream=io.StringIO())

        assert len(logger.get_session_id()) == 8

    def test_text_format_appends_kwargs(self):
        """Test that extras are rendered as key=value pairs."""
        stream = io.StringIO()
        logger = StructuredLogger(name="envoverlay-test-text", stream=stream)
        logger.info("Fetched remote environment", peer="local", entries=3)

        output = stream.getvalue()
        assert "[INFO]" in output
        assert "[envoverlay-test-text]" in output
        assert f"[session:{logger.get_session_id()}]" in output
        assert "Fetched remote environment" in output
        assert "peer=local" in output
        assert "entries=3" in output

    def test_json_format(self):
        """Test that JSON output carries message, level and extras."""
        stream = io.StringIO()
        logger = StructuredLogger(name="envoverlay-test-json", json_format=True, stream=stream)
        logger.warning("Peer rejected call", status=404)

        data = json.loads(stream.getvalue().strip())
        assert data["level"] == "WARNING"
        assert data["message"] == "Peer rejected call"
        assert data["logger"] == "envoverlay-test-json"
        assert data["session_id"] == logger.get_session_id()
        assert data["status"] == 404

    def test_reserved_kwargs_are_prefixed(self):
        """Test that kwargs clashing with LogRecord attributes do not raise."""
        stream = io.StringIO()
        logger = StructuredLogger(name="envoverlay-test-reserved", json_format=True, stream=stream)
        logger.info("Override set variable", name="PATH", module="x")

        data = json.loads(stream.getvalue().strip())
        assert data["_name"] == "PATH"
        assert data["_module"] == "x"
        assert data["logger"] == "envoverlay-test-reserved"

    def test_respects_level(self):
        stream = io.StringIO()
        logger = StructuredLogger(name="envoverlay-test-level", level=logging.WARNING, stream=stream)
        logger.info("hidden")
        logger.error("shown")

        assert logger.level == logging.WARNING
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_reinitialising_does_not_duplicate_output(self):
        stream = io.StringIO()
        StructuredLogger(name="envoverlay-test-dup", stream=stream)
        logger = StructuredLogger(name="envoverlay-test-dup", stream=stream)
        logger.info("once")

        assert stream.getvalue().count("once") == 1

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "envoverlay.log"
        logger = StructuredLogger(
            name="envoverlay-test-file", log_file=str(log_file), stream=io.StringIO()
        )
        logger.error("to file")

        assert "to file" in log_file.read_text()

    def test_json_formatter_serialises_unknown_types(self):
        record = logging.LogRecord("n", logging.INFO, "p", 1, "msg", None, None)
        record.path = object()

        data = json.loads(JsonFormatter().format(record))
        assert "object" in data["path"]


class TestFactories:
    """Tests for create_logger and get_logger."""

    def test_create_logger_reads_environment(self):
        env = {"ENVOVERLAY_TEST_ENV_LOG_LEVEL": "ERROR"}
        with mock.patch.dict("os.environ", env):
            logger = create_logger("envoverlay-test-env", stream=io.StringIO())

        assert isinstance(logger, StructuredLogger)
        assert logger.level == logging.ERROR

    def test_create_logger_unknown_level_falls_back_to_info(self):
        with mock.patch.dict("os.environ", {"ENVOVERLAY_TEST_BAD_LOG_LEVEL": "LOUD"}):
            logger = create_logger("envoverlay-test-bad", stream=io.StringIO())

        assert logger.level == logging.INFO

    def test_get_logger_is_cached(self):
        assert get_logger("envoverlay-test-cache") is get_logger("envoverlay-test-cache")

    def test_create_logger_replaces_cached_instance(self):
        first = get_logger("envoverlay-test-replace")
        second = create_logger("envoverlay-test-replace", stream=io.StringIO())

        assert get_logger("envoverlay-test-replace") is second
        assert first is not second
