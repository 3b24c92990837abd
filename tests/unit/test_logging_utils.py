"""Unit tests for logging configuration."""

import logging

import pytest

from markconv.logging_utils import LOG_FORMAT, TRACE_DATE_FORMAT, TRACE_LOG_FORMAT, configure_logging, resolve_log_level


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        (logging.DEBUG, logging.DEBUG),
        ("info", logging.INFO),
        ("ERROR", logging.ERROR),
        ("chatty", logging.WARNING),
    ],
)
def test_resolve_log_level(value, expected):
    """Names and numbers resolve to numeric levels; unknown names fall back to WARNING."""
    assert resolve_log_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Test root logger configuration."""

    def test_replaces_handlers(self):
        """Existing handlers are replaced by a single stderr handler."""
        root = configure_logging("INFO")

        assert root is logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT

    def test_trace_format(self):
        """Trace mode adds timestamps and logger names."""
        root = configure_logging(logging.DEBUG, trace_mode=True)

        formatter = root.handlers[0].formatter
        assert formatter._fmt == TRACE_LOG_FORMAT
        assert formatter.datefmt == TRACE_DATE_FORMAT

    def test_log_file(self, tmp_path):
        """A log file handler receives records as well."""
        log_file = tmp_path / "run.log"
        root = configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("markconv.test").info("hello file")

        assert len(root.handlers) == 2
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, tmp_path):
        """An unusable log file is reported but does not fail configuration."""
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "run.log"))

        assert len(root.handlers) == 1

    def test_unwritable_log_file_warns_on_stderr(self, tmp_path, capsys):
        """The log file failure is reported through the stderr handler."""
        configure_logging("WARNING", log_file=str(tmp_path / "missing" / "run.log"))

        assert "WARNING: Could not open log file" in capsys.readouterr().err

    def test_file_and_console_share_format(self, tmp_path):
        """Both handlers use the same formatter and the root level."""
        root = configure_logging("ERROR", log_file=str(tmp_path / "run.log"), trace_mode=True)

        assert root.level == logging.ERROR
        assert {handler.formatter._fmt for handler in root.handlers} == {TRACE_LOG_FORMAT}
