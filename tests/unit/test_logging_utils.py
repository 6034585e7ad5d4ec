"""Tests for logging configuration used by the CLI."""

import logging

import pytest

from gfmhost.logging_utils import configure_logging


def _cli_handlers(logger):
    return [handler for handler in logger.handlers if getattr(handler, "_gfmhost_cli_handler", False)]


@pytest.mark.unit
class TestConfigureLogging:
    """Test configuration of the gfmhost package logger."""

    def test_configures_package_logger_only(self):
        """Test that the package logger is configured and root is untouched."""
        root_handlers = list(logging.getLogger().handlers)
        package_logger = configure_logging("debug")
        assert package_logger.name == "gfmhost"
        assert package_logger.level == logging.DEBUG
        assert len(_cli_handlers(package_logger)) == 1
        assert logging.getLogger().handlers == root_handlers

    def test_unknown_level_defaults_to_info(self):
        """Test that an unknown level name falls back to INFO."""
        assert configure_logging("chatty").level == logging.INFO

    def test_repeated_calls_replace_handlers(self):
        """Test that configuring twice does not duplicate output."""
        configure_logging("info")
        package_logger = configure_logging("warning")
        assert len(_cli_handlers(package_logger)) == 1

    def test_module_loggers_reach_handlers(self, capsys):
        """Test that records from gfmhost modules are written to stderr."""
        configure_logging("info")
        logging.getLogger("gfmhost.tests").info("hello stderr")
        assert "INFO: hello stderr" in capsys.readouterr().err

    def test_log_file(self, tmp_path):
        """Test that a file handler is added and receives records."""
        log_file = tmp_path / "gfmhost.log"
        package_logger = configure_logging(logging.INFO, log_file=str(log_file), trace_mode=True)
        logging.getLogger("gfmhost.tests").info("hello file")
        for handler in package_logger.handlers:
            handler.flush()
        assert len(_cli_handlers(package_logger)) == 2
        content = log_file.read_text(encoding="utf-8")
        assert "hello file" in content
        assert "[gfmhost.tests]" in content

    def test_unwritable_log_file(self, tmp_path, capsys):
        """Test that an unwritable log file only logs a warning."""
        package_logger = configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "x.log"))
        assert len(_cli_handlers(package_logger)) == 1
        assert "Could not open log file" in capsys.readouterr().err
