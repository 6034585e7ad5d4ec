"""Pytest configuration and shared fixtures for the gfmhost test suite."""

import logging

import pytest


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_markdown() -> str:
    """Provide a GFM document touching every extension.

    Returns
    -------
    str
        Markdown with a heading, table, strikethrough, task list and footnote.

    """
    return """# Sample Document

Some ~~old~~ text with a footnote[^note].

| Header 1 | Header 2 |
|----------|----------|
| Row 1    | Data 1   |

- [ ] open task
- [x] done task

[^note]: The footnote body.
"""


@pytest.fixture
def no_config_env(monkeypatch, tmp_path):
    """Run in an empty directory without GFMHOST_CONFIG set."""
    monkeypatch.delenv("GFMHOST_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_root_logging():
    """Remove package logger handlers added by CLI tests."""
    package_logger = logging.getLogger("gfmhost")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
