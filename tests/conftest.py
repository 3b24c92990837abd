"""Pytest configuration and shared fixtures for the markconv test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import io
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

# Configure Hypothesis for property-based testing
from hypothesis import HealthCheck, Verbosity, settings

# autouse isolation fixtures are function-scoped
_suppressed = [HealthCheck.function_scoped_fixture]
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose, suppress_health_check=_suppressed)
settings.register_profile("dev", max_examples=50, suppress_health_check=_suppressed)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep configuration discovery away from the developer's real files.

    Runs every test from an empty working directory with an empty home
    directory and no ``MARKCONV_CONFIG`` variable.
    """
    workdir = tmp_path / "work"
    home = tmp_path / "home"
    workdir.mkdir()
    home.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.delenv("MARKCONV_CONFIG", raising=False)
    return workdir


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo the root logger changes made by ``configure_logging``."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_document() -> dict:
    """Provide a document within the model shared by all three formats."""
    return {
        "title": "Example",
        "version": 3,
        "ratio": 0.75,
        "enabled": True,
        "tags": ["alpha", "beta"],
        "owner": {"name": "Tom", "active": False},
        "servers": [
            {"host": "alpha.example.com", "port": 8080},
            {"host": "beta.example.com", "port": 8081},
        ],
    }


@pytest.fixture
def stdin_bytes(monkeypatch: pytest.MonkeyPatch) -> Callable[[bytes], None]:
    """Replace standard input with a stream holding the given bytes."""

    def _set(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))

    return _set


@pytest.hookimpl(wrapper=True, trylast=True)
def pytest_runtest_call(item):
    """Install a ``stdout_buffer`` replacement inside pytest's own capture.

    pytest re-points ``sys.stdout`` at its capture stream when the test call
    starts, so a replacement made during fixture setup would be discarded.
    """
    replacement = getattr(item, "_stdout_replacement", None)
    if replacement is None:
        return (yield)
    original = sys.stdout
    sys.stdout = replacement
    try:
        return (yield)
    finally:
        sys.stdout = original


@pytest.fixture
def stdout_buffer(request: pytest.FixtureRequest, capsys: pytest.CaptureFixture) -> Iterator[io.BytesIO]:
    """Replace standard output with an in-memory stream and return its buffer.

    Requests ``capsys`` so the replacement is installed after pytest's own
    capture and stays in place for the whole test.
    """
    buffer = io.BytesIO()
    request.node._stdout_replacement = io.TextIOWrapper(buffer, encoding="utf-8")
    try:
        yield buffer
    finally:
        del request.node._stdout_replacement
