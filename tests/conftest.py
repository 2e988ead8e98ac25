"""Pytest configuration and shared fixtures for the mdpeek test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import logging
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from mdpeek.renderers.html import HtmlEmitter
from mdpeek.renderers.terminal import TerminalEmitter
from mdpeek.themes import get_theme

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def html_emitter() -> HtmlEmitter:
    """Provide an HTML emitter with default options."""
    return HtmlEmitter()


@pytest.fixture
def mono_emitter() -> TerminalEmitter:
    """Provide a terminal emitter that writes no escape sequences."""
    return TerminalEmitter(theme=get_theme("mono"))


@pytest.fixture
def markdown_file(tmp_path: Path):
    """Write Markdown to a temporary file and return its path."""

    def _write(content: str, name: str = "doc.md") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logger():
    """Undo the handler changes made by configure_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
