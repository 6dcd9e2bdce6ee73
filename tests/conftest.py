"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_theory.recipes import set_catalogue
from chuk_mcp_theory.settings import TheorySettings, set_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test against default settings and the built-in catalogue."""
    previous = set_settings(TheorySettings())
    yield
    set_settings(previous)
    set_catalogue(None)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
