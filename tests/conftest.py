"""
Pytest configuration and fixtures for thesisdoc tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_config():
    """Return a default ExtractionConfig for testing."""
    from thesisdoc import ExtractionConfig

    return ExtractionConfig()


@pytest.fixture(scope="session")
def sample_text(fixtures_dir) -> str:
    """Plain-text thesis with every front-matter section."""
    return (fixtures_dir / "sample_thesis.txt").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def sample_html(fixtures_dir) -> str:
    """HTML thesis with a jury table, lists and an image."""
    return (fixtures_dir / "sample_thesis.html").read_text(encoding="utf-8")
