"""Pytest configuration and shared fixtures for the livefind test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import RecordingView, cleanup_test_dir, create_test_temp_dir, flat_doc, tree_doc

from livefind.scheduling import ManualScheduler

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
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "property: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Provide a scheduler with a virtual clock starting at zero."""
    return ManualScheduler()


@pytest.fixture
def view() -> RecordingView:
    """Provide a view that records renders and reveals."""
    return RecordingView()


@pytest.fixture
def cat_flat():
    """Flat document used by the reference scenarios."""
    return flat_doc("cat sat on the cat mat")


@pytest.fixture
def cat_tree():
    """Tree document holding the reference sentence in one paragraph."""
    return tree_doc("cat sat on the cat mat")


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch):
    """Keep a developer's LIVEFIND_CONFIG from leaking into tests."""
    monkeypatch.delenv("LIVEFIND_CONFIG", raising=False)
