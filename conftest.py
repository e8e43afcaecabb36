"""
Repository-level pytest configuration.

Why this exists:
  - Register the --run-e2e switch (browser tests are opt-in)
  - Initialize Loguru once per test session
  - Keep behavior explicit and discoverable
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from webtests.ui_testing.framework.log_setup import init_logger


def pytest_addoption(parser):
    """Add command line switches for browser-driven tests."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests that launch a real browser",
    )


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless --run-e2e is given."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(reason="needs --run-e2e (launches a real browser)")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _logging() -> Generator[None, None, None]:
    """Configure Loguru before any test runs."""
    init_logger()
    yield
