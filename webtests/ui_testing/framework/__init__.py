"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based browser session wrapper for end-to-end site checks.

Components:
    - query: Immutable locator expressions (By)
    - condition_poller: Bounded, failure-suppressing waits
    - element: Snapshot element collections with fail-fast batch actions
    - browser: Browser session lifecycle, navigation and frames
    - config_loader: YAML + environment configuration
    - log_setup: Loguru configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .browser import Browser, BrowserVariant, NavigationError
from .condition_poller import PollConfig, wait_for, wait_until
from .config_loader import ConfigLoader, ConfigurationError
from .element import (
    Element,
    ElementNotFoundError,
    SelectControl,
    resolve_first,
    resolve_last,
)
from .log_setup import init_logger
from .query import By

__all__ = [
    "Browser",
    "BrowserVariant",
    "By",
    "ConfigLoader",
    "ConfigurationError",
    "Element",
    "ElementNotFoundError",
    "NavigationError",
    "PollConfig",
    "SelectControl",
    "init_logger",
    "resolve_first",
    "resolve_last",
    "wait_for",
    "wait_until",
]
