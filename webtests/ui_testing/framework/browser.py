"""
================================================================================
Browser Session
================================================================================

One Playwright browser session per test: launch, navigate, interact, close.

Features:
    - Browser variant selected from configuration (desiredBrowser)
    - Variant-dependent initial window size (chrome: 1280x1024, others maximized)
    - Bounded element waits (exists / visible)
    - Navigation with optional landmark check
    - Frame focusing for element searches

A Browser is not safe for concurrent use from multiple threads. Each session
exclusively owns its Playwright browser, context and page.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import allure
from loguru import logger
from playwright.sync_api import Page, sync_playwright

from .condition_poller import wait_for
from .config_loader import ConfigLoader, ConfigurationError
from .element import Element, ElementNotFoundError
from .query import By


class NavigationError(Exception):
    """Raised when a page does not reach the expected state after navigation."""

    def __init__(self, url: str, query: Optional[By] = None):
        self.url = url
        self.query = query
        super().__init__(
            f"Tried to navigate to {url}, but failed because could not find "
            f"requested element ({query})."
        )


@dataclass(frozen=True)
class BrowserVariant:
    """
    How to launch one supported browser.

    Attributes:
        engine: Playwright browser type - 'chromium', 'firefox', 'webkit'
        channel: Branded browser channel (e.g. 'msedge'), if any
        window_size: Fixed (width, height); None means maximize
    """
    engine: str
    channel: Optional[str] = None
    window_size: Optional[Tuple[int, int]] = None


BROWSER_VARIANTS: Dict[str, BrowserVariant] = {
    "chrome": BrowserVariant("chromium", window_size=(1280, 1024)),
    "edge": BrowserVariant("chromium", channel="msedge"),
    "firefox": BrowserVariant("firefox"),
    "webkit": BrowserVariant("webkit"),
}

# Legacy names accepted in desiredBrowser
BROWSER_ALIASES: Dict[str, str] = {
    "ie": "edge",
    "chromium": "chrome",
}


def resolve_variant(name: str) -> Tuple[str, BrowserVariant]:
    """
    Look up a browser variant by its configured name.

    Args:
        name: Value of desiredBrowser, case-insensitive

    Returns:
        Tuple of (canonical name, BrowserVariant)

    Raises:
        ConfigurationError: If the name is empty or not supported
    """
    key = (name or "").strip().lower()
    key = BROWSER_ALIASES.get(key, key)
    if key not in BROWSER_VARIANTS:
        raise ConfigurationError(
            f"Unsupported desiredBrowser value: {name!r}. "
            f"Expected one of: {', '.join(sorted(BROWSER_VARIANTS))}"
        )
    return key, BROWSER_VARIANTS[key]


class Browser:
    """
    Owns one browser session.

    Usage:
        browser = Browser()
        browser.navigate("https://example.com", By.tag_name("h1"))
        Element(By.css("a"), browser.search_root).first.click()
        browser.close()

        # Or as a context manager
        with Browser() as browser:
            browser.navigate("https://example.com")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        settings: Optional[ConfigLoader] = None,
        playwright: Any = None,
        headless: Optional[bool] = None,
    ):
        """
        Launch the configured browser.

        Args:
            settings: Configuration source providing desiredBrowser
            playwright: Already started Playwright instance; started and owned
                by this session if None
            headless: Run browser in headless mode (defaults to browser.headless)

        Raises:
            ConfigurationError: If desiredBrowser is missing or not supported
        """
        settings = settings or ConfigLoader()
        self.type, self.variant = resolve_variant(str(settings.get("desiredBrowser", "") or ""))
        self.headless = settings.get("browser.headless", True) if headless is None else headless

        self._owns_playwright = playwright is None
        self._playwright = sync_playwright().start() if playwright is None else playwright

        try:
            self._launch()
        except Exception:
            if self._owns_playwright:
                self._playwright.stop()
            raise

        logger.info(
            f"Browser started: {self.type} "
            f"(engine={self.variant.engine}, headless={self.headless})"
        )

    def _launch(self) -> None:
        launcher = getattr(self._playwright, self.variant.engine)

        launch_options = {**self.DEFAULT_LAUNCH_OPTIONS, "headless": self.headless}
        if self.variant.channel:
            launch_options["channel"] = self.variant.channel
        self._browser = launcher.launch(**launch_options)

        context_options = dict(self.DEFAULT_CONTEXT_OPTIONS)
        if self.variant.window_size:
            width, height = self.variant.window_size
            context_options["viewport"] = {"width": width, "height": height}
        self._context = self._browser.new_context(**context_options)

        self._page = self._context.new_page()
        self._search_root: Any = self._page

        if not self.variant.window_size:
            self.maximize()

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Page State
    # =========================================================================

    @property
    def title(self) -> str:
        """Document title of the current page."""
        return self._page.title()

    @property
    def page_source(self) -> str:
        """Full HTML of the current page."""
        return self._page.content()

    @property
    def driver(self) -> Page:
        """The underlying Playwright page."""
        return self._page

    @property
    def search_root(self) -> Any:
        """Page, or the focused frame after focus_frame()."""
        return self._search_root

    @property
    def window_size(self) -> Dict[str, int]:
        """Current viewport size as {'width': ..., 'height': ...}."""
        size = self._page.viewport_size
        return {"width": size["width"], "height": size["height"]}

    # =========================================================================
    # Waits
    # =========================================================================

    def element_will_exist(
        self,
        query: By,
        max_wait: Optional[float] = None,
        context: Any = None,
        scenario: str = "default",
    ) -> bool:
        """
        Check that an element exists, or will exist before max_wait elapses.

        Completes as soon as the element is found.

        Args:
            query: Element to look for
            max_wait: Seconds to wait before giving up; the scenario budget if None
            context: Search root; defaults to the session's search root
            scenario: Poll budget name from POLL_SCENARIOS

        Returns:
            True if the element was found, False otherwise
        """
        root = self._search_root if context is None else context
        return wait_for(
            lambda r: r.query_selector(query.selector),
            description=f"{query} exists",
            timeout=max_wait,
            root=root,
            scenario=scenario,
        )

    def element_is_visible(
        self,
        query: By,
        max_wait: Optional[float] = None,
        context: Any = None,
    ) -> bool:
        """
        Check that an element is displayed and enabled, or will be before max_wait elapses.

        Args:
            query: Element to look for
            max_wait: Seconds to wait before giving up; the default budget if None
            context: Search root; defaults to the session's search root

        Returns:
            True if the element became visible and enabled, False otherwise
        """
        def displayed_and_enabled(r: Any) -> bool:
            handle = r.query_selector(query.selector)
            return handle is not None and handle.is_visible() and handle.is_enabled()

        root = self._search_root if context is None else context
        return wait_for(
            displayed_and_enabled,
            description=f"{query} visible",
            timeout=max_wait,
            root=root,
        )

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str, query: Optional[By] = None, max_wait: Optional[float] = None) -> bool:
        """
        Navigate to a URL.

        Element searches return to the top document afterwards.

        Args:
            url: Full URL
            query: Element expected on the target page
            max_wait: Seconds to wait for the element; the "navigation"
                poll budget (3s) if None

        Returns:
            True once navigation is complete

        Raises:
            NavigationError: If the expected element did not appear in time
        """
        with allure.step(f"Navigate to {url}"):
            self._page.goto(url)
            self._search_root = self._page
            logger.info(f"Navigated to: {url}")

            if query is not None and not self.element_will_exist(
                query, max_wait, scenario="navigation"
            ):
                logger.error(f"Page {url} did not show {query}")
                raise NavigationError(url, query)

        return True

    @allure.step("Focus frame: {query}")
    def focus_frame(self, query: By) -> None:
        """
        Search inside an iframe from now on.

        Raises:
            ElementNotFoundError: If nothing matches or the match is not a frame
        """
        handle = Element(query, self._search_root).first
        frame = handle.content_frame()
        if frame is None:
            raise ElementNotFoundError(f"{query} did not match a frame element")
        self._search_root = frame
        logger.debug(f"Focused frame: {query}")

    def focus_default(self) -> None:
        """Search the top document again."""
        self._search_root = self._page

    def find(self, query: By) -> Tuple[Any, ...]:
        """All handles matching a query in the current search root."""
        return tuple(self._search_root.query_selector_all(query.selector))

    # =========================================================================
    # Window & Scripts
    # =========================================================================

    def resize(self, width: int, height: int) -> None:
        """Resize the browser viewport."""
        self._page.set_viewport_size({"width": width, "height": height})

    def maximize(self) -> None:
        """Resize the viewport to the screen's available area."""
        size = self._page.evaluate(
            "() => ({width: screen.availWidth, height: screen.availHeight})"
        )
        self.resize(size["width"], size["height"])

    def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate JavaScript in the page and return its result."""
        return self._page.evaluate(script, arg)

    def screenshot(self, path: Optional[str] = None) -> bytes:
        """Capture a full-page screenshot."""
        return self._page.screenshot(path=path, full_page=True)

    def close(self) -> None:
        """
        Close the session.

        Call exactly once per Browser.
        """
        self._context.close()
        self._browser.close()
        if self._owns_playwright:
            self._playwright.stop()
        logger.info(f"Browser closed: {self.type}")


__all__ = [
    "Browser",
    "BrowserVariant",
    "BROWSER_VARIANTS",
    "NavigationError",
    "resolve_variant",
]
