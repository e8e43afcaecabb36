"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser-driven tests.

Key Features:
- One browser session per test (setup / teardown)
- Screenshot capture on failure, attached to the Allure report
- Local HTML pages for tests that must not depend on the network

================================================================================
"""

from typing import Any, Callable, Generator, List

import allure
import pytest
from loguru import logger

from webtests.ui_testing.framework.browser import Browser
from webtests.ui_testing.framework.config_loader import ConfigLoader


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def browser() -> Generator[Browser, None, None]:
    """
    Function-scoped browser session.

    Opens the browser selected by desiredBrowser before the test and closes
    it afterwards.
    """
    session = Browser()
    yield session
    session.close()


class StaticSettings:
    """Fixed settings source, for tests that need a specific browser variant."""

    def __init__(self, **values):
        self.values = values

    def get(self, key, default=None):
        if key in self.values:
            return self.values[key]
        return ConfigLoader().get(key, default)


@pytest.fixture
def browser_factory() -> Generator[Callable[..., Browser], None, None]:
    """
    Factory for sessions with overridden settings.

    Usage:
        def test_x(browser_factory):
            browser = browser_factory(desiredBrowser="firefox")

    Every session created is closed at teardown.
    """
    sessions: List[Browser] = []

    def _create(**settings: Any) -> Browser:
        session = Browser(settings=StaticSettings(**settings))
        sessions.append(session)
        return session

    yield _create

    for session in sessions:
        session.close()


@pytest.fixture
def chrome_browser(browser_factory: Callable[..., Browser]) -> Browser:
    """Browser session forced to the chrome variant."""
    return browser_factory(desiredBrowser="chrome")


# ================================================================================
# Local Pages
# ================================================================================

FORM_PAGE = """
<html>
  <head><title>Form</title></head>
  <body>
    <input class="field" name="first" value="one">
    <input class="field" name="second" value="two">
    <select id="size">
      <option value="s">Small</option>
      <option value="m">Medium</option>
      <option value="l">Large</option>
    </select>
    <button id="go" onclick="document.title = 'clicked'">Go</button>
    <iframe id="inner" srcdoc="<p id='deep'>inside</p>"></iframe>
  </body>
</html>
"""


@pytest.fixture
def form_page(chrome_browser: Browser) -> Browser:
    """Chrome session showing a small local form."""
    chrome_browser.driver.set_content(FORM_PAGE)
    return chrome_browser


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Takes a screenshot of whichever browser session the test used and
    attaches it to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        funcargs = getattr(item, "funcargs", {})
        for name in ("browser", "chrome_browser", "form_page"):
            session = funcargs.get(name)
            if session is None:
                continue
            try:
                allure.attach(
                    session.screenshot(),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except Exception as e:
                # Log but don't fail if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")
            break
