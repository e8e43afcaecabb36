"""
================================================================================
Element Locator
================================================================================

Snapshot-based element collections over Playwright element handles.

An ``Element`` evaluates its query once, at construction, and keeps the
resulting handles. It never re-queries: if the page changes afterwards, build
a new ``Element``.

Features:
    - First/last selection with memoization
    - Fail-fast batch operations (clear, type, click, select)
    - Click recovery by scrolling when another element intercepts the click
    - <select> control helpers

Usage:
    titles = Element(By.id("title"), browser.search_root)
    title = titles.first
    for handle in titles.all:
        ...
    Element(By.name("q"), page).clear_and_enter_text("playwright").left_click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Sequence, Tuple

import allure
from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError

from .query import By

if TYPE_CHECKING:
    from .browser import Browser


class ElementNotFoundError(Exception):
    """Raised when a selection is requested from an empty match set."""
    pass


def resolve_first(handles: Sequence[ElementHandle]) -> ElementHandle:
    """
    Return the first handle of a match set.

    Raises:
        ElementNotFoundError: When the match set is empty
    """
    if not handles:
        raise ElementNotFoundError("No elements matched; cannot select the first one")
    return handles[0]


def resolve_last(handles: Sequence[ElementHandle]) -> ElementHandle:
    """
    Return the last handle of a match set.

    Raises:
        ElementNotFoundError: When the match set is empty
    """
    if not handles:
        raise ElementNotFoundError("No elements matched; cannot select the last one")
    return handles[-1]


class SelectControl:
    """
    Wraps a ``<select>`` element handle.

    Indexes are zero-based: the first option is 0, the second is 1.
    """

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    @property
    def options(self) -> List[ElementHandle]:
        """All <option> handles of the control."""
        return self.handle.query_selector_all("option")

    def select_by_value(self, value: str) -> List[str]:
        return self.handle.select_option(value=value)

    def select_by_text(self, text: str) -> List[str]:
        return self.handle.select_option(label=text)

    def select_by_index(self, index: int) -> List[str]:
        return self.handle.select_option(index=index)


class Element:
    """
    All elements matching a query within a search root, captured at one instant.

    The search root (``ancestor``) is a Playwright Page, Frame or another
    ElementHandle. Handles are not owned by this object.

    ``first`` and ``last`` share a single memoized selection: whichever is
    read first fixes the selection until it is explicitly reassigned.

    Batch operations are fail-fast: they apply to every handle in resolution
    order and the first error propagates, leaving later handles untouched.
    Each returns the Element itself for chaining.
    """

    def __init__(self, query: By, ancestor: Any):
        """
        Resolve a query against a search root.

        Args:
            query: Locator expression
            ancestor: Search root - Page, Frame or ElementHandle
        """
        self.query = query
        self.ancestor = ancestor
        self._els: Tuple[ElementHandle, ...] = tuple(
            ancestor.query_selector_all(query.selector)
        )
        self._el: Optional[ElementHandle] = None
        logger.debug(f"Resolved {query}: {len(self._els)} match(es)")

    def count(self) -> int:
        """Number of matched elements."""
        return len(self._els)

    def __len__(self) -> int:
        return len(self._els)

    def __iter__(self) -> Iterator[ElementHandle]:
        return iter(self._els)

    def __repr__(self) -> str:
        return f"Element({self.query}, count={len(self._els)})"

    @property
    def first(self) -> ElementHandle:
        """Selected element, defaulting to the first match on first access."""
        if self._el is None:
            self._el = resolve_first(self._els)
        return self._el

    @first.setter
    def first(self, value: Optional[ElementHandle]) -> None:
        self._el = resolve_first(self._els) if value is None else value

    @property
    def last(self) -> ElementHandle:
        """Selected element, defaulting to the last match on first access."""
        if self._el is None:
            self._el = resolve_last(self._els)
        return self._el

    @last.setter
    def last(self, value: Optional[ElementHandle]) -> None:
        self._el = resolve_last(self._els) if value is None else value

    @property
    def all(self) -> Tuple[ElementHandle, ...]:
        """Every matched handle, in resolution order."""
        return self._els

    # =========================================================================
    # Batch Operations
    # =========================================================================

    def _apply_each(self, action: Callable[[ElementHandle], Any]) -> "Element":
        for handle in self._els:
            action(handle)
        return self

    @allure.step("Clear elements")
    def clear(self) -> "Element":
        """Empty the text of every matched element."""
        return self._apply_each(lambda handle: handle.fill(""))

    @allure.step("Enter text: {text}")
    def enter_text(self, text: str) -> "Element":
        """Type text into every matched element."""
        return self._apply_each(lambda handle: handle.type(text))

    @allure.step("Clear and enter text: {text}")
    def clear_and_enter_text(self, text: str) -> "Element":
        """Empty every matched element, then type text into it."""

        def clear_and_type(handle: ElementHandle) -> None:
            handle.fill("")
            handle.type(text)

        return self._apply_each(clear_and_type)

    @allure.step("Click elements")
    def left_click(self) -> "Element":
        """Click every matched element."""
        return self._apply_each(lambda handle: handle.click())

    @allure.step("Click elements with scroll recovery")
    def left_click_offset(self, browser: "Browser", timeout: float = 5000) -> "Element":
        """
        Click every matched element, recovering once from an intercepted click.

        If a click fails (typically because another element covers the click
        point), the window is scrolled up by half its height and the click is
        retried once. A second failure propagates.

        Args:
            browser: Session owning the page, used for window size and scrolling
            timeout: Timeout for the first click attempt in milliseconds
        """
        for handle in self._els:
            try:
                handle.click(timeout=timeout)
            except PlaywrightError as e:
                offset = browser.window_size["height"] // 2
                logger.warning(
                    f"Click on {self.query} failed ({str(e)[:80]}); "
                    f"scrolling up {offset}px and retrying"
                )
                browser.execute_script("(dy) => window.scrollBy(0, dy)", -offset)
                handle.click()
        return self

    @allure.step("Click first element")
    def click_first(self) -> "Element":
        """Click the first matched element, ignoring the memoized selection."""
        resolve_first(self._els).click()
        return self

    # =========================================================================
    # Select Controls
    # =========================================================================

    def get_select_element(self) -> SelectControl:
        """Select control over the currently selected element."""
        return SelectControl(self.first)

    @allure.step("Select option by value: {value}")
    def select_option_by_value(self, value: str) -> "Element":
        """Select the option with the given value in every matched control."""
        return self._apply_each(lambda handle: SelectControl(handle).select_by_value(value))

    @allure.step("Select option by text: {text}")
    def select_option_by_text(self, text: str) -> "Element":
        """Select the option with the given visible text in every matched control."""
        return self._apply_each(lambda handle: SelectControl(handle).select_by_text(text))

    @allure.step("Select option by index: {index}")
    def select_option_by_index(self, index: int = 1) -> "Element":
        """
        Select an option by index in every matched control.

        The first option is number 0, the second is 1. The default of 1 is
        kept for compatibility with existing suites.
        """
        return self._apply_each(lambda handle: SelectControl(handle).select_by_index(index))


__all__ = [
    "Element",
    "ElementNotFoundError",
    "SelectControl",
    "resolve_first",
    "resolve_last",
]
