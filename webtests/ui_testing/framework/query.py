"""
================================================================================
Query Builder
================================================================================

Immutable locator expressions rendered to Playwright selector strings.

Strategies:
    - id, name, class_name, tag_name (attribute / CSS based)
    - css, xpath (raw expressions)
    - link_text, partial_link_text, text (visible text)
    - test_id (data-testid attribute, most stable)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass


def _quote(value: str) -> str:
    """Quote a value for use inside a CSS attribute or text pseudo-class."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class By:
    """
    A symbolic query: strategy + value.

    Usage:
        >>> By.id("title").selector
        'id=title'
        >>> By.xpath("//img").selector
        'xpath=//img'
    """

    strategy: str
    value: str

    STRATEGIES = (
        "id",
        "css",
        "xpath",
        "name",
        "class_name",
        "tag_name",
        "link_text",
        "partial_link_text",
        "text",
        "test_id",
    )

    def __post_init__(self) -> None:
        if self.strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown locator strategy: {self.strategy}")

    @classmethod
    def id(cls, value: str) -> "By":
        return cls("id", value)

    @classmethod
    def css(cls, value: str) -> "By":
        return cls("css", value)

    @classmethod
    def xpath(cls, value: str) -> "By":
        return cls("xpath", value)

    @classmethod
    def name(cls, value: str) -> "By":
        return cls("name", value)

    @classmethod
    def class_name(cls, value: str) -> "By":
        return cls("class_name", value)

    @classmethod
    def tag_name(cls, value: str) -> "By":
        return cls("tag_name", value)

    @classmethod
    def link_text(cls, value: str) -> "By":
        return cls("link_text", value)

    @classmethod
    def partial_link_text(cls, value: str) -> "By":
        return cls("partial_link_text", value)

    @classmethod
    def text(cls, value: str) -> "By":
        return cls("text", value)

    @classmethod
    def test_id(cls, value: str) -> "By":
        return cls("test_id", value)

    @property
    def selector(self) -> str:
        """Playwright selector string for this query."""
        if self.strategy == "id":
            return f"id={self.value}"
        if self.strategy == "css":
            return f"css={self.value}"
        if self.strategy == "xpath":
            return f"xpath={self.value}"
        if self.strategy == "name":
            return f"css=[name={_quote(self.value)}]"
        if self.strategy == "class_name":
            return f"css=.{self.value}"
        if self.strategy == "tag_name":
            return f"css={self.value}"
        if self.strategy == "link_text":
            return f"css=a:text-is({_quote(self.value)})"
        if self.strategy == "partial_link_text":
            return f"css=a:has-text({_quote(self.value)})"
        if self.strategy == "text":
            return f"text={self.value}"
        return f"data-testid={self.value}"

    def __str__(self) -> str:
        return f"By.{self.strategy}: {self.value}"


__all__ = [
    "By",
]
