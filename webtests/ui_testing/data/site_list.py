"""
Pre-built list of sites exercised by the sample UI tests.
"""

from typing import List

import pytest


SITE_LIST = (
    "https://www.google.com",
    "https://www.yahoo.com",
    "https://www.forbes.com",
    "https://www.wikipedia.org",
    "https://www.github.com",
)


def get_test_cases() -> List:
    """
    Site list as pytest parameters, one per site.

    Usage:
        @pytest.mark.parametrize("site", get_test_cases())
        def test_something(site): ...
    """
    return [
        pytest.param(site, id=site.split("//", 1)[-1])
        for site in SITE_LIST
    ]
