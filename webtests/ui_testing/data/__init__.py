from .site_list import SITE_LIST, get_test_cases

__all__ = [
    "SITE_LIST",
    "get_test_cases",
]
