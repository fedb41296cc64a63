"""
================================================================================
Pagination Collaborators
================================================================================

Callback bundles consumed by the cross-page searches in CollectionHelper.

    - PageNavigator: index-addressable pagination (jump to page N)
    - NextPageNavigator: forward-only pagination ("next" button only)

Every callback is an async callable supplied by the page object.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional


@dataclass(frozen=True)
class PageNavigator:
    """
    Index-addressable pagination.

    Attributes:
        get_total_pages: Returns the number of pages
        go_to_page: Navigates to a 1-based page number
        get_current_page: Optional; returns the page currently shown
            (search starts from page 1 when omitted)
    """
    get_total_pages: Callable[[], Awaitable[int]]
    go_to_page: Callable[[int], Awaitable[None]]
    get_current_page: Optional[Callable[[], Awaitable[int]]] = None


@dataclass(frozen=True)
class NextPageNavigator:
    """
    Forward-only pagination.

    Attributes:
        get_total_pages: Returns the number of pages
        go_to_next_page: Advances one page
        go_to_first_page: Optional; resets to page 1 before searching
    """
    get_total_pages: Callable[[], Awaitable[int]]
    go_to_next_page: Callable[[], Awaitable[None]]
    go_to_first_page: Optional[Callable[[], Awaitable[None]]] = None


@dataclass
class PageSearchResult:
    """Item found by a cross-page search and the page it was found on."""
    item: Any
    page_number: int


__all__ = [
    "PageNavigator",
    "NextPageNavigator",
    "PageSearchResult",
]
