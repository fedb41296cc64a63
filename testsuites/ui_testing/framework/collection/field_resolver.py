"""
================================================================================
Field Resolver Contract
================================================================================

Shared types for the collection layer:
    - TextMatcher: exact string, compiled pattern, or predicate
    - FieldResolver: strategy that maps a field name to a Locator inside an item
    - Error hierarchy raised by resolvers and CollectionHelper

Implementations:
    - GridResolver: static field -> CSS selector map (cards, articles)
    - TableResolver: column index derived from table headers

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence, Union


# A matcher is an exact string, a compiled regex, or a predicate
TextMatcher = Union[str, Pattern[str], Callable[[str], bool]]

FieldCleaner = Callable[[str], str]
FieldCleanerMap = Dict[str, FieldCleaner]

# Conjunction: an item matches only if every entry matches
FilterCriteria = Dict[str, TextMatcher]


class CollectionError(Exception):
    """Base class for collection resolution errors."""
    pass


class FieldNotFoundError(CollectionError):
    """Raised when a resolver cannot map a field name."""

    def __init__(self, resolver_name: str, field: str, available: Sequence[str]):
        self.field = field
        self.available = list(available)
        super().__init__(
            f"{resolver_name}: field '{field}' not found. "
            f"Available fields: {', '.join(self.available) or '<none>'}"
        )


class ResolverNotInitializedError(CollectionError):
    """Raised when a TableResolver is used before its column map is built."""
    pass


class ItemNotFoundError(CollectionError):
    """Raised when no item satisfies the search criteria."""

    def __init__(self, criteria: str, total_pages: Optional[int] = None):
        self.criteria = criteria
        self.total_pages = total_pages
        message = f"CollectionHelper: no item found matching {criteria}"
        if total_pages is not None:
            message += f" after scanning all {total_pages} page(s)"
        super().__init__(message)


def matches_value(value: str, matcher: TextMatcher) -> bool:
    """
    Check whether a field value satisfies a matcher.

    Args:
        value: Cleaned field text
        matcher: Exact string, compiled pattern, or predicate

    Returns:
        True when the value matches
    """
    if isinstance(matcher, str):
        return value == matcher
    if isinstance(matcher, re.Pattern):
        return matcher.search(value) is not None
    if callable(matcher):
        return bool(matcher(value))
    raise TypeError(f"Unsupported matcher type: {type(matcher).__name__}")


def describe_matcher(matcher: TextMatcher) -> str:
    """Render a matcher for error messages and logs."""
    if isinstance(matcher, str):
        return repr(matcher)
    if isinstance(matcher, re.Pattern):
        return f"/{matcher.pattern}/"
    return f"<predicate {getattr(matcher, '__name__', type(matcher).__name__)}>"


def describe_filters(filters: FilterCriteria) -> str:
    """Render filter criteria as ``field=matcher`` pairs."""
    return ", ".join(
        f"{field}={describe_matcher(matcher)}" for field, matcher in filters.items()
    )


class FieldResolver(ABC):
    """
    Strategy interface for locating fields inside collection items.

    Usage:
        >>> resolver = GridResolver({"name": "h3", "price": ".price"})
        >>> cell = resolver.resolve(card, "name")
        >>> await cell.text_content()
        'Arabica'
    """

    @abstractmethod
    def resolve(self, item: Any, field: str) -> Any:
        """
        Map a field name to a Locator inside the item.

        Raises:
            FieldNotFoundError: When the field is unknown to this resolver
        """

    async def init(self) -> None:
        """One-time asynchronous setup. No-op unless the resolver needs it."""
        return None

    def get_field_names(self) -> List[str]:
        """Known field names, for diagnostics."""
        return []

    def has_field(self, field: str) -> bool:
        return field in self.get_field_names()


__all__ = [
    "TextMatcher",
    "FieldCleaner",
    "FieldCleanerMap",
    "FilterCriteria",
    "CollectionError",
    "FieldNotFoundError",
    "ResolverNotInitializedError",
    "ItemNotFoundError",
    "matches_value",
    "describe_matcher",
    "describe_filters",
    "FieldResolver",
]
