"""
================================================================================
Grid Resolver
================================================================================

Locates fields by a fixed field -> CSS selector map. Suited for:
    - Product cards
    - Article grids
    - Any collection without table headers

Usage:
    >>> resolver = GridResolver({
    ...     "name": "h3",
    ...     "price": ".price",
    ...     "image": "img",
    ... })
    >>> helper = CollectionHelper(resolver)
    >>> names = await helper.get_field_values(cards, "name")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .field_resolver import FieldNotFoundError, FieldResolver


FieldSelectorMap = Dict[str, str]


class GridResolver(FieldResolver):
    """Resolve fields through a static selector map."""

    def __init__(self, field_map: FieldSelectorMap):
        if not field_map:
            raise ValueError("GridResolver: field_map must not be empty")
        self._field_map: FieldSelectorMap = dict(field_map)

    def resolve(self, item: Any, field: str) -> Any:
        """
        Resolve a field to a Locator inside the card.

        Args:
            item: Card Locator
            field: Field name from the selector map

        Returns:
            Locator scoped to the card

        Raises:
            FieldNotFoundError: When the field is not in the selector map
        """
        selector = self._field_map.get(field)
        if selector is None:
            raise FieldNotFoundError("GridResolver", field, self.get_field_names())
        return item.locator(selector)

    def get_field_names(self) -> List[str]:
        return list(self._field_map)

    def has_field(self, field: str) -> bool:
        return field in self._field_map

    def get_selector(self, field: str) -> Optional[str]:
        """Selector for a field (debugging aid)."""
        return self._field_map.get(field)


__all__ = [
    "FieldSelectorMap",
    "GridResolver",
]
