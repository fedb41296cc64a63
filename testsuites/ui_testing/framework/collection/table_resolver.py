"""
================================================================================
Table Resolver
================================================================================

Locates fields by column index derived from table header text.

The header row is read once and turned into a column map. Every column is
registered under two keys so callers do not need the exact header rendering:

    Headers: ["ID", "Date Created", "Customer Name"]
    Column map:
        id              -> ColumnInfo(index=0, text="ID")
        dateCreated     -> ColumnInfo(index=1, text="Date Created")
        "date created"  -> ColumnInfo(index=1, text="Date Created")
        customerName    -> ColumnInfo(index=2, text="Customer Name")
        "customer name" -> ColumnInfo(index=2, text="Customer Name")

The map is the only mutable state. It is rebuilt wholesale by ``init()`` /
``refresh()`` and read-only during ``resolve()``. Calling ``refresh()`` while
other coroutines resolve fields needs external synchronization.

Usage:
    >>> resolver = await TableResolver.create(page.locator("table thead th"))
    >>> helper = CollectionHelper(resolver)
    >>> stock = await helper.get_field_values(rows, "totalStock")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

from .field_cleaners import normalize_whitespace
from .field_resolver import (
    FieldNotFoundError,
    FieldResolver,
    ResolverNotInitializedError,
)


@dataclass(frozen=True)
class ColumnInfo:
    """
    One detected header column.

    Attributes:
        index: 0-based position, left to right
        text: Cleaned header text
    """
    index: int
    text: str


ColumnMap = Dict[str, ColumnInfo]


def to_camel_case(text: str) -> str:
    """
    Convert header text to camelCase.

    "Date Created" -> "dateCreated"
    """
    words = text.lower().split(" ")
    return words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])


def clean_header_text(text: Optional[str]) -> str:
    """Collapse whitespace runs (including line breaks) and trim."""
    return normalize_whitespace(text or "")


async def build_column_map(headers: Any) -> ColumnMap:
    """
    Build a column map from a header-cells Locator.

    Args:
        headers: Locator matching every header cell, left to right

    Returns:
        Column map keyed by camelCase and lowercase header text
    """
    count = await headers.count()
    column_map: ColumnMap = {}

    for index in range(count):
        raw_text = await headers.nth(index).inner_text()
        text = clean_header_text(raw_text)
        if not text:
            # Checkbox/action columns often have no header text
            continue

        info = ColumnInfo(index=index, text=text)
        column_map[to_camel_case(text)] = info
        column_map[text.lower()] = info

    return column_map


class TableResolver(FieldResolver):
    """
    Resolve fields by header-derived column position.

    Prefer ``await TableResolver.create(headers)``, which builds the column
    map before returning. A resolver constructed directly must be
    initialized with ``await resolver.init()`` before use.
    """

    def __init__(self, headers: Any, cell_selector: str = "td"):
        """
        Args:
            headers: Locator for the header cells
            cell_selector: Selector for data cells inside a row
        """
        self._headers = headers
        self._cell_selector = cell_selector
        self._column_map: Optional[ColumnMap] = None

    @classmethod
    async def create(cls, headers: Any, cell_selector: str = "td") -> "TableResolver":
        """Create a resolver and build its column map in one step."""
        resolver = cls(headers, cell_selector)
        await resolver.init()
        return resolver

    async def init(self) -> None:
        """Read the header row and build the column map."""
        column_map = await build_column_map(self._headers)
        # Swap in one assignment so a reader never sees a partial map
        self._column_map = column_map
        logger.debug(
            f"TableResolver: mapped {len({info.index for info in column_map.values()})} "
            f"column(s): {', '.join(self.get_field_names())}"
        )

    async def refresh(self) -> None:
        """Rebuild the column map (e.g. after a responsive layout switch)."""
        await self.init()

    @property
    def is_initialized(self) -> bool:
        return self._column_map is not None

    def resolve(self, item: Any, field: str) -> Any:
        """
        Resolve a field to the cell at its column position.

        Args:
            item: Row Locator
            field: camelCase or lowercase header text

        Returns:
            Cell Locator (``td:nth-child(index + 1)``)

        Raises:
            ResolverNotInitializedError: Column map not built yet
            FieldNotFoundError: No column with that key
        """
        if self._column_map is None:
            raise ResolverNotInitializedError(
                "TableResolver: not initialized. "
                "Use `await TableResolver.create(headers)` or call `await init()`."
            )

        info = self._column_map.get(field)
        if info is None:
            raise FieldNotFoundError("TableResolver", field, self.get_field_names())

        # nth-child is 1-based
        return item.locator(f"{self._cell_selector}:nth-child({info.index + 1})")

    def get_field_names(self) -> List[str]:
        if self._column_map is None:
            return []
        return list(self._column_map)

    def has_field(self, field: str) -> bool:
        return self._column_map is not None and field in self._column_map

    def get_column_info(self, field: str) -> Optional[ColumnInfo]:
        if self._column_map is None:
            return None
        return self._column_map.get(field)

    def get_column_map(self) -> Optional[ColumnMap]:
        """Copy of the column map, or None before init."""
        if self._column_map is None:
            return None
        return dict(self._column_map)


__all__ = [
    "ColumnInfo",
    "ColumnMap",
    "to_camel_case",
    "clean_header_text",
    "build_column_map",
    "TableResolver",
]
