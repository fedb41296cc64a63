"""
================================================================================
Collection Helper
================================================================================

Strategy-based helper for tables, grids and any other item collection.

The helper never inspects item structure itself: every "find the element
for field X in item Y" decision is delegated to the injected FieldResolver.
The same API therefore works for header-driven tables and card grids.

Usage:
    >>> # Grids (product cards, articles)
    >>> helper = CollectionHelper(GridResolver({"name": "h3", "price": ".price"}))
    >>>
    >>> # Tables (with headers)
    >>> helper = CollectionHelper(await TableResolver.create(page.locator("th")))
    >>>
    >>> names = await helper.get_field_values(items, "name")
    >>> item = await helper.find_item(items, "name", "Arabica")

Operations are strictly sequential: items are read in index order and
pages are visited one at a time. Collaborator failures propagate unchanged;
only ``has_item`` turns ItemNotFoundError into False.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from loguru import logger

from .field_cleaners import clean_field_text
from .field_resolver import (
    FieldCleanerMap,
    FieldResolver,
    FilterCriteria,
    ItemNotFoundError,
    TextMatcher,
    describe_filters,
    describe_matcher,
    matches_value,
)
from .pagination import NextPageNavigator, PageNavigator, PageSearchResult


R = TypeVar("R", bound=FieldResolver)

# Zero-argument provider, re-invoked after every navigation
ItemsProvider = Callable[[], Any]


class CollectionHelper(Generic[R]):
    """
    Field extraction, search and cross-page search over item collections.

    Args:
        resolver: FieldResolver used for every field lookup
    """

    def __init__(self, resolver: R):
        self._resolver = resolver

    # =========================================================================
    # Single Item
    # =========================================================================

    async def get_field_value(
        self,
        item: Any,
        field: str,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> str:
        """
        Read the cleaned text of one field.

        Args:
            item: Item Locator (row, card, ...)
            field: Field name
            cleaners: Optional per-field cleaners

        Returns:
            Cleaned text
        """
        field_locator = self._resolver.resolve(item, field)
        text = await field_locator.text_content()
        return clean_field_text(text, field, cleaners)

    async def get_item_data(
        self,
        item: Any,
        fields: Sequence[str],
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> Dict[str, str]:
        """Read several fields of one item into a ``field -> text`` dict."""
        data: Dict[str, str] = {}
        for field in fields:
            data[field] = await self.get_field_value(item, field, cleaners)
        return data

    # =========================================================================
    # Whole Collection
    # =========================================================================

    async def get_field_values(
        self,
        items: Any,
        field: str,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> List[str]:
        """One field from every item, in item order."""
        count = await items.count()
        values: List[str] = []
        for index in range(count):
            values.append(await self.get_field_value(items.nth(index), field, cleaners))
        return values

    async def get_collection_data(
        self,
        items: Any,
        fields: Sequence[str],
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> List[Dict[str, str]]:
        """One data dict per item, in item order."""
        count = await items.count()
        data: List[Dict[str, str]] = []
        for index in range(count):
            data.append(await self.get_item_data(items.nth(index), fields, cleaners))
        return data

    # =========================================================================
    # Search
    # =========================================================================

    async def find_item(
        self,
        items: Any,
        field: str,
        matcher: TextMatcher,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> Any:
        """
        First item whose field value satisfies the matcher.

        Args:
            items: Collection Locator
            field: Field to compare
            matcher: Exact string, compiled pattern, or predicate
            cleaners: Optional per-field cleaners

        Returns:
            Matching item Locator

        Raises:
            ItemNotFoundError: No item matched
        """
        count = await items.count()
        for index in range(count):
            item = items.nth(index)
            value = await self.get_field_value(item, field, cleaners)
            if matches_value(value, matcher):
                return item

        raise ItemNotFoundError(f"{field}={describe_matcher(matcher)}")

    async def find_item_by_filters(
        self,
        items: Any,
        filters: FilterCriteria,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> Any:
        """
        First item matching every filter entry.

        Fields of an item are read lazily; the first mismatch moves on to
        the next item.

        Raises:
            ItemNotFoundError: No item matched all filters
        """
        count = await items.count()
        for index in range(count):
            item = items.nth(index)
            if await self._matches_filters(item, filters, cleaners):
                return item

        raise ItemNotFoundError(describe_filters(filters))

    async def find_item_data(
        self,
        items: Any,
        filters: FilterCriteria,
        fields: Optional[Sequence[str]] = None,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> Dict[str, str]:
        """
        Find an item by filters and read its data.

        Args:
            fields: Fields to return (defaults to the filter keys)
        """
        item = await self.find_item_by_filters(items, filters, cleaners)
        fields_to_read = list(filters) if fields is None else list(fields)
        return await self.get_item_data(item, fields_to_read, cleaners)

    async def has_item(
        self,
        items: Any,
        field: str,
        matcher: TextMatcher,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> bool:
        """True if some item matches; other failures still propagate."""
        try:
            await self.find_item(items, field, matcher, cleaners)
        except ItemNotFoundError:
            return False
        return True

    # =========================================================================
    # Utilities
    # =========================================================================

    def get_resolver(self) -> R:
        return self._resolver

    @property
    def resolver(self) -> R:
        return self._resolver

    async def get_count(self, items: Any) -> int:
        return await items.count()

    # =========================================================================
    # Cross-Page Search
    # =========================================================================

    async def find_item_across_pages(
        self,
        get_items: ItemsProvider,
        field: str,
        matcher: TextMatcher,
        pagination: PageNavigator,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> PageSearchResult:
        """
        Search every page of an index-addressable pagination.

        Algorithm:
            1. Read the total page count and the start page
               (``get_current_page`` or 1)
            2. Scan start page .. last page, jumping to each page after the first
            3. If the search started mid-sequence, wrap around to 1 .. start - 1
            4. Raise after every page has been scanned

        Args:
            get_items: Returns the collection Locator for the current page
            field: Field to compare
            matcher: Exact string, compiled pattern, or predicate
            pagination: PageNavigator callbacks
            cleaners: Optional per-field cleaners

        Returns:
            PageSearchResult with the item and its page number

        Raises:
            ItemNotFoundError: Item absent from every page

        Example:
            >>> result = await helper.find_item_across_pages(
            ...     lambda: products_page.element("product_cards"),
            ...     "name",
            ...     "Indonesia Java Estate",
            ...     PageNavigator(
            ...         get_total_pages=products_page.get_total_pages,
            ...         go_to_page=products_page.go_to_page,
            ...         get_current_page=products_page.get_current_page,
            ...     ),
            ... )
            >>> result.page_number
            3
        """
        total_pages = await pagination.get_total_pages()
        start_page = (
            await pagination.get_current_page() if pagination.get_current_page else 1
        )
        criteria = f"{field}={describe_matcher(matcher)}"
        logger.info(
            f"🔍 Searching {total_pages} page(s) from page {start_page} for {criteria}"
        )

        for page_number in range(start_page, total_pages + 1):
            if page_number != start_page:
                await pagination.go_to_page(page_number)
            item = await self._search_page(get_items, field, matcher, cleaners, page_number)
            if item is not None:
                return self._found(item, page_number, total_pages)

        for page_number in range(1, start_page):
            await pagination.go_to_page(page_number)
            item = await self._search_page(get_items, field, matcher, cleaners, page_number)
            if item is not None:
                return self._found(item, page_number, total_pages)

        logger.info(f"✖ Not found after scanning {total_pages} page(s)")
        raise ItemNotFoundError(criteria, total_pages=total_pages)

    async def find_item_with_next_page(
        self,
        get_items: ItemsProvider,
        field: str,
        matcher: TextMatcher,
        pagination: NextPageNavigator,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> PageSearchResult:
        """
        Search page by page using only a "next page" affordance.

        Algorithm:
            1. Go to the first page when ``go_to_first_page`` is given
            2. Read the total page count
            3. Scan pages 1 .. last, advancing after every miss except the last
            4. Raise after the last page

        Raises:
            ItemNotFoundError: Item absent from every page
        """
        if pagination.go_to_first_page:
            await pagination.go_to_first_page()

        total_pages = await pagination.get_total_pages()
        criteria = f"{field}={describe_matcher(matcher)}"
        logger.info(f"🔍 Searching {total_pages} page(s) for {criteria}")

        for page_number in range(1, total_pages + 1):
            item = await self._search_page(get_items, field, matcher, cleaners, page_number)
            if item is not None:
                return self._found(item, page_number, total_pages)
            if page_number < total_pages:
                await pagination.go_to_next_page()

        logger.info(f"✖ Not found after scanning {total_pages} page(s)")
        raise ItemNotFoundError(criteria, total_pages=total_pages)

    # =========================================================================
    # Internal
    # =========================================================================

    async def _matches_filters(
        self,
        item: Any,
        filters: FilterCriteria,
        cleaners: Optional[FieldCleanerMap],
    ) -> bool:
        for field, matcher in filters.items():
            value = await self.get_field_value(item, field, cleaners)
            if not matches_value(value, matcher):
                return False
        return True

    async def _search_page(
        self,
        get_items: ItemsProvider,
        field: str,
        matcher: TextMatcher,
        cleaners: Optional[FieldCleanerMap],
        page_number: int,
    ) -> Optional[Any]:
        logger.debug(f"Scanning page {page_number}")
        items = get_items()
        if not await self.has_item(items, field, matcher, cleaners):
            return None
        return await self.find_item(items, field, matcher, cleaners)

    @staticmethod
    def _found(item: Any, page_number: int, total_pages: int) -> PageSearchResult:
        logger.info(f"✔ Found on page {page_number}/{total_pages}")
        return PageSearchResult(item=item, page_number=page_number)


__all__ = [
    "ItemsProvider",
    "CollectionHelper",
]
