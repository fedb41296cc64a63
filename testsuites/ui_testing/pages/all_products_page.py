"""
================================================================================
All Products Page Object (Admin Product Table)
================================================================================

Page Object for the admin "All products" table.

Key Features:
- TableResolver + CollectionHelper: read rows by header-derived column keys
- Field cleaners normalize multi-line and numeric cells before comparison
- Switch columns read as "Yes"/"No" for both reads and searches
- Responsive rows: mobile layout excludes Footable detail rows and can
  expand a row to read its detail table
- Next-button pagination search across pages

Column keys (camelCase of header text):
    name, addedBy, info, totalStock, todaysDeal, published, featured, options

================================================================================
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.collection import (
    CollectionHelper,
    FieldCleanerMap,
    FilterCriteria,
    NextPageNavigator,
    TableResolver,
    TextMatcher,
    collapse_lines,
    leading_number,
    normalize_whitespace,
)
from testsuites.ui_testing.framework.page_base import (
    BasePage,
    DynamicLocator,
    ParameterizedLocator,
    ViewportType,
)


TABLE = ".table.aiz-table:not(.footable-details)"

DEFAULT_PRODUCT_TABLE_COLUMNS: Tuple[str, ...] = (
    "name",
    "addedBy",
    "info",
    "totalStock",
    "todaysDeal",
    "published",
    "featured",
)

# Columns rendered as checkboxes; read as "Yes"/"No"
CHECKBOX_COLUMNS = frozenset({"todaysDeal", "published", "featured"})

# Footable inserts the detail row as the next sibling of the expanded row
DETAIL_ROW = (
    "xpath=following-sibling::tr[1]"
    "[contains(concat(' ', normalize-space(@class), ' '), ' footable-detail-row ')]"
)


class ProductTableHelper(CollectionHelper[TableResolver]):
    """
    CollectionHelper for the product table.

    Switch columns have no text; their checked state is read instead, so
    searches and filters compare against the same "Yes"/"No" values that
    the page returns when reading rows.
    """

    async def get_field_value(
        self,
        item: Locator,
        field: str,
        cleaners: Optional[FieldCleanerMap] = None,
    ) -> str:
        if field not in CHECKBOX_COLUMNS:
            return await super().get_field_value(item, field, cleaners)

        checkbox = self.resolver.resolve(item, field).locator("input[type='checkbox']")
        if await checkbox.count() == 0:
            return "No"
        return "Yes" if await checkbox.first.is_checked() else "No"


class AllProductsPage(BasePage):
    """
    Page Object for the admin product table.

    The TableResolver is built lazily from the header row and dropped after
    anything that re-renders the table (search, sort, page change).
    """

    URL_PATH = "/admin/products/all"

    LOCATORS = {
        "page_title": DynamicLocator(
            lambda page: page.locator(
                ".aiz-titlebar h1, .aiz-titlebar h2, .aiz-titlebar h3"
            ).filter(has_text="All products")
        ),
        "products_table": TABLE,
        # Child combinators keep the nested detail tables out
        "table_headers": f"{TABLE} > thead > tr > th",
        "table_rows": f"{TABLE} > tbody > tr",
        "search_input": "#search",
        "sort_select": "select#type",
        "pagination_items": ".aiz-pagination .pagination .page-item",
        "pagination_next": ".aiz-pagination .pagination .page-item:has(a[rel='next'])",
        "pagination_page_link": ParameterizedLocator(
            lambda page, number: page.locator(".aiz-pagination .pagination .page-item")
            .filter(has_text=re.compile(rf"^\s*{number}\s*$"))
            .locator("a")
        ),
    }

    # Footable inserts <tr class="footable-detail-row"> under expanded rows
    VIEWPORT_OVERRIDES = {
        ViewportType.MOBILE: {
            "table_rows": f"{TABLE} > tbody > tr:not(.footable-detail-row)",
        },
    }

    FIELD_CLEANERS: FieldCleanerMap = {
        "info": collapse_lines(" | "),
        "totalStock": leading_number(),
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.table_ready_timeout: int = self.settings.table_ready_timeout
        self._table_resolver: Optional[TableResolver] = None
        self._collection_helper: Optional[ProductTableHelper] = None

    # ============================================================
    # Collection Helper (lazy)
    # ============================================================

    async def _ensure_collection_helper(self) -> ProductTableHelper:
        if self._collection_helper is None or self._table_resolver is None:
            await self.wait_for_table_ready()
            self._table_resolver = await TableResolver.create(self.element("table_headers"))
            self._collection_helper = ProductTableHelper(self._table_resolver)
        return self._collection_helper

    def _reset_collection_cache(self) -> None:
        self._table_resolver = None
        self._collection_helper = None

    @allure.step("Refresh table headers")
    async def refresh_headers(self) -> None:
        """Rebuild the column map after a layout switch."""
        if self._table_resolver is None:
            await self._ensure_collection_helper()
            return
        await self._table_resolver.refresh()

    # ============================================================
    # Page State
    # ============================================================

    @allure.step("Verify All Products page")
    async def expect_on_page(self) -> None:
        await expect(self.element("page_title")).to_be_visible()
        await expect(self.element("products_table")).to_be_visible()
        # Header renders before the data rows
        await expect(self.element("table_rows").first).to_be_visible(
            timeout=self.table_ready_timeout
        )

    async def wait_for_table_ready(self) -> None:
        """Wait until the table, its headers and at least one row are visible."""
        await self.page.wait_for_load_state("networkidle")
        await expect(self.element("products_table")).to_be_visible(timeout=10000)
        await expect(self.element("table_headers").first).to_be_visible(timeout=5000)
        await expect(self.element("table_rows").first).to_be_visible(
            timeout=self.table_ready_timeout
        )

    # ============================================================
    # Row Data
    # ============================================================

    async def _get_field_value_for_row(self, row: Locator, field: str) -> str:
        helper = await self._ensure_collection_helper()
        return await helper.get_field_value(row, field, self.FIELD_CLEANERS)

    async def _get_row_data(self, row: Locator, column_keys: Sequence[str]) -> Dict[str, str]:
        data: Dict[str, str] = {}
        for key in column_keys:
            data[key] = await self._get_field_value_for_row(row, key)
        return data

    @allure.step("Get row count")
    async def get_row_count(self) -> int:
        await self.wait_for_table_ready()
        return await self.element("table_rows").count()

    @allure.step("Get column values: {column_key}")
    async def get_column_values(self, column_key: str) -> List[str]:
        await self._ensure_collection_helper()
        rows = self.element("table_rows")
        count = await rows.count()
        return [await self._get_field_value_for_row(rows.nth(i), column_key) for i in range(count)]

    @allure.step("Get table data")
    async def get_table_data(
        self,
        column_keys: Sequence[str] = DEFAULT_PRODUCT_TABLE_COLUMNS,
    ) -> List[Dict[str, str]]:
        await self._ensure_collection_helper()
        rows = self.element("table_rows")
        count = await rows.count()
        logger.info(f"{self.log_prefix}📊 Table rows count: {count}")
        return [await self._get_row_data(rows.nth(i), column_keys) for i in range(count)]

    # ============================================================
    # Row Finder
    # ============================================================

    @allure.step("Find row where {column_key} matches")
    async def find_row_by_column_value(self, column_key: str, matcher: TextMatcher) -> Locator:
        helper = await self._ensure_collection_helper()
        return await helper.find_item(
            self.element("table_rows"), column_key, matcher, self.FIELD_CLEANERS
        )

    @allure.step("Find row by filters")
    async def find_row_by_filters(self, filters: FilterCriteria) -> Locator:
        """First row on the current page matching every filter."""
        helper = await self._ensure_collection_helper()
        return await helper.find_item_by_filters(
            self.element("table_rows"), filters, self.FIELD_CLEANERS
        )

    async def get_row_data_by_filters(
        self,
        filters: FilterCriteria,
        column_keys: Sequence[str] = DEFAULT_PRODUCT_TABLE_COLUMNS,
    ) -> Dict[str, str]:
        row = await self.find_row_by_filters(filters)
        return await self._get_row_data(row, column_keys)

    @allure.step("Find row across pages where {column_key} matches")
    async def find_row_across_pages(
        self,
        column_key: str,
        matcher: TextMatcher,
    ) -> Tuple[Locator, int]:
        """
        Scan every page from the first one using the "next" link.

        Returns:
            (row, page_number)
        """
        helper = await self._ensure_collection_helper()
        result = await helper.find_item_with_next_page(
            lambda: self.element("table_rows"),
            column_key,
            matcher,
            NextPageNavigator(
                get_total_pages=self.get_total_pages,
                go_to_next_page=self.go_to_next_page,
                go_to_first_page=self.go_to_first_page,
            ),
            self.FIELD_CLEANERS,
        )
        return result.item, result.page_number

    async def get_row_data_across_pages(
        self,
        column_key: str,
        matcher: TextMatcher,
        column_keys: Sequence[str] = DEFAULT_PRODUCT_TABLE_COLUMNS,
    ) -> Tuple[Dict[str, str], int]:
        row, page_number = await self.find_row_across_pages(column_key, matcher)
        return await self._get_row_data(row, column_keys), page_number

    # ============================================================
    # Mobile Detail Rows
    # ============================================================

    def _row_toggle(self, row: Locator) -> Locator:
        return row.locator("td.footable-first-visible").first.locator("span.footable-toggle").first

    async def _toggle_has_class(self, toggle: Locator, class_name: str) -> bool:
        return await toggle.evaluate("(el, name) => el.classList.contains(name)", class_name)

    @allure.step("Expand row")
    async def expand_row(self, row: Locator) -> None:
        """Open the Footable detail row under ``row``. No-op outside mobile."""
        if not self.is_mobile_viewport():
            logger.info(f"{self.log_prefix}📱 Not a mobile viewport; expand skipped")
            return

        # Footable marks the toggle cell only after it initializes
        toggle_cell = row.locator("td.footable-first-visible").first
        try:
            await expect(toggle_cell).to_be_visible(timeout=5000)
        except AssertionError:
            logger.info(f"{self.log_prefix}📱 No footable-first-visible cell; expand skipped")
            return

        toggle = self._row_toggle(row)
        if await toggle.count() == 0:
            logger.info(f"{self.log_prefix}📱 No footable-toggle icon; expand skipped")
            return
        if await self._toggle_has_class(toggle, "fooicon-minus"):
            return

        await self.click_with_log(toggle, "Expand row")
        await expect(row.locator(DETAIL_ROW)).to_be_visible(timeout=3000)

    @allure.step("Collapse row")
    async def collapse_row(self, row: Locator) -> None:
        """Close the detail row under ``row``. No-op outside mobile."""
        if not self.is_mobile_viewport():
            logger.info(f"{self.log_prefix}📱 Not a mobile viewport; collapse skipped")
            return

        toggle = self._row_toggle(row)
        if await toggle.count() == 0:
            logger.info(f"{self.log_prefix}📱 No footable-toggle icon; collapse skipped")
            return
        if await self._toggle_has_class(toggle, "fooicon-plus"):
            return

        await self.click_with_log(toggle, "Collapse row")
        await expect(row.locator(DETAIL_ROW)).to_be_hidden(timeout=3000)

    async def get_expanded_row_data(self, row: Locator) -> Dict[str, str]:
        """
        Read the ``<th>Key</th><td>Value</td>`` pairs of an expanded row.

        Returns:
            Header text -> whitespace-normalized value, e.g. {"Added By": "Admin"}

        Raises:
            RuntimeError: Not a mobile viewport, or the row is not expanded
        """
        if not self.is_mobile_viewport():
            raise RuntimeError("Expanded row data is only available on the mobile layout")

        detail_row = row.locator(DETAIL_ROW)
        if not await detail_row.is_visible():
            raise RuntimeError("Detail row is not visible; call expand_row() first")

        entries = detail_row.locator("table.footable-details tbody tr")
        count = await entries.count()
        data: Dict[str, str] = {}
        for index in range(count):
            entry = entries.nth(index)
            key = ((await entry.locator("th").text_content()) or "").strip()
            value = normalize_whitespace((await entry.locator("td").text_content()) or "")
            if key and value:
                data[key] = value

        logger.info(f"{self.log_prefix}📱 Read {len(data)} field(s) from detail row")
        return data

    # ============================================================
    # Search, Sort & Pagination
    # ============================================================

    @allure.step("Search products: {term}")
    async def search(self, term: str) -> None:
        await self.fill_with_log(self.element("search_input"), term, "Search input")
        await self.page.keyboard.press("Enter")
        await self.wait_for_table_ready()
        self._reset_collection_cache()

    @allure.step("Sort products: {option}")
    async def select_sort(self, option: str) -> None:
        select = self.element("sort_select")
        await select.select_option(label=option)
        await select.dispatch_event("change")
        await self.wait_for_table_ready()
        self._reset_collection_cache()

    async def get_total_pages(self) -> int:
        """Highest numeric page link; 1 when there is no pagination."""
        items = self.element("pagination_items")
        count = await items.count()
        max_page = 1
        for index in range(count):
            text = ((await items.nth(index).text_content()) or "").strip()
            if text.isdigit():
                max_page = max(max_page, int(text))
        return max_page

    async def _go_to_next_page(self) -> bool:
        next_item = self.element("pagination_next")
        if await next_item.count() == 0:
            return False
        await self.click_with_log(next_item.locator("a"), "Next page")
        await self.wait_for_table_ready()
        self._reset_collection_cache()
        return True

    @allure.step("Go to next page")
    async def go_to_next_page(self) -> None:
        """
        Raises:
            RuntimeError: Already on the last page
        """
        if not await self._go_to_next_page():
            raise RuntimeError("Already on the last page; cannot go to the next page")

    @allure.step("Go to page {page_number}")
    async def go_to_page(self, page_number: int) -> None:
        await self.click_with_log(
            self.element("pagination_page_link", page_number), f"Page {page_number}"
        )
        await self.wait_for_table_ready()
        self._reset_collection_cache()

    async def go_to_first_page(self) -> None:
        """Jump to page 1 when a page-1 link is shown (i.e. not already there)."""
        first_link = self.element("pagination_page_link", 1)
        if await first_link.count() > 0:
            await self.go_to_page(1)


__all__ = [
    "DEFAULT_PRODUCT_TABLE_COLUMNS",
    "CHECKBOX_COLUMNS",
    "ProductTableHelper",
    "AllProductsPage",
]
