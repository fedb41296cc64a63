"""
================================================================================
Products Page Object (Storefront Product Grid)
================================================================================

Page Object for the public product listing, rendered as a card grid.

Key Features:
- GridResolver + CollectionHelper: product cards have no headers, so every
  field is located by a fixed selector inside the card
- Numbered pagination with chevron buttons
- Cross-page product search (jump-to-page with wrap-around, or next-only)

================================================================================
"""

from __future__ import annotations

import re
from typing import Dict, List

import allure
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.collection import (
    CollectionHelper,
    GridResolver,
    NextPageNavigator,
    PageNavigator,
    PageSearchResult,
    TextMatcher,
)
from testsuites.ui_testing.framework.page_base import (
    BasePage,
    DynamicLocator,
    ParameterizedLocator,
)


PRODUCT_CARDS = "[data-testid^='product-card-']"
PAGINATION = "[data-testid='pagination']"

# Field -> selector inside a product card
PRODUCT_FIELD_MAP: Dict[str, str] = {
    "name": "h3",
    "price": "p.price",
    "category": "p.category",
    "image": "img",
}


class ProductsPage(BasePage):
    """Page Object for the storefront product grid."""

    URL_PATH = "/products"

    LOCATORS = {
        "page_title": DynamicLocator(
            lambda page: page.get_by_role("heading", name="Shop", level=1)
        ),
        "product_cards": PRODUCT_CARDS,
        "product_card_by_name": ParameterizedLocator(
            lambda page, name: page.locator(PRODUCT_CARDS).filter(has_text=name)
        ),
        "pagination_buttons": DynamicLocator(
            lambda page: page.locator(f"{PAGINATION} button").filter(
                has_text=re.compile(r"^\s*\d+\s*$")
            )
        ),
        "page_button": ParameterizedLocator(
            lambda page, number: page.locator(f"{PAGINATION} button").filter(
                has_text=re.compile(rf"^\s*{number}\s*$")
            )
        ),
        "active_page": f"{PAGINATION} [aria-current='page']",
        "pagination_next": DynamicLocator(
            lambda page: page.get_by_role("button", name="chevron_right")
        ),
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.collection_helper = CollectionHelper(GridResolver(PRODUCT_FIELD_MAP))

    @allure.step("Verify Products page")
    async def expect_on_page(self) -> None:
        await expect(self.element("page_title")).to_be_visible()
        await expect(self.element("product_cards").first).to_be_visible()

    # ============================================================
    # Product List
    # ============================================================

    async def get_product_count(self) -> int:
        return await self.collection_helper.get_count(self.element("product_cards"))

    async def get_product_names(self) -> List[str]:
        return await self.collection_helper.get_field_values(
            self.element("product_cards"), "name"
        )

    async def get_product_prices(self) -> List[str]:
        return await self.collection_helper.get_field_values(
            self.element("product_cards"), "price"
        )

    @allure.step("Find product: {name}")
    async def find_product_by_name(self, name: TextMatcher) -> Locator:
        return await self.collection_helper.find_item(
            self.element("product_cards"), "name", name
        )

    async def get_product_data(self, name: TextMatcher) -> Dict[str, str]:
        card = await self.find_product_by_name(name)
        return await self.collection_helper.get_item_data(card, ["name", "price", "category"])

    async def get_all_products_data(self) -> List[Dict[str, str]]:
        return await self.collection_helper.get_collection_data(
            self.element("product_cards"), ["name", "price", "category"]
        )

    async def click_product(self, name: str) -> None:
        await self.click_with_log(self.element("product_card_by_name", name), f"Product {name}")

    # ============================================================
    # Pagination
    # ============================================================

    async def get_total_pages(self) -> int:
        """Highest numbered page button; 1 when there is no pagination."""
        buttons = self.element("pagination_buttons")
        count = await buttons.count()
        max_page = 1
        for index in range(count):
            text = ((await buttons.nth(index).text_content()) or "").strip()
            if text.isdigit():
                max_page = max(max_page, int(text))
        return max_page

    async def get_current_page(self) -> int:
        active = self.element("active_page")
        if await active.count() == 0:
            return 1
        text = ((await active.first.text_content()) or "").strip()
        return int(text) if text.isdigit() else 1

    async def _wait_for_cards(self) -> None:
        await self.element("product_cards").first.wait_for(
            state="visible", timeout=self.default_timeout
        )

    @allure.step("Go to page {page_number}")
    async def go_to_page(self, page_number: int) -> None:
        await self.click_with_log(self.element("page_button", page_number), f"Page {page_number}")
        await self._wait_for_cards()

    @allure.step("Go to next page")
    async def go_to_next_page(self) -> None:
        await self.click_with_log(self.element("pagination_next"), "Next page")
        await self._wait_for_cards()

    async def go_to_first_page(self) -> None:
        """Jump to page 1; single-page grids render no page buttons."""
        if await self.element("page_button", 1).count() > 0:
            await self.go_to_page(1)

    # ============================================================
    # Search Across Pages
    # ============================================================

    @allure.step("Find product across pages: {name}")
    async def find_product_across_pages(self, name: TextMatcher) -> PageSearchResult:
        """
        Search from the page currently shown, wrapping around to page 1.

        Example:
            >>> result = await products_page.find_product_across_pages("Java Estate")
            >>> await result.item.click()
        """
        return await self.collection_helper.find_item_across_pages(
            lambda: self.element("product_cards"),
            "name",
            name,
            PageNavigator(
                get_total_pages=self.get_total_pages,
                go_to_page=self.go_to_page,
                get_current_page=self.get_current_page,
            ),
        )

    @allure.step("Find product page by page: {name}")
    async def find_product_with_next_page(self, name: TextMatcher) -> PageSearchResult:
        """Reset to page 1, then advance with the "next" button."""
        return await self.collection_helper.find_item_with_next_page(
            lambda: self.element("product_cards"),
            "name",
            name,
            NextPageNavigator(
                get_total_pages=self.get_total_pages,
                go_to_next_page=self.go_to_next_page,
                go_to_first_page=self.go_to_first_page,
            ),
        )


__all__ = [
    "PRODUCT_FIELD_MAP",
    "ProductsPage",
]
