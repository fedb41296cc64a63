"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Declarative locator maps with per-viewport overrides
    - Logged interactions wrapped in Allure steps
    - Visibility expectations
    - Screenshot and failure capture

Locator definitions are an explicit tagged union:
    - "css selector" / StaticLocator("css")   -> page.locator(selector)
    - DynamicLocator(lambda page: ...)         -> built from the page
    - ParameterizedLocator(lambda page, *a: ...) -> element(name, *a)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Locator, Page, expect

from .config_loader import ConfigLoader


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class ViewportType(str, Enum):
    """Layout the page object targets."""
    DESKTOP = "desktop"
    MOBILE = "mobile"


@dataclass(frozen=True)
class StaticLocator:
    """Plain selector, resolved against the page."""
    selector: str


@dataclass(frozen=True)
class DynamicLocator:
    """Locator built from the page (role/text queries, chained filters)."""
    factory: Callable[[Page], Locator]


@dataclass(frozen=True)
class ParameterizedLocator:
    """Locator that needs call-time arguments, e.g. a page number."""
    factory: Callable[..., Locator]


LocatorDef = Union[str, StaticLocator, DynamicLocator, ParameterizedLocator]
LocatorMap = Mapping[str, LocatorDef]


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class ProductsPage(BasePage):
            URL_PATH = "/products"
            LOCATORS = {
                "product_cards": "[data-testid^='product-card-']",
                "page_button": ParameterizedLocator(
                    lambda page, n: page.get_by_role("button", name=str(n))
                ),
            }

            async def open_page(self, n: int) -> None:
                await self.click_with_log(self.element("page_button", n))
    """

    # Override in subclasses
    URL_PATH: str = "/"
    LOCATORS: Dict[str, LocatorDef] = {}
    VIEWPORT_OVERRIDES: Dict[ViewportType, Dict[str, LocatorDef]] = {}

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        viewport_type: ViewportType = ViewportType.DESKTOP,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to ui.base_url)
            viewport_type: Layout used to pick locator overrides
        """
        self.settings = ConfigLoader().ui_settings()
        self.page = page
        self.base_url = (base_url or self.settings.base_url).rstrip("/")
        self.viewport_type = ViewportType(viewport_type)
        self.default_timeout: int = self.settings.default_timeout

    @property
    def url(self) -> str:
        """Full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def log_prefix(self) -> str:
        return f"[{type(self).__name__}] "

    def is_mobile_viewport(self) -> bool:
        return self.viewport_type is ViewportType.MOBILE

    # =========================================================================
    # Locator Map
    # =========================================================================

    def element(self, name: str, *args: Any) -> Locator:
        """
        Resolve a named locator for the current viewport.

        Args:
            name: Key in LOCATORS (or a viewport override)
            *args: Arguments for a ParameterizedLocator

        Returns:
            Playwright Locator
        """
        definition = self._locator_definition(name)

        if isinstance(definition, str):
            definition = StaticLocator(definition)

        if isinstance(definition, ParameterizedLocator):
            return definition.factory(self.page, *args)

        if args:
            raise TypeError(f"Locator '{name}' does not take arguments")
        if isinstance(definition, DynamicLocator):
            return definition.factory(self.page)
        return self.page.locator(definition.selector)

    def _locator_definition(self, name: str) -> LocatorDef:
        overrides = self.VIEWPORT_OVERRIDES.get(self.viewport_type, {})
        if name in overrides:
            return overrides[name]
        try:
            return self.LOCATORS[name]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__}: unknown locator '{name}'. "
                f"Available: {', '.join(self.LOCATORS)}"
            ) from None

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self, wait_for: str = "networkidle") -> None:
        """Navigate to this page."""
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)

    async def navigate_to(self, path: str, wait_for: str = "networkidle") -> None:
        """
        Navigate to specific path.

        Args:
            path: URL path to navigate to
            wait_for: 'load', 'domcontentloaded' or 'networkidle'
        """
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)
            logger.debug(f"{self.log_prefix}Navigated to: {full_url}")

    async def wait_for_page_load(
        self,
        state: str = "networkidle",
        timeout: int = 15000,
    ) -> None:
        """Wait for the page to reach a stable load state."""
        await self.page.wait_for_load_state(state, timeout=timeout)

    # =========================================================================
    # Logged Interactions
    # =========================================================================

    async def click_with_log(
        self,
        locator: Locator,
        description: str = "",
        **kwargs: Any,
    ) -> None:
        """
        Click a locator inside an Allure step.

        Args:
            locator: Target Locator
            description: Human-readable name for logs and the report
            **kwargs: Additional click options
        """
        label = description or str(locator)
        with allure.step(f"Click: {label}"):
            logger.info(f"{self.log_prefix}Click: {label}")
            await locator.click(**kwargs)

    async def fill_with_log(
        self,
        locator: Locator,
        value: str,
        description: str = "",
        **kwargs: Any,
    ) -> None:
        """Fill an input inside an Allure step (passwords are masked)."""
        label = description or str(locator)
        shown = "*" * len(value) if "password" in label.lower() else value
        with allure.step(f"Fill {label}: {shown}"):
            logger.info(f"{self.log_prefix}Fill {label}: {shown}")
            await locator.fill(value, **kwargs)

    async def expect_visible(
        self,
        locator: Locator,
        description: str = "",
        timeout: Optional[int] = None,
    ) -> None:
        """Assert the locator becomes visible."""
        logger.debug(f"{self.log_prefix}Expect visible: {description or locator}")
        await expect(locator).to_be_visible(timeout=timeout or self.default_timeout)

    async def expect_hidden(
        self,
        locator: Locator,
        description: str = "",
        timeout: Optional[int] = None,
    ) -> None:
        """Assert the locator becomes hidden."""
        logger.debug(f"{self.log_prefix}Expect hidden: {description or locator}")
        await expect(locator).to_be_hidden(timeout=timeout or self.default_timeout)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, URL and viewport to the Allure report."""
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", attach_to_allure=True)
            allure.attach(
                json.dumps(
                    {"url": self.page.url, "viewport": self.viewport_type.value},
                    indent=2,
                ),
                name="Page State",
                attachment_type=allure.attachment_type.JSON,
            )


__all__ = [
    "ViewportType",
    "StaticLocator",
    "DynamicLocator",
    "ParameterizedLocator",
    "LocatorDef",
    "LocatorMap",
    "BasePage",
]
