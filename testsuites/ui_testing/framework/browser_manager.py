"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - Single browser instance per session
    - Isolated contexts per test
    - Desktop and mobile viewport presets

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config_loader import ConfigLoader
from .page_base import ViewportType


# Context options per layout
VIEWPORT_PRESETS: Dict[ViewportType, Dict[str, Any]] = {
    ViewportType.DESKTOP: {
        "viewport": {"width": 1920, "height": 1080},
    },
    ViewportType.MOBILE: {
        "viewport": {"width": 390, "height": 844},
        "is_mobile": True,
        "has_touch": True,
    },
}


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page(viewport_type=ViewportType.MOBILE)
            await page.goto("https://example.com")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
    ):
        """
        Args:
            headless: Run browser in headless mode (defaults to ui.headless)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to ui.browser)
        """
        settings = ConfigLoader().ui_settings()
        self.headless = settings.headless if headless is None else headless
        self.browser_type = browser_type or settings.browser

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        try:
            self._browser = await browser_launcher.launch(**launch_options)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(
        self,
        viewport_type: ViewportType = ViewportType.DESKTOP,
        **options: Any,
    ) -> BrowserContext:
        """
        Create an isolated browser context.

        Args:
            viewport_type: Viewport preset to apply
            **options: Additional context options (override the preset)
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            **VIEWPORT_PRESETS[ViewportType(viewport_type)],
            **options,
        }
        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        viewport_type: ViewportType = ViewportType.DESKTOP,
        **context_options: Any,
    ) -> Page:
        """Create a page in a new or existing context."""
        if context is None:
            context = await self.new_context(viewport_type, **context_options)
        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "VIEWPORT_PRESETS",
    "BrowserManager",
]
