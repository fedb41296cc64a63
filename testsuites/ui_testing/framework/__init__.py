"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - collection: field resolution, search and pagination over tables/grids
    - page_base: base page object with locator maps and logged interactions
    - browser_manager: browser lifecycle management
    - config_loader / log_config: configuration and logging setup

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError, UISettings
from .log_config import init_logger
from .page_base import (
    BasePage,
    DynamicLocator,
    ParameterizedLocator,
    StaticLocator,
    ViewportType,
)

__all__ = [
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "UISettings",
    "init_logger",
    "BasePage",
    "DynamicLocator",
    "ParameterizedLocator",
    "StaticLocator",
    "ViewportType",
]
