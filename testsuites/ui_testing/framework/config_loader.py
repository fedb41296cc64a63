"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration for the UI framework.

Two views of the same data:
    - ConfigLoader.get("logging.level"): raw dot-path lookup, environment first
    - ConfigLoader.ui_settings(): the validated ``ui`` section as UISettings,
      which is what page objects and the browser manager consume

Environment variables override keys by upper-casing the dot path:
    ui.base_url -> UI_BASE_URL, ui.headless -> UI_HEADLESS

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class ConfigurationError(Exception):
    """Raised when the configuration file or a setting is invalid."""
    pass


@dataclass(frozen=True)
class UISettings:
    """
    Validated ``ui`` section.

    Attributes:
        base_url: Application root, without trailing slash
        browser: chromium | firefox | webkit
        headless: Launch without a visible window
        default_timeout: Element wait timeout (ms)
        table_ready_timeout: Wait for table rows after a re-render (ms)
    """
    base_url: str = "http://localhost:3000"
    browser: str = "chromium"
    headless: bool = True
    default_timeout: int = 5000
    table_ready_timeout: int = 15000


class ConfigLoader:
    """
    Process-wide configuration singleton.

    Usage:
        >>> settings = ConfigLoader().ui_settings()
        >>> settings.default_timeout
        5000
        >>> ConfigLoader().get("logging.level", "INFO")
        'INFO'
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file; DEFAULT_CONFIG_PATH when omitted.
                        Ignored once the singleton is built (see reset()).
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._ui_settings: Optional[UISettings] = None
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        self._ui_settings = None
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"{self._config_path}: top level must be a mapping, got {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Dot-path lookup: environment variable, then YAML, then ``default``.

        Environment strings are converted to the type of ``default``.
        """
        env_value = os.environ.get(key.upper().replace(".", "_"))
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None
            if value is None:
                return default
        return value

    def ui_settings(self) -> UISettings:
        """
        The ``ui`` section with environment overrides applied and validated.

        Built once per load; ``reload()`` and ``reset()`` drop it.

        Raises:
            ConfigurationError: Unknown browser, or a non-positive / non-integer timeout
        """
        if self._ui_settings is None:
            self._ui_settings = self._build_ui_settings()
        return self._ui_settings

    def _build_ui_settings(self) -> UISettings:
        defaults = UISettings()
        browser = str(self.get("ui.browser", defaults.browser)).lower()
        if browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"ui.browser must be one of {', '.join(SUPPORTED_BROWSERS)}, got '{browser}'"
            )

        timeouts = {}
        for name in ("default_timeout", "table_ready_timeout"):
            value = self.get(f"ui.{name}", getattr(defaults, name))
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"ui.{name} must be a positive integer (ms), got {value!r}")
            timeouts[name] = value

        headless = self.get("ui.headless", defaults.headless)
        if not isinstance(headless, bool):
            raise ConfigurationError(f"ui.headless must be true or false, got {headless!r}")

        return UISettings(
            base_url=str(self.get("ui.base_url", defaults.base_url)).rstrip("/"),
            browser=browser,
            headless=headless,
            **timeouts,
        )

    def reload(self) -> None:
        """Re-read the YAML file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """Convert an environment string to the type of ``reference``."""
        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next ConfigLoader() reloads from scratch."""
        cls._instance = None


__all__ = [
    "SUPPORTED_BROWSERS",
    "ConfigurationError",
    "UISettings",
    "ConfigLoader",
]
