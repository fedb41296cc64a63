"""
================================================================================
Field Cleaners
================================================================================

Per-field text normalization applied after raw extraction.

A FieldCleanerMap maps field names to ``(raw_text) -> cleaned_text``
functions. Fields without a registered cleaner are trimmed.

Usage:
    >>> cleaners = {"info": collapse_lines(), "totalStock": leading_number()}
    >>> clean_field_text("12 pcs\\n", "totalStock", cleaners)
    '12'

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

from .field_resolver import FieldCleaner, FieldCleanerMap


_LINE_BREAK = re.compile(r"\s*\n\s*")
_LEADING_DIGITS = re.compile(r"^\d+")


def default_cleaner(text: str) -> str:
    """Trim leading/trailing whitespace."""
    return text.strip()


def clean_field_text(
    text: Optional[str],
    field: str,
    cleaners: Optional[FieldCleanerMap] = None,
) -> str:
    """
    Apply the cleaner registered for ``field``, or trim.

    Args:
        text: Raw text as read from the element (None is treated as "")
        field: Field name used to look up the cleaner
        cleaners: Optional per-call cleaner map

    Returns:
        Cleaned text
    """
    raw = text or ""
    cleaner = (cleaners or {}).get(field)
    return cleaner(raw) if cleaner else default_cleaner(raw)


def collapse_lines(separator: str = " | ") -> FieldCleaner:
    """
    Join a multi-line cell into one line.

    "Num of Sale: 0 Times \\n   Base Price: $509.19"
        -> "Num of Sale: 0 Times | Base Price: $509.19"
    """

    def _clean(text: str) -> str:
        parts = (part.strip() for part in _LINE_BREAK.split(text))
        return separator.join(part for part in parts if part)

    return _clean


def leading_number() -> FieldCleaner:
    """Keep the leading digit run ("120 pcs" -> "120"), else the trimmed text."""

    def _clean(text: str) -> str:
        trimmed = text.strip()
        match = _LEADING_DIGITS.match(trimmed)
        return match.group(0) if match else trimmed

    return _clean


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run into a single space."""
    return " ".join(text.split())


__all__ = [
    "default_cleaner",
    "clean_field_text",
    "collapse_lines",
    "leading_number",
    "normalize_whitespace",
]
