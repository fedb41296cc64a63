"""
================================================================================
Collection Resolution
================================================================================

Generic field extraction, search and pagination over on-screen collections.

Components:
    - field_resolver: matcher, resolver contract and errors
    - field_cleaners: per-field text normalization
    - grid_resolver: static selector map (cards)
    - table_resolver: header-derived column map (tables)
    - collection_helper: extraction, search and cross-page search
    - pagination: pagination callback bundles

Author: Automation Team
License: MIT
================================================================================
"""

from .collection_helper import CollectionHelper
from .field_cleaners import (
    clean_field_text,
    collapse_lines,
    leading_number,
    normalize_whitespace,
)
from .field_resolver import (
    CollectionError,
    FieldCleanerMap,
    FieldNotFoundError,
    FieldResolver,
    FilterCriteria,
    ItemNotFoundError,
    ResolverNotInitializedError,
    TextMatcher,
    matches_value,
)
from .grid_resolver import GridResolver
from .pagination import NextPageNavigator, PageNavigator, PageSearchResult
from .table_resolver import ColumnInfo, TableResolver

__all__ = [
    "CollectionHelper",
    "clean_field_text",
    "collapse_lines",
    "leading_number",
    "normalize_whitespace",
    "CollectionError",
    "FieldCleanerMap",
    "FieldNotFoundError",
    "FieldResolver",
    "FilterCriteria",
    "ItemNotFoundError",
    "ResolverNotInitializedError",
    "TextMatcher",
    "matches_value",
    "GridResolver",
    "NextPageNavigator",
    "PageNavigator",
    "PageSearchResult",
    "ColumnInfo",
    "TableResolver",
]
