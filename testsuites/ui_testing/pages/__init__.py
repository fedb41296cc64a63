"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Collection access (tables and card grids)
    - Pagination

Author: Automation Team
License: MIT
================================================================================
"""

from .all_products_page import AllProductsPage
from .products_page import ProductsPage

__all__ = [
    "AllProductsPage",
    "ProductsPage",
]
