"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser and page lifecycle management (skips when no browser is installed)
- Desktop and mobile pages
- Page Object fixtures backed by self-contained HTML (page.set_content)
- Screenshot capture on failure

================================================================================
"""

import asyncio
from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Error as PlaywrightError, Page

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import ViewportType
from testsuites.ui_testing.pages.all_products_page import AllProductsPage
from testsuites.ui_testing.pages.products_page import ProductsPage


# ================================================================================
# Test Documents
# ================================================================================

# Admin product table: 7 products, 3 per page, "next" link pagination.
# Below 600px each row gets a Footable toggle that opens a detail row.
ADMIN_PRODUCTS_HTML = """
<html>
<head><title>All products</title></head>
<body>
  <div class="aiz-titlebar"><h1>All products</h1></div>
  <input id="search" type="text">
  <select id="type">
    <option value="">Sort by</option>
    <option value="stock_desc">Stock high to low</option>
  </select>
  <table class="table aiz-table">
    <thead>
      <tr>
        <th><input type="checkbox"></th>
        <th>Name</th>
        <th>Added By</th>
        <th>Info</th>
        <th>Total Stock</th>
        <th>Todays Deal</th>
        <th>Published</th>
        <th>Featured</th>
      </tr>
    </thead>
    <tbody></tbody>
  </table>
  <div class="aiz-pagination"><ul class="pagination"></ul></div>
  <script>
    const PAGE_SIZE = 3;
    const ALL = [
      {name: "Arabica Beans", by: "Admin", sales: 2, price: "$10.00", stock: 120, deal: true, published: true, featured: false},
      {name: "Robusta Beans", by: "Seller One", sales: 0, price: "$8.50", stock: 45, deal: false, published: true, featured: false},
      {name: "Liberica Beans", by: "Admin", sales: 5, price: "$14.00", stock: 7, deal: false, published: false, featured: true},
      {name: "Excelsa Beans", by: "Seller Two", sales: 1, price: "$12.25", stock: 300, deal: true, published: true, featured: true},
      {name: "Kona Roast", by: "Admin", sales: 9, price: "$30.00", stock: 12, deal: false, published: true, featured: false},
      {name: "Java Estate", by: "Seller One", sales: 3, price: "$18.75", stock: 64, deal: false, published: false, featured: false},
      {name: "Mocha Blend", by: "Admin", sales: 4, price: "$16.00", stock: 88, deal: true, published: true, featured: false},
    ];
    let rows = ALL.slice();
    let current = 1;

    const checkbox = (on) => `<label class="aiz-switch"><input type="checkbox"${on ? " checked" : ""}><span></span></label>`;

    function render() {
      const total = Math.max(1, Math.ceil(rows.length / PAGE_SIZE));
      const start = (current - 1) * PAGE_SIZE;
      const mobile = window.innerWidth < 600;
      document.querySelector("tbody").innerHTML = rows.slice(start, start + PAGE_SIZE).map((p) => {
        const toggle = mobile
          ? `<span class="footable-toggle fooicon fooicon-plus">+</span>`
          : "";
        return `<tr data-name="${p.name}">
          <td class="${mobile ? "footable-first-visible" : ""}">${toggle}${checkbox(false)}</td>
          <td>${p.name}</td>
          <td>${p.by}</td>
          <td>
            <span>Num of Sale: ${p.sales} Times</span>
            <span>Base Price: ${p.price}</span>
          </td>
          <td>${p.stock} pcs</td>
          <td>${checkbox(p.deal)}</td>
          <td>${checkbox(p.published)}</td>
          <td>${checkbox(p.featured)}</td>
        </tr>`;
      }).join("");

      let links = "";
      for (let n = 1; n <= total; n++) {
        links += n === current
          ? `<li class="page-item active"><span class="page-link">${n}</span></li>`
          : `<li class="page-item"><a class="page-link" href="#" data-page="${n}">${n}</a></li>`;
      }
      if (current < total) {
        links += `<li class="page-item"><a class="page-link" href="#" rel="next">&rsaquo;</a></li>`;
      }
      document.querySelector(".pagination").innerHTML = links;
    }

    document.querySelector(".pagination").addEventListener("click", (event) => {
      const link = event.target.closest("a");
      if (!link) return;
      event.preventDefault();
      current = link.rel === "next" ? current + 1 : Number(link.dataset.page);
      render();
    });

    // Footable-style toggle: insert/remove a detail row with a nested table
    document.querySelector("tbody").addEventListener("click", (event) => {
      const toggle = event.target.closest("span.footable-toggle");
      if (!toggle) return;
      const row = toggle.closest("tr");
      const next = row.nextElementSibling;
      if (next && next.classList.contains("footable-detail-row")) {
        next.remove();
        toggle.classList.replace("fooicon-minus", "fooicon-plus");
        return;
      }
      const p = ALL.find((item) => item.name === row.dataset.name);
      const detail = document.createElement("tr");
      detail.className = "footable-detail-row";
      detail.innerHTML = `<td colspan="8">
        <table class="table footable-details">
          <tbody>
            <tr><th>Added By</th><td>${p.by}</td></tr>
            <tr><th>Info</th><td>
              Num of Sale: ${p.sales} Times
              Base Price: ${p.price}
            </td></tr>
            <tr><th>Total Stock</th><td>${p.stock} pcs</td></tr>
          </tbody>
        </table>
      </td>`;
      row.after(detail);
      toggle.classList.replace("fooicon-plus", "fooicon-minus");
    });

    document.querySelector("#search").addEventListener("keydown", (event) => {
      if (event.key !== "Enter") return;
      const term = event.target.value.toLowerCase();
      rows = ALL.filter((p) => p.name.toLowerCase().includes(term));
      current = 1;
      render();
    });

    document.querySelector("#type").addEventListener("change", (event) => {
      rows = ALL.slice();
      if (event.target.value === "stock_desc") rows.sort((a, b) => b.stock - a.stock);
      current = 1;
      render();
    });

    render();
  </script>
</body>
</html>
"""

# Storefront product grid: 7 cards, 3 per page, numbered buttons + chevron.
STOREFRONT_HTML = """
<html>
<head><title>Shop</title></head>
<body>
  <h1>Shop</h1>
  <div id="grid"></div>
  <nav data-testid="pagination"></nav>
  <script>
    const PAGE_SIZE = 3;
    const PRODUCTS = [
      {name: "Arabica Beans", price: "$10.00", category: "Beans"},
      {name: "Robusta Beans", price: "$8.50", category: "Beans"},
      {name: "Liberica Beans", price: "$14.00", category: "Beans"},
      {name: "Excelsa Beans", price: "$12.25", category: "Beans"},
      {name: "Kona Roast", price: "$30.00", category: "Roasted"},
      {name: "Indonesia Java Estate", price: "$18.75", category: "Roasted"},
      {name: "Mocha Blend", price: "$16.00", category: "Blends"},
    ];
    const TOTAL = Math.ceil(PRODUCTS.length / PAGE_SIZE);
    let current = 1;

    function render() {
      const start = (current - 1) * PAGE_SIZE;
      document.querySelector("#grid").innerHTML = PRODUCTS.slice(start, start + PAGE_SIZE).map((p, i) => `
        <div class="card" data-testid="product-card-${start + i + 1}">
          <img alt="${p.name}">
          <h3>${p.name}</h3>
          <p class="price">${p.price}</p>
          <p class="category">${p.category}</p>
        </div>`).join("");

      let buttons = "";
      if (TOTAL > 1) {
        for (let n = 1; n <= TOTAL; n++) {
          buttons += `<button data-page="${n}"${n === current ? ' aria-current="page"' : ""}>${n}</button>`;
        }
        buttons += `<button data-next${current === TOTAL ? " disabled" : ""}><span class="material-icons">chevron_right</span></button>`;
      }
      document.querySelector("[data-testid='pagination']").innerHTML = buttons;
    }

    document.querySelector("[data-testid='pagination']").addEventListener("click", (event) => {
      const button = event.target.closest("button");
      if (!button || button.disabled) return;
      current = button.hasAttribute("data-next") ? current + 1 : Number(button.dataset.page);
      render();
    });

    render();
  </script>
</body>
</html>
"""


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Skips the test when Playwright browsers are not installed.
    """
    manager = BrowserManager()
    try:
        await manager.start()
    except PlaywrightError as e:
        pytest.skip(f"Browser not available: {e}")
    yield manager
    await manager.close()


@pytest.fixture
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Desktop browser context."""
    context = await browser_manager.new_context(ViewportType.DESKTOP)
    yield context


@pytest.fixture
async def page(context: BrowserContext) -> AsyncGenerator[Page, None]:
    """Desktop page."""
    page = await context.new_page()
    yield page


@pytest.fixture
async def mobile_page(browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """Page in a mobile-sized context."""
    page = await browser_manager.new_page(viewport_type=ViewportType.MOBILE)
    yield page


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
async def all_products_page(page: Page) -> AllProductsPage:
    """AllProductsPage on the admin product table document."""
    await page.set_content(ADMIN_PRODUCTS_HTML)
    return AllProductsPage(page)


@pytest.fixture
async def mobile_all_products_page(mobile_page: Page) -> AllProductsPage:
    """AllProductsPage in the mobile layout."""
    await mobile_page.set_content(ADMIN_PRODUCTS_HTML)
    return AllProductsPage(mobile_page, viewport_type=ViewportType.MOBILE)


@pytest.fixture
async def products_page(page: Page) -> ProductsPage:
    """ProductsPage on the storefront grid document."""
    await page.set_content(STOREFRONT_HTML)
    return ProductsPage(page)


@pytest.fixture
async def single_page_products_page(page: Page) -> ProductsPage:
    """Storefront grid where every card fits on one page (no pagination)."""
    await page.set_content(STOREFRONT_HTML.replace("const PAGE_SIZE = 3;", "const PAGE_SIZE = 10;"))
    return ProductsPage(page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach a screenshot to the Allure report when a UI test fails.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    page = getattr(item, "funcargs", {}).get("page")
    if page is None:
        return

    try:
        loop = asyncio.get_event_loop()
        if loop.is_running():
            # Loop owned by pytest-asyncio; attach when the screenshot resolves
            task = loop.create_task(page.screenshot(full_page=True))

            def _attach_done(t):
                if t.exception() is None:
                    allure.attach(
                        t.result(),
                        name="failure_screenshot",
                        attachment_type=allure.attachment_type.PNG,
                    )

            task.add_done_callback(_attach_done)
        else:
            screenshot = loop.run_until_complete(page.screenshot(full_page=True))
            allure.attach(
                screenshot,
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
    except Exception as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
