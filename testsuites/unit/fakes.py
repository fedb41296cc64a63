"""
In-memory stand-ins for the Playwright Locator surface used by the
collection helpers (count / nth / locator / text_content / inner_text).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence


class FakeNode:
    """Leaf element with fixed text."""

    def __init__(self, text: Optional[str] = None, selector: str = ""):
        self.text = text
        self.selector = selector

    async def text_content(self) -> Optional[str]:
        return self.text

    async def inner_text(self) -> str:
        return self.text or ""


class FakeCheckbox:
    """``input[type='checkbox']`` inside a switch cell."""

    def __init__(self, checked: Optional[bool]):
        self.checked = checked

    async def count(self) -> int:
        return 0 if self.checked is None else 1

    @property
    def first(self) -> "FakeCheckbox":
        return self

    async def is_checked(self) -> bool:
        return bool(self.checked)


class FakeSwitchCell:
    """Table cell holding a switch; ``checked=None`` renders no checkbox at all."""

    def __init__(self, checked: Optional[bool]):
        self.checkbox = FakeCheckbox(checked)
        self.requested: List[str] = []

    def locator(self, selector: str) -> FakeCheckbox:
        self.requested.append(selector)
        return self.checkbox

    async def text_content(self) -> Optional[str]:
        return ""

    async def inner_text(self) -> str:
        return ""


class FakeItem:
    """Row or card; ``locator(selector)`` returns the node registered for it."""

    def __init__(self, fields: Dict[str, object], label: str = ""):
        self.fields = fields
        self.label = label
        self.requested: List[str] = []

    def locator(self, selector: str) -> object:
        self.requested.append(selector)
        value = self.fields.get(selector)
        if isinstance(value, (FakeNode, FakeSwitchCell)):
            return value
        return FakeNode(value, selector)

    def __repr__(self) -> str:
        return f"FakeItem({self.label or self.fields})"


def make_row(cells: Sequence[object], label: str = "") -> FakeItem:
    """Table row whose cells answer ``td:nth-child(n)``; cells are text or fake cells."""
    return FakeItem(
        {f"td:nth-child({index + 1})": text for index, text in enumerate(cells)},
        label=label,
    )


def make_card(label: str = "", **fields: str) -> FakeItem:
    return FakeItem(dict(fields), label=label)


class FakeCollection:
    """Indexed collection; ``count()`` can be made to fail."""

    def __init__(self, items: Sequence[object], error: Optional[Exception] = None):
        self.items = list(items)
        self.error = error

    async def count(self) -> int:
        if self.error is not None:
            raise self.error
        return len(self.items)

    def nth(self, index: int):
        return self.items[index]


class FakeHeaders(FakeCollection):
    """Header cells built from raw header strings."""

    def __init__(self, texts: Sequence[Optional[str]]):
        super().__init__([FakeNode(text) for text in texts])


class FakePager:
    """
    Paginated collection with both jump-to-page and next-only navigation.

    Records every navigation so tests can assert the visiting order.
    """

    def __init__(self, pages: Sequence[Sequence[object]], current_page: int = 1):
        self.pages = [list(page) for page in pages]
        self.current_page = current_page
        self.jumps: List[int] = []
        self.scanned: List[int] = []
        self.next_calls = 0
        self.first_page_calls = 0

    def get_items(self) -> FakeCollection:
        self.scanned.append(self.current_page)
        return FakeCollection(self.pages[self.current_page - 1])

    async def get_total_pages(self) -> int:
        return len(self.pages)

    async def get_current_page(self) -> int:
        return self.current_page

    async def go_to_page(self, page_number: int) -> None:
        self.jumps.append(page_number)
        self.current_page = page_number

    async def go_to_next_page(self) -> None:
        self.next_calls += 1
        self.current_page += 1

    async def go_to_first_page(self) -> None:
        self.first_page_calls += 1
        self.current_page = 1
