import re

import pytest

from testsuites.ui_testing.framework.collection import (
    CollectionHelper,
    FieldNotFoundError,
    GridResolver,
    ItemNotFoundError,
    TableResolver,
    leading_number,
)
from testsuites.unit.fakes import FakeCollection, FakeHeaders, make_card, make_row


FIELD_MAP = {"name": "h3", "price": "p.price", "category": "p.category"}


@pytest.fixture
def helper() -> CollectionHelper:
    return CollectionHelper(GridResolver(FIELD_MAP))


@pytest.fixture
def cards() -> FakeCollection:
    return FakeCollection([
        make_card("arabica", **{"h3": " Arabica ", "p.price": "$10", "p.category": "Beans"}),
        make_card("robusta", **{"h3": "Robusta", "p.price": "$8", "p.category": "Beans"}),
        make_card("arabica-ground", **{"h3": "Arabica", "p.price": "$12", "p.category": "Ground"}),
    ])


class TestExtraction:

    @pytest.mark.asyncio
    async def test_get_field_value_trims(self, helper, cards):
        assert await helper.get_field_value(cards.nth(0), "name") == "Arabica"

    @pytest.mark.asyncio
    async def test_missing_text_reads_as_empty(self, helper):
        assert await helper.get_field_value(make_card(), "price") == ""

    @pytest.mark.asyncio
    async def test_get_item_data_in_field_order(self, helper, cards):
        data = await helper.get_item_data(cards.nth(1), ["price", "name"])

        assert data == {"price": "$8", "name": "Robusta"}
        assert list(data) == ["price", "name"]

    @pytest.mark.asyncio
    async def test_get_field_values_in_item_order(self, helper, cards):
        assert await helper.get_field_values(cards, "name") == ["Arabica", "Robusta", "Arabica"]

    @pytest.mark.asyncio
    async def test_get_collection_data(self, helper, cards):
        data = await helper.get_collection_data(cards, ["name", "category"])

        assert data[2] == {"name": "Arabica", "category": "Ground"}
        assert len(data) == 3

    @pytest.mark.asyncio
    async def test_empty_collection(self, helper):
        empty = FakeCollection([])

        assert await helper.get_field_values(empty, "name") == []
        assert await helper.get_collection_data(empty, ["name"]) == []
        assert await helper.get_count(empty) == 0

    @pytest.mark.asyncio
    async def test_unknown_field_propagates(self, helper, cards):
        with pytest.raises(FieldNotFoundError):
            await helper.get_field_values(cards, "sku")

    @pytest.mark.asyncio
    async def test_cleaners_applied_per_field(self):
        resolver = await TableResolver.create(FakeHeaders(["Name", "Total Stock"]))
        helper = CollectionHelper(resolver)
        rows = FakeCollection([make_row(["Arabica", "120 pcs"]), make_row(["Robusta", "7"])])

        values = await helper.get_field_values(rows, "totalStock", {"totalStock": leading_number()})

        assert values == ["120", "7"]


class TestFind:

    @pytest.mark.asyncio
    async def test_first_match_wins(self, helper, cards):
        item = await helper.find_item(cards, "name", "Arabica")

        assert item is cards.nth(0)

    @pytest.mark.asyncio
    async def test_find_with_pattern_and_predicate(self, helper, cards):
        assert await helper.find_item(cards, "name", re.compile(r"^Rob")) is cards.nth(1)
        item = await helper.find_item(cards, "price", lambda price: price == "$12")
        assert item is cards.nth(2)

    @pytest.mark.asyncio
    async def test_no_match(self, helper, cards):
        with pytest.raises(ItemNotFoundError) as exc_info:
            await helper.find_item(cards, "name", "Liberica")

        assert exc_info.value.criteria == "name='Liberica'"
        assert exc_info.value.total_pages is None

    @pytest.mark.asyncio
    async def test_filters_are_a_conjunction(self, helper, cards):
        item = await helper.find_item_by_filters(
            cards, {"name": "Arabica", "category": "Ground"}
        )

        assert item is cards.nth(2)

    @pytest.mark.asyncio
    async def test_filters_stop_at_first_mismatch(self, helper, cards):
        await helper.find_item_by_filters(cards, {"name": "Robusta", "price": "$8"})

        # The first card fails on "name" and is not read further
        assert cards.nth(0).requested == ["h3"]
        assert cards.nth(1).requested == ["h3", "p.price"]
        assert cards.nth(2).requested == []

    @pytest.mark.asyncio
    async def test_filters_no_match(self, helper, cards):
        with pytest.raises(ItemNotFoundError) as exc_info:
            await helper.find_item_by_filters(cards, {"name": "Robusta", "category": "Ground"})

        assert exc_info.value.criteria == "name='Robusta', category='Ground'"

    @pytest.mark.asyncio
    async def test_empty_filters_match_first_item(self, helper, cards):
        assert await helper.find_item_by_filters(cards, {}) is cards.nth(0)

    @pytest.mark.asyncio
    async def test_find_item_data_defaults_to_filter_fields(self, helper, cards):
        data = await helper.find_item_data(cards, {"name": "Robusta"})
        assert data == {"name": "Robusta"}

        data = await helper.find_item_data(cards, {"name": "Robusta"}, ["price", "category"])
        assert data == {"price": "$8", "category": "Beans"}

    @pytest.mark.asyncio
    async def test_find_item_data_with_no_fields(self, helper, cards):
        assert await helper.find_item_data(cards, {"name": "Robusta"}, []) == {}


class TestHasItem:

    @pytest.mark.asyncio
    async def test_true_and_false(self, helper, cards):
        assert await helper.has_item(cards, "name", "Robusta")
        assert not await helper.has_item(cards, "name", "Liberica")

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, helper):
        broken = FakeCollection([], error=TimeoutError("items never rendered"))

        with pytest.raises(TimeoutError):
            await helper.has_item(broken, "name", "Robusta")

    @pytest.mark.asyncio
    async def test_unknown_field_propagates(self, helper, cards):
        with pytest.raises(FieldNotFoundError):
            await helper.has_item(cards, "sku", "X")


def test_resolver_accessors():
    resolver = GridResolver(FIELD_MAP)
    helper = CollectionHelper(resolver)

    assert helper.get_resolver() is resolver
    assert helper.resolver is resolver
