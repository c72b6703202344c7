"""Unit tests for the in-memory item store."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from tally.shared.domain.items import ItemSnapshot
from tally.shared.infrastructure.persistence import SEED_ITEMS, ItemStore


@pytest.mark.asyncio
async def test_seed_store_fetches_four_items_in_order(item_store: ItemStore):
    items = await item_store.fetch_items()

    assert [item.name for item in items] == ["Laptop", "Sunglasses", "Notebook", "Avocado"]
    assert [item.quantity for item in items] == [1, 1, 3, 1200]


@pytest.mark.asyncio
async def test_each_seeded_store_starts_from_the_same_seed():
    first = ItemStore.with_seed_data()
    second = ItemStore.with_seed_data()

    await first.delete_item(SEED_ITEMS[0].id)

    assert await first.count() == 3
    assert await second.count() == 4


@pytest.mark.asyncio
async def test_fetch_with_simulated_delay_still_returns_items(item_store: ItemStore):
    items = await item_store.fetch_items(sleep_for=0.01)
    assert len(items) == 4


@pytest.mark.asyncio
async def test_fetched_snapshots_are_independent_of_the_store(item_store: ItemStore):
    before = await item_store.fetch_items()

    await item_store.increment_item_quantity(before[2].id, 5)

    with pytest.raises(ValidationError):
        before[2].quantity = 99  # frozen
    assert before[2].quantity == 3
    assert (await item_store.get_item(before[2].id)).quantity == 8


@pytest.mark.asyncio
async def test_adds_grow_the_list_and_keep_fields(item_store: ItemStore):
    candidates = [
        ItemSnapshot(emoji="🚗", name="Car"),
        ItemSnapshot(emoji="🍎", name="Apple", quantity=12),
        ItemSnapshot(emoji="📦", name="Box", quantity=0),
    ]

    for candidate in candidates:
        stored = await item_store.add_item(candidate)
        assert stored == candidate

    assert await item_store.count() == 4 + len(candidates)
    for candidate in candidates:
        assert await item_store.get_item(candidate.id) == candidate


@pytest.mark.asyncio
async def test_add_defaults_quantity_to_one(item_store: ItemStore):
    stored = await item_store.add_item(ItemSnapshot(emoji="🚗", name="Car"))

    items = await item_store.fetch_items()
    assert items[-1] == stored
    assert stored.quantity == 1


@pytest.mark.asyncio
async def test_add_then_delete_restores_length(item_store: ItemStore):
    stored = await item_store.add_item(ItemSnapshot(emoji="🚗", name="Car"))
    assert await item_store.count() == 5

    assert await item_store.delete_item(stored.id) == stored.id
    assert await item_store.count() == 4
    assert await item_store.get_item(stored.id) is None


@pytest.mark.asyncio
async def test_delete_unknown_id_is_a_no_op(item_store: ItemStore):
    before = await item_store.fetch_items()

    result = await item_store.delete_item("missing")

    assert result == "missing"
    assert await item_store.fetch_items() == before


@pytest.mark.asyncio
async def test_edit_only_quantity_keeps_other_fields(item_store: ItemStore):
    laptop = SEED_ITEMS[0]

    updated = await item_store.edit_item(laptop.id, quantity=4)

    assert updated.quantity == 4
    assert updated.emoji == laptop.emoji
    assert updated.name == laptop.name


@pytest.mark.asyncio
async def test_edit_without_fields_returns_unchanged_snapshot(item_store: ItemStore):
    notebook = SEED_ITEMS[2]

    assert await item_store.edit_item(notebook.id) == notebook


@pytest.mark.asyncio
async def test_edit_rejects_negative_quantity(item_store: ItemStore):
    notebook = SEED_ITEMS[2]

    updated = await item_store.edit_item(notebook.id, name="Journal", quantity=-1)

    assert updated.name == "Journal"
    assert updated.quantity == 3


@pytest.mark.asyncio
async def test_edit_unknown_id_returns_none(item_store: ItemStore):
    assert await item_store.edit_item("missing", name="Ghost") is None


@pytest.mark.asyncio
async def test_increment_below_zero_is_clamped(item_store: ItemStore):
    notebook = SEED_ITEMS[2]

    result = await item_store.increment_item_quantity(notebook.id, -5)

    assert result.quantity == 3
    assert (await item_store.get_item(notebook.id)).quantity == 3


@pytest.mark.asyncio
async def test_increment_applies_exact_step():
    store = ItemStore([ItemSnapshot(id="apples", emoji="🍎", name="Apples", quantity=5)])

    result = await store.increment_item_quantity("apples", -2)

    assert result.quantity == 3


@pytest.mark.asyncio
async def test_increment_down_to_exactly_zero_is_allowed():
    store = ItemStore([ItemSnapshot(id="apples", emoji="🍎", name="Apples", quantity=2)])

    assert (await store.increment_item_quantity("apples", -2)).quantity == 0


@pytest.mark.asyncio
async def test_increment_unknown_id_returns_none(item_store: ItemStore):
    assert await item_store.increment_item_quantity("missing", 1) is None


@pytest.mark.asyncio
async def test_concurrent_increments_do_not_lose_updates(item_store: ItemStore):
    laptop = SEED_ITEMS[0]

    await asyncio.gather(*(item_store.increment_item_quantity(laptop.id, 1) for _ in range(50)))

    assert (await item_store.get_item(laptop.id)).quantity == 51


@pytest.mark.asyncio
async def test_mutations_run_while_a_slow_fetch_waits(item_store: ItemStore):
    fetch = asyncio.create_task(item_store.fetch_items(sleep_for=0.05))
    added = await item_store.add_item(ItemSnapshot(emoji="🚗", name="Car"))

    items = await fetch

    assert added in items
