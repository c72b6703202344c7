from __future__ import annotations

import random

import pytest

from tally.app.state import InventoryState, AppContainer
from tally.shared.core.configuration import StoreConfig
from tally.shared.core.event_bus import EventBus
from tally.shared.infrastructure.persistence import ItemStore


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def item_store() -> ItemStore:
    """Fresh store holding the four demo items."""
    return ItemStore.with_seed_data()


@pytest.fixture
def inventory(event_bus: EventBus, item_store: ItemStore) -> InventoryState:
    """Inventory state with no simulated latency."""
    return InventoryState(event_bus, item_store, fetch_delay_range=(0.0, 0.0), rng=random.Random(7))


@pytest.fixture
def app(event_bus: EventBus, item_store: ItemStore) -> AppContainer:
    return AppContainer(event_bus, item_store, store_config=StoreConfig(fetch_delay_min=0.0, fetch_delay_max=0.0))
