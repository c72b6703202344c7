"""Application State Container.

Groups the reactive state objects of the app so views receive one handle.
The container is built by the composition root and passed down explicitly;
there is no process-wide instance.
"""

from __future__ import annotations

import random
from typing import Optional

from tally.app.forms.add_item import AddItemForm
from tally.app.state.inventory_state import InventoryState
from tally.shared.core.configuration import StoreConfig
from tally.shared.core.event_bus import EventBus
from tally.shared.infrastructure.persistence import ItemStore


class AppContainer:
    """State container for the inventory application.

    Usage:
        app = AppContainer(event_bus, ItemStore.with_seed_data())
        app.inventory.initialize()
        app.inventory.select_item(item_id)
    """

    def __init__(
        self,
        event_bus: EventBus,
        item_store: ItemStore,
        store_config: Optional[StoreConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize state objects around an injected item store.

        Args:
            event_bus: The shared event bus instance
            item_store: The item store owned by the composition root
            store_config: Fetch latency settings; defaults when omitted
            rng: Random source for the simulated latency
        """
        store_config = store_config or StoreConfig()
        self.bus = event_bus
        self.inventory = InventoryState(
            event_bus,
            item_store,
            fetch_delay_range=(store_config.fetch_delay_min, store_config.fetch_delay_max),
            rng=rng,
        )
        self.add_item_form = AddItemForm(self.inventory)
