"""Inventory Screen State Management.

Reactive state for the inventory list and its two sheets, built on FletXr
primitives. User intents are turned into ``ItemStore`` calls; the results are
folded back into reactive properties that views listen to.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Coroutine, Dict, List, Optional, Tuple

from fletx.core import RxBool, RxList, RxStr

from tally.shared.core import events
from tally.shared.core.event_bus import EventBus, EventPayload
from tally.shared.domain.items import ItemSnapshot
from tally.shared.infrastructure.persistence import ItemStore

logger = logging.getLogger(__name__)

STATUS_READY = "Ready"
STATUS_LOADING = "Loading items..."


class InventoryState:
    """Reactive state for the inventory screen.

    Every ``request_*`` method schedules one unit of work on the running loop
    and returns its ``asyncio.Task`` right away. Callers may await the task or
    drop it. Scheduled work is never cancelled: a fetch that is in flight always
    completes and updates the list.

    Only tasks on the event loop write to the reactive fields below.
    """

    def __init__(
        self,
        event_bus: EventBus,
        item_store: ItemStore,
        fetch_delay_range: Tuple[float, float] = (1.0, 2.0),
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize inventory state.

        Args:
            event_bus: The shared event bus
            item_store: The store that owns the authoritative items
            fetch_delay_range: Bounds (seconds) of the simulated fetch latency
            rng: Random source for the fetch latency
        """
        self.bus = event_bus
        self.item_store = item_store
        self.fetch_delay_range = fetch_delay_range
        self._rng = rng or random.Random()

        # Item list mirrored from the store
        self.items: RxList[ItemSnapshot] = RxList([])
        self.fetching_items: RxBool = RxBool(False)

        # Detail sheet; an empty string means nothing is presented
        self.presented_item_id: RxStr = RxStr("")
        self.item_sheet_presented: RxBool = RxBool(False)

        # Add item sheet
        self.add_item_sheet_presented: RxBool = RxBool(False)

        # Status & log feed
        self.status_text: RxStr = RxStr(STATUS_READY)
        self.logs: RxList[Dict[str, Any]] = RxList([])

        self._pending_tasks: set[asyncio.Task] = set()
        self._started = False

    def initialize(self) -> Optional[asyncio.Task]:
        """Start the screen by requesting the first fetch.

        Must be called from a running event loop. Later calls do nothing.
        """
        if self._started:
            return None

        task = self.request_fetch()
        self._started = True
        return task

    # --- Derived State ---

    @property
    def presented_item(self) -> Optional[ItemSnapshot]:
        """The listed item whose id matches ``presented_item_id``, if any."""
        presented_id = self.presented_item_id.value
        if not presented_id:
            return None
        return next((item for item in self.items.value if item.id == presented_id), None)

    # --- Public Actions ---

    def request_fetch(self) -> Optional[asyncio.Task]:
        """Fetch all items from the store.

        Returns:
            The scheduled task, or None when a fetch is already running
        """
        if self.fetching_items.value:
            logger.debug("Fetch already in flight, request dropped")
            return None

        # The task cannot start before this call returns, so flag it afterwards
        task = self._schedule(self._fetch_items_from_store(), "fetch-items")
        self.fetching_items.value = True
        return task

    def request_add(self, item: ItemSnapshot) -> asyncio.Task:
        """Add an already-validated item to the store."""
        return self._schedule(self._add_item_to_store(item), "add-item")

    def request_delete(self, item_id: str) -> asyncio.Task:
        """Delete an item from the store."""
        return self._schedule(self._delete_item_in_store(item_id), "delete-item")

    def request_increment(self, item_id: str, step: int) -> asyncio.Task:
        """Change an item's quantity by ``step`` (negative to decrement)."""
        return self._schedule(self._increment_item_in_store(item_id, step), "increment-item")

    def request_edit(
        self,
        item_id: str,
        *,
        emoji: Optional[str] = None,
        name: Optional[str] = None,
        quantity: Optional[int] = None,
    ) -> asyncio.Task:
        """Overwrite the given fields of an item; None leaves a field as is."""
        return self._schedule(
            self._edit_item_in_store(item_id, emoji=emoji, name=name, quantity=quantity),
            "edit-item",
        )

    def increment_presented_item(self) -> Optional[asyncio.Task]:
        """Add one to the presented item. Does nothing when none is presented."""
        presented_id = self.presented_item_id.value
        if not presented_id:
            return None
        return self.request_increment(presented_id, 1)

    def decrement_presented_item(self) -> Optional[asyncio.Task]:
        """Remove one from the presented item. Does nothing when none is presented."""
        presented_id = self.presented_item_id.value
        if not presented_id:
            return None
        return self.request_increment(presented_id, -1)

    def select_item(self, item_id: str) -> None:
        """Present the detail sheet for an item.

        Args:
            item_id: The item whose quantity will be edited in the sheet
        """
        self.presented_item_id.value = item_id
        self.item_sheet_presented.value = True

    def dismiss_item_sheet(self) -> None:
        self.item_sheet_presented.value = False

    def request_show_add_form(self) -> None:
        """Present the sheet with the new item form."""
        self.add_item_sheet_presented.value = True

    def dismiss_add_item_sheet(self) -> None:
        self.add_item_sheet_presented.value = False

    async def push_status(self, text: str) -> None:
        """Update the status text and announce it on the bus."""
        self.status_text.value = text
        await self.bus.publish(events.TOPIC_STATUS_TEXT, events.create_status_text_event(text))

    async def push_log(self, message: str, level: str = "info") -> None:
        """Add a log message and update the logs list reactively."""
        entry = {"message": message, "level": level, "ts": time.time()}
        self.logs.append(entry)
        await self.bus.publish(events.TOPIC_LOGS_EVENT, entry)

    async def wait_until_idle(self, timeout: float = 10.0) -> bool:
        """Wait for every scheduled unit of work and the handlers it triggered.

        Returns:
            True if everything completed, False if timeout reached
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._pending_tasks:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(f"Timeout reached with {len(self._pending_tasks)} pending inventory tasks")
                return False
            await asyncio.wait(list(self._pending_tasks), timeout=remaining)

        return await self.bus.wait_until_idle(timeout=max(deadline - loop.time(), 0.0))

    # --- Store Interactors ---

    def _schedule(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task:
        try:
            task = asyncio.create_task(coro, name=name)
        except RuntimeError:
            coro.close()
            raise
        self._pending_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Inventory task '{task.get_name()}' failed", exc_info=task.exception())

    async def _fetch_items_from_store(self) -> None:
        await self.push_status(STATUS_LOADING)
        low, high = self.fetch_delay_range
        delay = self._rng.uniform(low, high) if high > 0 else 0.0
        try:
            fetched = await self.item_store.fetch_items(sleep_for=delay)
            self.items.value = fetched
        finally:
            self.fetching_items.value = False
            await self.push_status(STATUS_READY)

        await self.bus.publish(
            events.TOPIC_ITEMS_FETCHED,
            events.create_items_fetched_event([item.to_payload() for item in fetched]),
        )
        await self.push_log(f"Loaded {len(fetched)} items")

    async def _add_item_to_store(self, item: ItemSnapshot) -> None:
        added = await self.item_store.add_item(item)
        self.items.append(added)

        await self.bus.publish(events.TOPIC_ITEM_ADDED, events.create_item_added_event(added.to_payload()))
        await self.push_log(f"Added {added.emoji} {added.name}", "success")

    async def _delete_item_in_store(self, item_id: str) -> None:
        deleted_id = await self.item_store.delete_item(item_id)
        # Synchronize with the store
        current = self.items.value
        remaining = [item for item in current if item.id != deleted_id]
        if len(remaining) != len(current):
            self.items.value = remaining

        await self.bus.publish(events.TOPIC_ITEM_DELETED, events.create_item_deleted_event(deleted_id))

    async def _increment_item_in_store(self, item_id: str, step: int) -> None:
        updated = await self.item_store.increment_item_quantity(item_id, step)
        if updated is None:
            return
        if self._replace_local(updated):
            await self._publish_updated(updated, "increment")

    async def _edit_item_in_store(
        self,
        item_id: str,
        *,
        emoji: Optional[str],
        name: Optional[str],
        quantity: Optional[int],
    ) -> None:
        updated = await self.item_store.edit_item(item_id, emoji=emoji, name=name, quantity=quantity)
        if updated is None:
            return
        if self._replace_local(updated):
            await self._publish_updated(updated, "edit")

    def _replace_local(self, updated: ItemSnapshot) -> bool:
        """Swap in ``updated`` for the listed item with the same id."""
        items: List[ItemSnapshot] = list(self.items.value)
        for index, item in enumerate(items):
            if item.id == updated.id:
                items[index] = updated
                self.items.value = items
                return True
        return False

    async def _publish_updated(self, item: ItemSnapshot, change: str) -> None:
        payload: EventPayload = events.create_item_updated_event(item.to_payload(), change)
        await self.bus.publish(events.TOPIC_ITEM_UPDATED, payload)
