"""In-memory item store for Tally.

Nothing is written to disk. The store keeps a list of ``ItemRecord`` objects and
hands out ``ItemSnapshot`` copies. Every operation runs under one asyncio lock,
so no two operations ever observe or mutate the list at the same time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

from tally.shared.domain.items import ItemRecord, ItemSnapshot

logger = logging.getLogger(__name__)

SEED_ITEMS = (
    ItemSnapshot(emoji="💻", name="Laptop", quantity=1),
    ItemSnapshot(emoji="🕶️", name="Sunglasses", quantity=1),
    ItemSnapshot(emoji="📓", name="Notebook", quantity=3),
    ItemSnapshot(emoji="🥑", name="Avocado", quantity=1200),
)


class ItemStore:
    """Manages the authoritative item list with serialized access.

    Construct one per application (see ``tally.app.main.build_app``) and pass it
    to whatever needs it. Tests build their own with fixture data.
    """

    def __init__(self, items: Optional[Iterable[ItemSnapshot]] = None) -> None:
        self._items: List[ItemRecord] = [ItemRecord.from_snapshot(item) for item in items or ()]
        # Lazy initialization to avoid event loop binding issues
        self._lock: Optional[asyncio.Lock] = None
        self._loop_id: Optional[int] = None

    @classmethod
    def with_seed_data(cls) -> "ItemStore":
        """Build a store holding the four demo items."""
        return cls(SEED_ITEMS)

    def _ensure_lock(self) -> asyncio.Lock:
        """Get or create lock for current event loop."""
        try:
            loop_id = id(asyncio.get_running_loop())
            if self._loop_id is not None and self._loop_id != loop_id:
                self._lock = None
            if self._lock is None:
                self._lock = asyncio.Lock()
                self._loop_id = loop_id
        except RuntimeError:
            if self._lock is None:
                self._lock = asyncio.Lock()

        return self._lock

    def _find(self, item_id: str) -> Optional[ItemRecord]:
        # Callers must hold the lock
        for record in self._items:
            if record.id == item_id:
                return record
        return None

    async def fetch_items(self, sleep_for: float = 0.0) -> List[ItemSnapshot]:
        """Simulate a query returning every item as a snapshot.

        The simulated latency is spent before the lock is taken, so other
        callers keep queuing and running while this one waits.

        Args:
            sleep_for: Seconds to suspend before reading. ``0`` skips the sleep.

        Returns:
            Snapshots of all items in storage order
        """
        if sleep_for > 0:
            await asyncio.sleep(sleep_for)

        async with self._ensure_lock():
            snapshots = [record.to_snapshot() for record in self._items]

        logger.debug(f"Fetched {len(snapshots)} items (simulated delay {sleep_for:.2f}s)")
        return snapshots

    async def add_item(self, item: ItemSnapshot) -> ItemSnapshot:
        """Append a record built from ``item``, keeping its id.

        No validation happens here; callers validate user input first.
        """
        async with self._ensure_lock():
            record = ItemRecord.from_snapshot(item)
            self._items.append(record)
            stored = record.to_snapshot()

        logger.debug(f"Added item {stored.id} ({stored.name})")
        return stored

    async def delete_item(self, item_id: str) -> str:
        """Delete the item with ``item_id`` if present.

        Returns:
            ``item_id``, whether or not a record matched
        """
        async with self._ensure_lock():
            record = self._find(item_id)
            if record is not None:
                self._items.remove(record)

        if record is None:
            logger.debug(f"Delete ignored, no item with id {item_id}")
        return item_id

    async def edit_item(
        self,
        item_id: str,
        *,
        emoji: Optional[str] = None,
        name: Optional[str] = None,
        quantity: Optional[int] = None,
    ) -> Optional[ItemSnapshot]:
        """Overwrite the provided fields of an item; ``None`` leaves a field unchanged.

        A negative ``quantity`` is rejected and the prior quantity kept.

        Returns:
            The updated snapshot, or None if no item has ``item_id``
        """
        async with self._ensure_lock():
            record = self._find(item_id)
            if record is None:
                logger.debug(f"Edit ignored, no item with id {item_id}")
                return None

            if emoji is not None:
                record.emoji = emoji
            if name is not None:
                record.name = name
            if quantity is not None:
                if quantity < 0:
                    logger.debug(f"Rejected negative quantity {quantity} for item {item_id}")
                else:
                    record.quantity = quantity

            return record.to_snapshot()

    async def increment_item_quantity(self, item_id: str, step: int) -> Optional[ItemSnapshot]:
        """Add ``step`` (which may be negative) to an item's quantity.

        If the result would drop below zero the record is left alone and its
        unchanged snapshot is returned.

        Returns:
            The resulting snapshot, or None if no item has ``item_id``
        """
        async with self._ensure_lock():
            record = self._find(item_id)
            if record is None:
                logger.debug(f"Increment ignored, no item with id {item_id}")
                return None

            new_quantity = record.quantity + step
            if new_quantity < 0:
                logger.debug(f"Clamped quantity of {item_id}: {record.quantity} {step:+d} would be negative")
                return record.to_snapshot()

            record.quantity = new_quantity
            return record.to_snapshot()

    async def get_item(self, item_id: str) -> Optional[ItemSnapshot]:
        """Return the snapshot of a single item, or None."""
        async with self._ensure_lock():
            record = self._find(item_id)
            return record.to_snapshot() if record is not None else None

    async def count(self) -> int:
        async with self._ensure_lock():
            return len(self._items)
