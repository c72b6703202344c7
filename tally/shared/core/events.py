"""Canonical event definitions for Tally."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Literal

from .event_bus import EventPayload

# Shell topics
TOPIC_LOGS_EVENT = "logs.event"
TOPIC_STATUS_TEXT = "status.text"

# Inventory topics
TOPIC_ITEMS_FETCHED = "inventory.fetched"
TOPIC_ITEM_ADDED = "inventory.item_added"
TOPIC_ITEM_DELETED = "inventory.item_deleted"
TOPIC_ITEM_UPDATED = "inventory.item_updated"


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a Log event."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }


def create_status_text_event(text: str) -> EventPayload:
    """Create a status text update event."""
    return {
        "text": text,
    }


def create_items_fetched_event(items: List[Dict[str, Any]]) -> EventPayload:
    """Create an items fetched event.

    Args:
        items: Serialized snapshots in storage order
    """
    return {
        "items": items,
        "count": len(items),
    }


def create_item_added_event(item: Dict[str, Any]) -> EventPayload:
    """Create an item added event."""
    return {
        "item": item,
    }


def create_item_deleted_event(item_id: str) -> EventPayload:
    """Create an item deleted event."""
    return {
        "item_id": item_id,
    }


def create_item_updated_event(item: Dict[str, Any], change: str) -> EventPayload:
    """Create an item updated event.

    Args:
        item: Serialized snapshot after the change
        change: What kind of change produced it ("increment" or "edit")
    """
    return {
        "item": item,
        "change": change,
    }
