"""Tally package."""

from .shared.core.event_bus import EventBus
from .shared.domain.items import ItemSnapshot
from .shared.infrastructure.persistence import ItemStore

__all__ = ["EventBus", "ItemSnapshot", "ItemStore"]
