"""Persistence adapters (in-memory)."""

from tally.shared.infrastructure.persistence.memory_store import SEED_ITEMS, ItemStore

__all__ = ["ItemStore", "SEED_ITEMS"]
