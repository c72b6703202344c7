"""
Shared Infrastructure Module
============================

Technical adapters. Tally only ships the in-memory item store.
"""

from tally.shared.infrastructure.persistence import SEED_ITEMS, ItemStore

__all__ = ["ItemStore", "SEED_ITEMS"]
