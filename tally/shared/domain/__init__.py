"""
Shared Domain Module
====================

Inventory item models and input rules.
"""

from tally.shared.domain.items import (
    InvalidItemError,
    ItemRecord,
    ItemSnapshot,
    validate_candidate_fields,
)

__all__ = [
    "InvalidItemError",
    "ItemRecord",
    "ItemSnapshot",
    "validate_candidate_fields",
]
