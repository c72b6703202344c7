"""Inventory item domain types."""

from tally.shared.domain.items.models import (
    DEFAULT_QUANTITY,
    INVALID_INPUT_MESSAGE,
    InvalidItemError,
    ItemRecord,
    ItemSnapshot,
    new_item_id,
    validate_candidate_fields,
)

__all__ = [
    "DEFAULT_QUANTITY",
    "INVALID_INPUT_MESSAGE",
    "InvalidItemError",
    "ItemRecord",
    "ItemSnapshot",
    "new_item_id",
    "validate_candidate_fields",
]
