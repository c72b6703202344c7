"""Item models.

Two representations of one inventory entry exist:

- ``ItemRecord`` is the store's mutable copy. Only ``ItemStore`` creates,
  mutates or holds records.
- ``ItemSnapshot`` is the frozen copy handed to everything else. Snapshots are
  hashable and compare by value.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_QUANTITY = 1

INVALID_INPUT_MESSAGE = "Emoji and Name must be at least 1 character long."


class InvalidItemError(ValueError):
    """Raised when an item candidate is missing its emoji or name."""


def new_item_id() -> str:
    return str(uuid.uuid4())


class ItemSnapshot(BaseModel):
    """Immutable, value-based view of an item."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_item_id)
    emoji: str
    name: str
    quantity: int = Field(default=DEFAULT_QUANTITY, ge=0)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for event bus payloads."""
        return self.model_dump()


class ItemRecord(BaseModel):
    """Mutable record owned by the item store."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_item_id, frozen=True)
    emoji: str
    name: str
    quantity: int = Field(default=DEFAULT_QUANTITY, ge=0)

    @classmethod
    def from_snapshot(cls, snapshot: ItemSnapshot) -> "ItemRecord":
        return cls(
            id=snapshot.id,
            emoji=snapshot.emoji,
            name=snapshot.name,
            quantity=snapshot.quantity,
        )

    def to_snapshot(self) -> ItemSnapshot:
        return ItemSnapshot(
            id=self.id,
            emoji=self.emoji,
            name=self.name,
            quantity=self.quantity,
        )


def validate_candidate_fields(emoji: str, name: str) -> None:
    """Check the minimal input rules for a new item.

    Raises:
        InvalidItemError: If either field is empty
    """
    if not emoji or not name:
        raise InvalidItemError(INVALID_INPUT_MESSAGE)
