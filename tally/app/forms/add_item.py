"""New item form state.

Collects the emoji and name typed into the add item sheet, checks them and
hands a valid candidate to ``InventoryState``. Invalid input never reaches the
store; it raises the alert instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

import regex
from fletx.core import RxBool, RxStr

from tally.shared.domain.items import (
    DEFAULT_QUANTITY,
    InvalidItemError,
    ItemSnapshot,
    validate_candidate_fields,
)

if TYPE_CHECKING:
    from tally.app.state.inventory_state import InventoryState

logger = logging.getLogger(__name__)

# One user-perceived character, e.g. a flag or a skin-toned emoji
GRAPHEME = regex.compile(r"\X")


class AddItemForm:
    """Reactive state behind the add item sheet."""

    def __init__(self, inventory: InventoryState) -> None:
        self.inventory = inventory

        self.emoji: RxStr = RxStr("")
        self.name: RxStr = RxStr("")

        self.show_alert: RxBool = RxBool(False)
        self.alert_message: RxStr = RxStr("")

    def set_emoji(self, text: str) -> None:
        """Update the emoji field, keeping only the first character typed."""
        match = GRAPHEME.match(text)
        self.emoji.value = match.group() if match else ""

    def set_name(self, text: str) -> None:
        self.name.value = text

    def submit(self) -> Optional[asyncio.Task]:
        """Validate the fields and request the add.

        Returns:
            The scheduled add task, or None if the input was rejected
        """
        emoji = self.emoji.value
        name = self.name.value
        try:
            validate_candidate_fields(emoji, name)
        except InvalidItemError as exc:
            logger.info(f"Rejected new item input: {exc}")
            self.alert_message.value = str(exc)
            self.show_alert.value = True
            return None

        self.inventory.dismiss_add_item_sheet()
        task = self.inventory.request_add(
            ItemSnapshot(emoji=emoji, name=name, quantity=DEFAULT_QUANTITY)
        )
        self.reset()
        return task

    def cancel(self) -> None:
        """Close the sheet without adding anything."""
        self.inventory.dismiss_add_item_sheet()
        self.reset()

    def dismiss_alert(self) -> None:
        self.show_alert.value = False

    def reset(self) -> None:
        self.emoji.value = ""
        self.name.value = ""
        self.show_alert.value = False
        self.alert_message.value = ""
