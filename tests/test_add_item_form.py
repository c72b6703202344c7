"""Tests for the add item form."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tally.app.state import AppContainer
from tally.shared.domain.items import INVALID_INPUT_MESSAGE, InvalidItemError, validate_candidate_fields


@pytest.mark.parametrize("emoji,name", [("", "Car"), ("🚗", ""), ("", "")])
def test_validate_rejects_empty_fields(emoji, name):
    with pytest.raises(InvalidItemError, match="at least 1 character"):
        validate_candidate_fields(emoji, name)


def test_validate_accepts_filled_fields():
    validate_candidate_fields("🚗", "Car")


def test_emoji_keeps_first_character(app: AppContainer):
    form = app.add_item_form

    form.set_emoji("🚗🚕")

    assert form.emoji.value == "🚗"


@pytest.mark.asyncio
async def test_invalid_submit_shows_alert_and_skips_store(app: AppContainer):
    form = app.add_item_form
    app.inventory.request_show_add_form()
    form.set_name("Car")

    with patch.object(app.inventory.item_store, "add_item") as add_item:
        assert form.submit() is None

    add_item.assert_not_called()
    assert form.show_alert.value is True
    assert form.alert_message.value == INVALID_INPUT_MESSAGE
    assert app.inventory.add_item_sheet_presented.value is True

    form.dismiss_alert()
    assert form.show_alert.value is False


@pytest.mark.asyncio
async def test_valid_submit_adds_item_with_quantity_one(app: AppContainer):
    inventory = app.inventory
    form = app.add_item_form
    await inventory.initialize()
    inventory.request_show_add_form()

    form.set_emoji("🚗")
    form.set_name("Car")
    await form.submit()

    assert inventory.add_item_sheet_presented.value is False
    assert len(inventory.items.value) == 5
    added = inventory.items.value[-1]
    assert (added.emoji, added.name, added.quantity) == ("🚗", "Car", 1)
    assert form.emoji.value == ""
    assert form.name.value == ""


def test_cancel_dismisses_and_resets(app: AppContainer):
    form = app.add_item_form
    app.inventory.request_show_add_form()
    form.set_name("Half typed")

    form.cancel()

    assert app.inventory.add_item_sheet_presented.value is False
    assert form.name.value == ""


@pytest.mark.parametrize("emoji", ["🕶️", "👍🏽", "🇺🇸", "👨‍👩‍👧"])
def test_emoji_keeps_whole_multi_code_point_character(app: AppContainer, emoji):
    form = app.add_item_form

    form.set_emoji(emoji + "x")

    assert form.emoji.value == emoji


def test_clearing_emoji_field(app: AppContainer):
    form = app.add_item_form
    form.set_emoji("🚗")

    form.set_emoji("")

    assert form.emoji.value == ""
