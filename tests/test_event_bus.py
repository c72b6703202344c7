from __future__ import annotations

import asyncio

import pytest

from tally.shared.core.event_bus import EventBus


@pytest.mark.asyncio
async def test_publish_reaches_subscribers_once(event_bus: EventBus):
    received = []

    async def handler(payload):
        received.append(payload["n"])

    await event_bus.subscribe("t", handler)
    await event_bus.subscribe("t", handler)
    await event_bus.publish("t", {"n": 1})
    await event_bus.wait_until_idle()

    assert received == [1]


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others(event_bus: EventBus):
    received = []

    async def broken(payload):
        raise RuntimeError("boom")

    async def healthy(payload):
        received.append(payload)

    await event_bus.subscribe("t", broken)
    await event_bus.subscribe("t", healthy)
    await event_bus.publish("t", {"ok": True})

    assert await event_bus.wait_until_idle() is True
    assert received == [{"ok": True}]


@pytest.mark.asyncio
async def test_unsubscribe_and_publish_without_subscribers(event_bus: EventBus):
    received = []

    async def handler(payload):
        received.append(payload)

    await event_bus.subscribe("t", handler)
    await event_bus.unsubscribe("t", handler)
    await event_bus.publish("t", {})

    assert await event_bus.wait_until_idle() is True
    assert received == []


@pytest.mark.asyncio
async def test_prefix_pattern_matches_nested_topics_only(event_bus: EventBus):
    received = []

    async def handler(payload):
        received.append(payload["topic"])

    await event_bus.subscribe("inventory.*", handler)
    await event_bus.subscribe("inventory.item_added", handler)
    for topic in ("inventory.item_added", "inventory.fetched", "logs.event", "inventoryx"):
        await event_bus.publish(topic, {"topic": topic})
    await event_bus.wait_until_idle()

    assert sorted(received) == ["inventory.fetched", "inventory.item_added"]


@pytest.mark.asyncio
async def test_wait_until_idle_gives_up_on_a_stuck_handler(event_bus: EventBus):
    release = asyncio.Event()

    async def stuck(payload):
        await release.wait()

    await event_bus.subscribe("t", stuck)
    await event_bus.publish("t", {})

    assert await event_bus.wait_until_idle(timeout=0.05) is False

    release.set()
    assert await event_bus.wait_until_idle() is True
