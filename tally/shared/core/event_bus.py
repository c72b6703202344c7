"""Async pub/sub for inventory change notifications.

Topics are dotted names (``inventory.item_added``). A subscription may also
name a prefix pattern such as ``inventory.*`` to receive every topic under it,
which is how a list view follows all item changes with one handler.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, Iterator, List, TypeAlias

EventPayload: TypeAlias = Dict[str, Any]
EventHandler: TypeAlias = Callable[[EventPayload], Awaitable[None]]

WILDCARD_SUFFIX = ".*"

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatches each published payload to its topic's handlers as tasks.

    Subscriptions are only touched from the event loop, so the handler table
    needs no lock. Every dispatch task is tracked until it finishes.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._pending_tasks: set[asyncio.Task] = set()

    async def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register an async handler for a topic or a ``prefix.*`` pattern."""
        if handler not in self._subscribers[topic]:
            self._subscribers[topic].append(handler)

    async def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        """Remove a handler from a topic or pattern."""
        handlers = self._subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    def _handlers_for(self, topic: str) -> Iterator[EventHandler]:
        seen: List[EventHandler] = []
        for key, handlers in list(self._subscribers.items()):
            if key == topic or (
                key.endswith(WILDCARD_SUFFIX) and topic.startswith(key[:-1])
            ):
                for handler in handlers:
                    if handler not in seen:
                        seen.append(handler)
                        yield handler

    async def publish(self, topic: str, payload: EventPayload) -> None:
        """Schedule every matching handler; a handler is called once per publish."""
        handlers = list(self._handlers_for(topic))
        if not handlers:
            logger.debug(f"No subscribers for topic '{topic}'")
            return

        for handler in handlers:
            task = asyncio.create_task(self._safe_dispatch(topic, handler, payload))
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)

    async def wait_until_idle(self, timeout: float = 10.0) -> bool:
        """Wait for all dispatched handlers, including ones they publish to.

        A handler that never returns cannot hold this past ``timeout``.

        Returns:
            True if all tasks completed, False if timeout reached
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._pending_tasks:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(f"EventBus: Timeout with {len(self._pending_tasks)} handlers still running")
                return False
            await asyncio.wait(list(self._pending_tasks), timeout=remaining)

        return True

    async def _safe_dispatch(
        self,
        topic: str,
        handler: EventHandler,
        payload: EventPayload,
    ) -> None:
        """Run one handler so its failure never reaches the publisher."""
        handler_name = getattr(handler, "__name__", str(handler))
        try:
            await handler(payload)
        except Exception as exc:
            logger.exception(
                f"EventBus handler error in '{handler_name}' for topic '{topic}'",
                exc_info=exc,
            )
