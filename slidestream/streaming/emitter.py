"""Listener fan-out for slide stream events.

Lets observers (CLI display, logging, metrics) watch a generation
stream without consuming it. Each pipeline run may carry its own
emitter; nothing here is process-global.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from slidestream.schemas.events import SlideEvent

logger = logging.getLogger(__name__)

# Type alias for event listener callbacks
EventListener = Callable[[SlideEvent], Any]


class SlideEventEmitter:
    """Broadcasts slide events to registered listeners.

    Listeners can be sync or async callables. Listener exceptions are
    logged but never propagate into the stream.
    """

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: EventListener) -> None:
        """Register a listener to receive slide events."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        """Remove a previously registered listener."""
        self._listeners = [ln for ln in self._listeners if ln is not listener]

    async def emit(self, event: SlideEvent) -> None:
        """Dispatch *event* to every listener in registration order."""
        for listener in self._listeners:
            try:
                result = listener(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception("Event listener error for %s", event.type)
