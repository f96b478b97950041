"""Synchronous event bus for question exchange events."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe hub shared by the correlators of a process.

    Listeners run on the task that emits, in registration order, with
    catch-all listeners before type-specific ones. Emitting happens while
    answers are being delivered, so a failing listener is logged and
    never propagates into the exchange that emitted.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, list[Listener]] = {}
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> Callable[[], None]:
        """Call *callback(event)* for every emitted *event_type*.

        Returns a function that removes the subscription.
        """
        listeners = self._by_type.setdefault(event_type, [])
        listeners.append(callback)
        return lambda: _discard(listeners, callback)

    def on_all(self, callback: Listener) -> Callable[[], None]:
        """Call *callback(event)* for every emitted event."""
        self._catch_all.append(callback)
        return lambda: _discard(self._catch_all, callback)

    def emit(self, event: Any) -> None:
        for callback in [*self._catch_all, *self._by_type.get(type(event), ())]:
            try:
                callback(event)
            except Exception:
                logger.exception("Event listener %r failed on %s", callback, type(event).__name__)


def _discard(listeners: list[Listener], callback: Listener) -> None:
    if callback in listeners:
        listeners.remove(callback)
