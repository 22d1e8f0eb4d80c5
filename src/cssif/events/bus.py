"""Synchronous event bus for runtime lifecycle events."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

E = TypeVar("E")

Listener = Callable[[Any], None]


class EventBus:
    """Delivers runtime events to listeners on the emitting thread.

    Listeners registered with :meth:`on_all` run first, then those
    registered for the event's exact type, each group in registration
    order. A listener may subscribe or unsubscribe while an event is being
    dispatched; the change applies from the next :meth:`emit`.
    """

    def __init__(self) -> None:
        self._by_type: dict[type, list[Listener]] = {}
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type[E], callback: Callable[[E], None]) -> None:
        self._by_type.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type[E], callback: Callable[[E], None]) -> None:
        """Remove *callback* from *event_type*; unknown callbacks are ignored."""
        listeners = self._by_type.get(event_type)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def on_all(self, callback: Listener) -> None:
        self._catch_all.append(callback)

    def emit(self, event: Any) -> None:
        listeners = [*self._catch_all, *self._by_type.get(type(event), ())]
        for listener in listeners:
            listener(event)
