"""Registry of media queries whose changes must re-render stylesheet text."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from cssif.errors import CSSIfError
from cssif.events.bus import EventBus
from cssif.events.types import MediaQueryChanged, MediaQueryRegistered
from cssif.model.config import RuntimeOptions
from cssif.runtime.platform import MediaQueryList, Platform

__all__ = ["MediaQueryRegistry", "Subscriber"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subscriber:
    """An element whose text is rendered from *original_text*.

    The element must expose a writable ``text_content`` attribute and be
    hashable by identity.
    """

    element: Any
    original_text: str
    options: RuntimeOptions = field(default_factory=RuntimeOptions)


@dataclass
class _Listener:
    media_query_list: MediaQueryList
    callback: Callable[[MediaQueryList], None]


class MediaQueryRegistry:
    """Tracks which elements depend on which media queries.

    Queries are keyed by their literal text. Exactly one platform change
    listener exists per distinct query, however many subscribers share it.
    Dropping subscribers never removes a listener; only :meth:`cleanup`
    does.

    *render* turns a subscriber back into stylesheet text; it is called
    for every subscriber of a query when that query's result changes.
    """

    def __init__(
        self,
        platform: Platform,
        render: Callable[[Subscriber], str],
        bus: EventBus | None = None,
    ) -> None:
        self._platform = platform
        self._render = render
        self._bus = bus or EventBus()
        self._subscribers: dict[str, dict[Subscriber, None]] = {}
        self._listeners: dict[str, _Listener] = {}

    @property
    def queries(self) -> list[str]:
        return list(self._subscribers)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribers(self, query: str) -> list[Subscriber]:
        return list(self._subscribers.get(query, {}))

    def register(
        self,
        query: str,
        element: Any,
        original_text: str,
        options: RuntimeOptions | None = None,
    ) -> None:
        """Subscribe *element* to changes of *query*. Idempotent."""
        subscriber = Subscriber(element, original_text, options or RuntimeOptions())
        self._subscribers.setdefault(query, {})[subscriber] = None

        if query in self._listeners:
            return

        try:
            mql = self._platform.match_media(f"({query})")
        except Exception as exc:
            log.debug("Failed to register media query listener: %s (%s)", query, exc)
            return

        def on_change(changed: MediaQueryList) -> None:
            log.debug("Media query changed: %s", query)
            self._bus.emit(MediaQueryChanged(query=query, matches=changed.matches))
            self.reprocess(query)

        mql.add_change_listener(on_change)
        self._listeners[query] = _Listener(media_query_list=mql, callback=on_change)
        log.debug("Registered media query listener: %s", query)
        self._bus.emit(MediaQueryRegistered(query=query))

    def reprocess(self, query: str) -> int:
        """Re-render every subscriber of *query*; return how many changed.

        A subscriber whose render raises :class:`CSSIfError` keeps its text.
        """
        updated = 0
        for subscriber in self.subscribers(query):
            try:
                text = self._render(subscriber)
            except CSSIfError as exc:
                log.debug("Failed to reprocess element for media query %s: %s", query, exc)
                continue
            if subscriber.element.text_content != text:
                subscriber.element.text_content = text
                updated += 1
        return updated

    def cleanup(self) -> None:
        """Remove every platform listener and forget every subscriber."""
        for query, listener in self._listeners.items():
            listener.media_query_list.remove_change_listener(listener.callback)
            log.debug("Cleaned up media query listener: %s", query)
        self._listeners.clear()
        self._subscribers.clear()
