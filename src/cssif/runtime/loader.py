"""Fetch same-origin external stylesheets and replace them with rewritten styles."""

from __future__ import annotations

import logging
from typing import Callable

import httpx

from cssif.events.bus import EventBus
from cssif.events.types import LinkSkipped, StylesheetRewritten
from cssif.runtime.document import (
    ORIGINAL_HREF_KEY,
    PENDING_KEY,
    PROCESSED_KEY,
    Document,
    LinkNode,
    StyleNode,
)

__all__ = ["StylesheetLoader"]

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _origin(url: httpx.URL) -> tuple[str, str, int | None]:
    return url.scheme, url.host, url.port


class StylesheetLoader:
    """Loads ``<link rel="stylesheet">`` targets through an httpx client.

    A link is fetched at most once: it is marked pending while the request
    is in flight and processed after a successful response. If the link
    has left the document by the time the response arrives, the result is
    dropped. Cross-origin links and failed requests are skipped.

    *process* renders fetched CSS text; it receives the replacement
    ``StyleNode`` so the caller can track it.
    """

    def __init__(
        self,
        document: Document,
        process: Callable[[str, StyleNode], str],
        http_client: httpx.Client | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self._document = document
        self._process = process
        self._client = http_client
        self._owns_client = http_client is None
        self._bus = bus or EventBus()

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
        return self._client

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def _skip(self, link: LinkNode, reason: str) -> None:
        log.debug("Skipping stylesheet %s: %s", link.href, reason)
        self._bus.emit(LinkSkipped(href=link.href, reason=reason))

    def load(self, link: LinkNode) -> StyleNode | None:
        """Fetch and rewrite *link*; return the inserted style node, if any."""
        if PROCESSED_KEY in link.dataset or PENDING_KEY in link.dataset:
            return None

        url = httpx.URL(self._document.origin).join(link.href)
        if _origin(url) != _origin(httpx.URL(self._document.origin)):
            self._skip(link, "cross-origin")
            return None

        link.dataset[PENDING_KEY] = "true"
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            self._skip(link, f"fetch failed: {exc}")
            return None
        finally:
            link.dataset.pop(PENDING_KEY, None)

        if not self._document.contains(link):
            self._skip(link, "removed from document")
            return None

        link.dataset[PROCESSED_KEY] = "true"
        css_text = response.text
        style = StyleNode()
        processed = self._process(css_text, style)
        if processed == css_text:
            return None

        style.text_content = processed
        style.dataset[PROCESSED_KEY] = "true"
        style.dataset[ORIGINAL_HREF_KEY] = str(url)
        self._document.insert_after(link, style)
        link.disabled = True
        log.debug("External stylesheet processed and replaced: %s", url)
        self._bus.emit(StylesheetRewritten(source=str(url), length=len(processed)))
        return style
