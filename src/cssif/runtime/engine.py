"""Runtime engine: resolves if() functions against live platform state."""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from cssif.conditions import select_value
from cssif.errors import CSSIfError, ParseError
from cssif.events.bus import EventBus
from cssif.events.types import ExpressionFailed, StylesheetRewritten
from cssif.model.config import RuntimeOptions
from cssif.parser.expression import parse_if_expression
from cssif.parser.extractor import extract_if_functions
from cssif.runtime.document import PROCESSED_KEY, Document, LinkNode, StyleNode, StylesheetObserver
from cssif.runtime.loader import StylesheetLoader
from cssif.runtime.platform import Platform
from cssif.runtime.subscriptions import MediaQueryRegistry, Subscriber
from cssif.transforms.build import transform
from cssif.transforms.native import substitute

__all__ = ["CSSIfRuntime", "MAX_PASSES", "NATIVE_SUPPORT_PROBE"]

log = logging.getLogger(__name__)

# Nested if() values are resolved in repeated passes, at most this many.
MAX_PASSES = 32

NATIVE_SUPPORT_PROBE = ("color", "if(style(--true): red; else: blue)")


class CSSIfRuntime:
    """Evaluates if() functions for one document against one platform.

    Each instance owns its media query registry, so several runtimes can
    coexist. All methods are synchronous and must be called from a single
    thread.
    """

    def __init__(
        self,
        platform: Platform,
        document: Document | None = None,
        options: RuntimeOptions | None = None,
        *,
        bus: EventBus | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.platform = platform
        self.document = document
        self.options = options or RuntimeOptions()
        self.bus = bus or EventBus()
        self.registry = MediaQueryRegistry(platform, self._render_subscriber, bus=self.bus)
        self.loader: StylesheetLoader | None = None
        if document is not None:
            self.loader = StylesheetLoader(
                document,
                lambda text, style: self.process_text(text, tracking_element=style),
                http_client=http_client,
                bus=self.bus,
            )
        self._observer: StylesheetObserver | None = None

    # --- text processing ---------------------------------------------------

    def process_text(
        self,
        css_text: str,
        options: RuntimeOptions | None = None,
        tracking_element: Any = None,
    ) -> str:
        """Return *css_text* with every if() function resolved.

        With ``use_native_transform`` the statically transformable part is
        rewritten to native CSS first and only the remaining declarations
        are evaluated. When *tracking_element* is given, every ``media()``
        query of every resolved if() is registered so the element is re-rendered when
        the query result changes. Malformed if() functions are left as-is.
        """
        opts = options or self.options
        on_media: Callable[[str], None] | None = None
        if tracking_element is not None:
            def on_media(query: str) -> None:
                self.registry.register(query, tracking_element, css_text, opts)

        return self._render(css_text, opts, on_media)

    def _render(
        self,
        css_text: str,
        opts: RuntimeOptions,
        on_media: Callable[[str], None] | None = None,
    ) -> str:
        if "if(" not in css_text:
            return css_text
        if not opts.use_native_transform:
            return self._resolve(css_text, opts, on_media)

        result = transform(css_text)
        if result.native_css:
            self._debug(opts, "Native CSS transformation applied")
        if not result.has_runtime_rules:
            return result.native_css
        resolved = self._resolve(result.runtime_css, opts, on_media)
        return "\n".join(part for part in (result.native_css, resolved) if part)

    def _render_subscriber(self, subscriber: Subscriber) -> str:
        # Re-renders can reach nested if() values with queries not seen before.
        def on_media(query: str) -> None:
            self.registry.register(query, subscriber.element, subscriber.original_text, subscriber.options)

        return self._render(subscriber.original_text, subscriber.options, on_media)

    def _resolve(
        self,
        text: str,
        opts: RuntimeOptions,
        on_media: Callable[[str], None] | None,
    ) -> str:
        failed: set[str] = set()
        for _ in range(MAX_PASSES):
            matches = extract_if_functions(text)
            replacements: list[str] = []
            changed = False
            for match in matches:
                try:
                    expression = parse_if_expression(match.inner_content, allow_literals=True)
                except ParseError as exc:
                    if match.full_text not in failed:
                        failed.add(match.full_text)
                        self._debug(opts, "Error processing if() function %s: %s", match.full_text, exc)
                        self.bus.emit(ExpressionFailed(text=match.full_text, error=str(exc)))
                    replacements.append(match.full_text)
                    continue
                value = select_value(expression, self.platform, on_media=on_media)
                self._debug(opts, "Resolved %s -> %r", match.full_text, value)
                replacements.append(value)
                changed = True
            if not changed:
                return text
            text = substitute(text, matches, replacements)
        log.warning("Stopped resolving if() after %d passes; output may contain if()", MAX_PASSES)
        return text

    @staticmethod
    def _debug(opts: RuntimeOptions, message: str, *args: object) -> None:
        if opts.debug:
            log.debug(message, *args)

    # --- document integration ----------------------------------------------

    def process_style_node(self, node: StyleNode) -> bool:
        """Rewrite an inline style node once; return True if its text changed."""
        if node.processed:
            return False
        original = node.text_content
        processed = self.process_text(original, tracking_element=node)
        if processed == original:
            return False
        node.text_content = processed
        node.dataset[PROCESSED_KEY] = "true"
        self.bus.emit(StylesheetRewritten(source="style", length=len(processed)))
        return True

    def process_link_node(self, link: LinkNode) -> StyleNode | None:
        if self.loader is None or link.rel != "stylesheet":
            return None
        return self.loader.load(link)

    def _process_existing(self) -> None:
        assert self.document is not None
        pending = [n for n in self.document.style_nodes() if not n.processed]
        self._debug(self.options, "Found %d unprocessed style elements", len(pending))
        for node in pending:
            self.process_style_node(node)
        for link in self.document.link_nodes():
            self.process_link_node(link)

    # --- lifecycle ----------------------------------------------------------

    def detect_native_support(self) -> bool:
        """True if the platform evaluates if() natively."""
        prop, value = NATIVE_SUPPORT_PROBE
        try:
            return bool(self.platform.supports_declaration(prop, value))
        except Exception as exc:
            log.debug("Native if() support probe failed: %s", exc)
            return False

    def initialize(self) -> bool:
        """Process the document and watch it for new stylesheets.

        Returns False without touching the document when the platform
        supports if() natively.
        """
        if self.document is None:
            raise CSSIfError("CSSIfRuntime.initialize() requires a document")
        if self.detect_native_support():
            self._debug(self.options, "Native CSS if() support detected, runtime not needed")
            return False

        self._debug(self.options, "Initializing CSS if() runtime")
        self._process_existing()
        if self._observer is None:
            self._observer = StylesheetObserver(self.process_style_node, self.process_link_node)
            self.document.observe(self._observer)
        return True

    def refresh_all(self) -> None:
        """Process every style and link node not yet processed."""
        if self.document is None:
            raise CSSIfError("CSSIfRuntime.refresh_all() requires a document")
        self._process_existing()

    def teardown_all_subscriptions(self) -> None:
        self.registry.cleanup()

    def close(self) -> None:
        """Tear down subscriptions, stop observing and release the HTTP client."""
        self.teardown_all_subscriptions()
        if self.document is not None and self._observer is not None:
            self.document.disconnect(self._observer)
            self._observer = None
        if self.loader is not None:
            self.loader.close()
