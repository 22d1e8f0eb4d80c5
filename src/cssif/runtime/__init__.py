"""Runtime evaluation of if() functions against live platform state."""

from cssif.runtime.document import Document, LinkNode, MutationRecord, StyleNode, StylesheetObserver
from cssif.runtime.engine import CSSIfRuntime
from cssif.runtime.loader import StylesheetLoader
from cssif.runtime.platform import MediaQueryList, Platform, StaticMediaQueryList, StaticPlatform
from cssif.runtime.subscriptions import MediaQueryRegistry, Subscriber

__all__ = [
    "CSSIfRuntime",
    "Document",
    "LinkNode",
    "MediaQueryList",
    "MediaQueryRegistry",
    "MutationRecord",
    "Platform",
    "StaticMediaQueryList",
    "StaticPlatform",
    "StyleNode",
    "StylesheetLoader",
    "StylesheetObserver",
    "Subscriber",
]
