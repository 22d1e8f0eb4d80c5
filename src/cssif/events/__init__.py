"""Event system: bus and event types for the runtime engine."""

from cssif.events.bus import EventBus
from cssif.events.types import (
    ExpressionFailed,
    LinkSkipped,
    MediaQueryChanged,
    MediaQueryRegistered,
    StylesheetRewritten,
)

__all__ = [
    "EventBus",
    "ExpressionFailed",
    "LinkSkipped",
    "MediaQueryChanged",
    "MediaQueryRegistered",
    "StylesheetRewritten",
]
