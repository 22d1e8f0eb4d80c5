"""Event types emitted by the runtime engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MediaQueryRegistered:
    """A platform change listener was installed for a media query."""

    query: str


@dataclass(frozen=True)
class MediaQueryChanged:
    query: str
    matches: bool


@dataclass(frozen=True)
class StylesheetRewritten:
    source: str  # "style" or the href of a link element
    length: int


@dataclass(frozen=True)
class ExpressionFailed:
    """An if() occurrence could not be parsed and was left verbatim."""

    text: str
    error: str


@dataclass(frozen=True)
class LinkSkipped:
    href: str
    reason: str
