"""Platform oracles: media queries, feature support and computed styles.

The runtime only talks to the host environment through the
:class:`Platform` protocol. :class:`StaticPlatform` is an in-memory
implementation with a resizable viewport, used for headless rendering
and in tests.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Protocol

from cssif.errors import UnterminatedFunction
from cssif.parser.scanner import match_balanced_parens

__all__ = [
    "MediaQueryList",
    "Platform",
    "StaticMediaQueryList",
    "StaticPlatform",
    "normalize_query",
]

ChangeCallback = Callable[["MediaQueryList"], None]


class MediaQueryList(Protocol):
    """A live media query, as returned by ``matchMedia`` in a browser."""

    media: str

    @property
    def matches(self) -> bool: ...

    def add_change_listener(self, callback: ChangeCallback) -> None: ...

    def remove_change_listener(self, callback: ChangeCallback) -> None: ...


class Platform(Protocol):
    """Boolean oracles the runtime evaluates conditions against."""

    def match_media(self, query: str) -> MediaQueryList: ...

    def supports(self, condition: str) -> bool: ...

    def supports_declaration(self, prop: str, value: str) -> bool: ...

    def computed_style(self, element: Any, prop: str) -> str: ...


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------

_LENGTH_RE = re.compile(r"^(?P<number>-?\d+(?:\.\d+)?)(?P<unit>px|em|rem)?$")
_COLON_RE = re.compile(r"\s*:\s*")

# px per em/rem for length comparisons.
_FONT_SIZE = 16.0

_FALSY_FEATURE_VALUES = ("none", "no-preference", "0")


def _is_wrapped(text: str) -> bool:
    if not (text.startswith("(") and text.endswith(")")):
        return False
    try:
        return match_balanced_parens(text, 1) == len(text) - 1
    except UnterminatedFunction:
        return False


def normalize_query(query: str) -> str:
    """Canonical lookup form: single spaces, ``a: b`` colons, outer parens removed."""
    text = _COLON_RE.sub(": ", " ".join(query.split()))
    while _is_wrapped(text):
        text = text[1:-1].strip()
    return text


def _split_keyword(text: str, keyword: str) -> list[str]:
    """Split *text* on a top-level, case-insensitive `` keyword `` token."""
    token = f" {keyword} "
    lower = text.lower()
    parts: list[str] = []
    depth = 0
    begin = 0
    i = 0
    while i < len(text):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and lower.startswith(token, i):
            parts.append(text[begin:i])
            i += len(token)
            begin = i
            continue
        i += 1
    parts.append(text[begin:])
    return parts


def _to_px(raw: str) -> float | None:
    match = _LENGTH_RE.match(raw.strip())
    if not match:
        return None
    number = float(match.group("number"))
    if match.group("unit") in ("em", "rem"):
        return number * _FONT_SIZE
    return number


# ---------------------------------------------------------------------------
# Static implementation
# ---------------------------------------------------------------------------


class StaticMediaQueryList:
    """Media query list bound to a :class:`StaticPlatform`."""

    def __init__(self, platform: StaticPlatform, media: str) -> None:
        self._platform = platform
        self.media = media
        self._callbacks: list[ChangeCallback] = []

    @property
    def matches(self) -> bool:
        return self._platform.evaluate_media(self.media)

    @property
    def listener_count(self) -> int:
        return len(self._callbacks)

    def add_change_listener(self, callback: ChangeCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)
            self._platform._watch(self)

    def remove_change_listener(self, callback: ChangeCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
        if not self._callbacks:
            self._platform._unwatch(self)

    def dispatch(self) -> None:
        for callback in list(self._callbacks):
            callback(self)


class StaticPlatform:
    """In-memory platform with a viewport, environment features and styles.

    Media queries understand ``width``/``height`` (with ``min-``/``max-``
    prefixes, in px, em or rem), ``orientation``, ``and``/``or``/``not``
    and comma lists, plus any discrete feature present in *environment*.
    Explicit *media* overrides win over evaluation. *features* lists
    supported ``supports()`` conditions such as ``display: grid``.
    """

    def __init__(
        self,
        width: int = 1024,
        height: int = 768,
        *,
        environment: dict[str, str] | None = None,
        media: dict[str, bool] | None = None,
        features: tuple[str, ...] | list[str] = (),
        styles: dict[str, str] | None = None,
        native_if: bool = False,
    ) -> None:
        self.width = width
        self.height = height
        self.environment: dict[str, str] = {
            "prefers-color-scheme": "light",
            "prefers-reduced-motion": "no-preference",
            "hover": "hover",
            "pointer": "fine",
        }
        self.environment.update(environment or {})
        self._media_overrides = {normalize_query(q): v for q, v in (media or {}).items()}
        self._features = {normalize_query(f) for f in features}
        self._styles: dict[str, str] = dict(styles or {})
        self._element_styles: dict[Any, dict[str, str]] = {}
        self.native_if = native_if
        self._watched: list[StaticMediaQueryList] = []

    # --- oracles -----------------------------------------------------------

    def match_media(self, query: str) -> StaticMediaQueryList:
        return StaticMediaQueryList(self, query)

    def supports(self, condition: str) -> bool:
        return normalize_query(condition) in self._features

    def supports_declaration(self, prop: str, value: str) -> bool:
        if "if(" in value:
            return self.native_if
        return normalize_query(f"{prop}: {value}") in self._features

    def computed_style(self, element: Any, prop: str) -> str:
        if element is not None and prop in self._element_styles.get(element, {}):
            return self._element_styles[element][prop]
        return self._styles.get(prop, "")

    def evaluate_media(self, query: str) -> bool:
        text = normalize_query(query)
        if text in self._media_overrides:
            return self._media_overrides[text]

        alternatives = [part for chunk in text.split(",") for part in _split_keyword(chunk, "or")]
        if len(alternatives) > 1:
            return any(self.evaluate_media(part) for part in alternatives)

        conjuncts = _split_keyword(text, "and")
        if len(conjuncts) > 1:
            return all(self.evaluate_media(part) for part in conjuncts)

        if text.lower().startswith("not "):
            return not self.evaluate_media(text[4:])

        return self._evaluate_feature(text)

    def _evaluate_feature(self, text: str) -> bool:
        if ":" not in text:
            name = text.lower()
            if name in ("all", "screen"):
                return True
            if name in ("width", "height"):
                return True
            value = self.environment.get(name)
            return value is not None and value not in _FALSY_FEATURE_VALUES

        name, _, raw_value = text.partition(":")
        name = name.strip().lower()
        raw_value = raw_value.strip()

        prefix = ""
        if name.startswith(("min-", "max-")):
            prefix, name = name[:3], name[4:]

        if name in ("width", "height"):
            limit = _to_px(raw_value)
            if limit is None:
                return False
            actual = self.width if name == "width" else self.height
            if prefix == "min":
                return actual >= limit
            if prefix == "max":
                return actual <= limit
            return actual == limit

        if name == "orientation":
            current = "portrait" if self.height >= self.width else "landscape"
            return raw_value.lower() == current

        return self.environment.get(name) == raw_value

    # --- state changes -----------------------------------------------------

    def set_style(self, prop: str, value: str, element: Any = None) -> None:
        """Set a computed value on the root, or on one element."""
        if element is None:
            self._styles[prop] = value
        else:
            self._element_styles.setdefault(element, {})[prop] = value

    def resize(self, width: int, height: int | None = None) -> None:
        """Change the viewport and notify media listeners whose result flipped."""

        def apply() -> None:
            self.width = width
            if height is not None:
                self.height = height

        self._update(apply)

    def set_environment(self, feature: str, value: str) -> None:
        self._update(lambda: self.environment.__setitem__(feature, value))

    def set_media(self, query: str, matches: bool) -> None:
        """Force the result of *query* regardless of the viewport."""
        self._update(lambda: self._media_overrides.__setitem__(normalize_query(query), matches))

    @property
    def listener_count(self) -> int:
        return sum(mql.listener_count for mql in self._watched)

    def _update(self, mutate: Callable[[], None]) -> None:
        before = [(mql, mql.matches) for mql in self._watched]
        mutate()
        for mql, previous in before:
            if mql.matches != previous:
                mql.dispatch()

    def _watch(self, mql: StaticMediaQueryList) -> None:
        if mql not in self._watched:
            self._watched.append(mql)

    def _unwatch(self, mql: StaticMediaQueryList) -> None:
        if mql in self._watched:
            self._watched.remove(mql)
