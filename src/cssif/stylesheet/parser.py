"""Hand-written rule and declaration splitter for CSS containing if().

Syntax example:
    /* theme */
    @import url("base.css");
    .card { padding: 1rem; color: if(media(min-width: 768px): blue; else: red); }

Only rule and declaration boundaries are recognised. Selectors, at-rule
preludes and values are kept as opaque text.
"""

from __future__ import annotations

import re

from cssif.model.stylesheet import Declaration, RawBlock, Rule, Stylesheet
from cssif.parser.scanner import find_top_level, next_quote_state, split_top_level

__all__ = ["parse_declarations", "parse_rule", "parse_stylesheet", "split_rules"]

# Comments inside a rule body, removed before declarations are split.
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def split_rules(source: str) -> list[str]:
    """Split stylesheet text into top-level items.

    An item is a complete ``selector { ... }`` block (nested braces
    included), a top-level comment, or a statement terminated by a
    top-level ``;`` such as ``@import``. Comments never count towards
    brace balance; braces inside strings are ignored. Items are stripped.
    """
    items: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    i = 0
    n = len(source)

    def flush() -> None:
        text = "".join(current).strip()
        if text:
            items.append(text)
        current.clear()

    while i < n:
        if quote is None and source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = n if end == -1 else end + 2
            if depth == 0:
                flush()
                items.append(source[i:end].strip())
            else:
                current.append(source[i:end])
            i = end
            continue

        quote = next_quote_state(source, i, quote)
        char = source[i]
        current.append(char)

        if quote is None:
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
                if depth == 0:
                    flush()
            elif char == ";" and depth == 0:
                flush()
        i += 1

    flush()
    return items


def parse_declarations(body: str) -> list[Declaration]:
    """Split a rule body into ordered declarations.

    Declarations are separated by top-level ``;`` so semicolons inside
    ``if(a: b; else: c)`` do not split them. Fragments without a
    property or a value are dropped.
    """
    declarations: list[Declaration] = []
    for raw in split_top_level(_COMMENT_RE.sub("", body), ";"):
        if not raw.strip():
            continue
        colon = find_top_level(":", raw)
        if colon == -1:
            continue
        prop = raw[:colon].strip()
        value = raw[colon + 1:].strip()
        if prop and value:
            declarations.append(Declaration(property=prop, value=value))
    return declarations


def parse_rule(text: str) -> Rule | None:
    """Parse one ``selector { declarations }`` item.

    Returns None for anything that is not a flat rule: text without a
    ``{`` and a trailing ``}``, or an at-rule whose body holds nested
    blocks (``@media``, ``@supports`` ...).
    """
    open_brace = text.find("{")
    close_brace = text.rfind("}")
    if open_brace == -1 or close_brace < open_brace:
        return None

    selector = text[:open_brace].strip()
    body = text[open_brace + 1:close_brace]
    if "{" in _COMMENT_RE.sub("", body):
        return None

    return Rule(
        selector=selector,
        declarations=tuple(parse_declarations(body)),
        raw=text,
    )


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse stylesheet text into rules and raw blocks in source order."""
    items: list[Rule | RawBlock] = []
    for text in split_rules(source):
        rule = parse_rule(text)
        items.append(rule if rule is not None else RawBlock(text=text))
    return Stylesheet(items=tuple(items))
