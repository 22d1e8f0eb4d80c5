"""Quote- and parenthesis-aware scanning over CSS value text.

Every splitter and extractor in cssif is built on the two primitives
here. A character is "top level" when it sits outside any quoted string
and at parenthesis depth 0 relative to the scan start. A quote preceded
by a backslash does not open or close a string.
"""

from __future__ import annotations

from cssif.errors import UnterminatedFunction

__all__ = [
    "find_top_level",
    "match_balanced_parens",
    "next_quote_state",
    "split_top_level",
]

_QUOTES = ("'", '"')


def next_quote_state(text: str, index: int, quote: str | None) -> str | None:
    """Return the quote state after consuming ``text[index]``."""
    char = text[index]
    if char not in _QUOTES:
        return quote
    if index > 0 and text[index - 1] == "\\":
        return quote
    if quote is None:
        return char
    if char == quote:
        return None
    return quote


def find_top_level(char: str, text: str, start: int = 0) -> int:
    """Return the index of the first top-level *char* at or after *start*.

    Returns -1 if there is none.
    """
    depth = 0
    quote: str | None = None
    for i in range(start, len(text)):
        quote = next_quote_state(text, i, quote)
        if quote is not None:
            continue
        c = text[i]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
        elif c == char and depth == 0:
            return i
    return -1


def match_balanced_parens(text: str, start: int) -> int:
    """Return the index of the close paren matching an already-open one.

    *start* is the index just after the opening parenthesis. Raises
    :class:`UnterminatedFunction` if the text ends first.
    """
    depth = 0
    quote: str | None = None
    for i in range(start, len(text)):
        quote = next_quote_state(text, i, quote)
        if quote is not None:
            continue
        c = text[i]
        if c == "(":
            depth += 1
        elif c == ")":
            if depth == 0:
                return i
            depth -= 1
    raise UnterminatedFunction(
        f"No matching ')' for parenthesis opened before offset {start}",
        offset=start,
    )


def split_top_level(text: str, separator: str) -> list[str]:
    """Split *text* at every top-level *separator*.

    Segments are returned unstripped; a trailing empty segment is kept so
    callers can decide whether it matters.
    """
    segments: list[str] = []
    begin = 0
    while True:
        index = find_top_level(separator, text, begin)
        if index == -1:
            segments.append(text[begin:])
            return segments
        segments.append(text[begin:index])
        begin = index + 1
