"""Locate ``if(...)`` occurrences inside a declaration value."""

from __future__ import annotations

import re

from cssif.errors import UnterminatedFunction
from cssif.model.expression import ExtractedMatch
from cssif.parser.scanner import match_balanced_parens

__all__ = ["contains_if_function", "extract_if_functions"]

_TOKEN = "if("

# Characters that make "if(" the tail of another function name (my-if().
_IDENT_CHAR = re.compile(r"[\w-]")


def _candidates(text: str):
    """Yield offsets of ``if(`` tokens not preceded by an identifier char."""
    index = text.find(_TOKEN)
    while index != -1:
        if index == 0 or not _IDENT_CHAR.match(text[index - 1]):
            yield index
        index = text.find(_TOKEN, index + 1)


def contains_if_function(text: str) -> bool:
    """True if *text* has an ``if(`` token, terminated or not."""
    return next(_candidates(text), None) is not None


def extract_if_functions(text: str) -> list[ExtractedMatch]:
    """Return every top-level ``if(...)`` occurrence in *text*, left to right.

    Unterminated occurrences are skipped; the scan resumes just after
    their ``if(`` token. An ``if()`` nested inside another one's content
    is not reported separately.
    """
    matches: list[ExtractedMatch] = []
    resume = 0
    for start in _candidates(text):
        if start < resume:
            continue
        content_start = start + len(_TOKEN)
        try:
            close = match_balanced_parens(text, content_start)
        except UnterminatedFunction:
            continue
        matches.append(
            ExtractedMatch(
                full_text=text[start:close + 1],
                inner_content=text[content_start:close],
                start=start,
                end=close + 1,
            )
        )
        resume = close + 1
    return matches
