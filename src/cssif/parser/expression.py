"""Parser for the content of a single ``if(...)`` function.

Grammar (whitespace around tokens is insignificant):
    Content   = Clause ( ';' Clause )* [ ';' ]
    Clause    = 'else' ':' Value | Condition ':' Value
    Condition = ( 'style' | 'media' | 'supports' ) '(' Expression ')'

Separators are only recognised at the top level, so parentheses,
commas and quoted strings inside expressions and values are preserved.
"""

from __future__ import annotations

import re

from cssif.errors import MalformedExpression, UnterminatedFunction
from cssif.model.expression import ConditionClause, ConditionType, IfExpression
from cssif.parser.scanner import find_top_level, match_balanced_parens, split_top_level

__all__ = ["parse_if_expression"]

_ELSE_RE = re.compile(r"^else\s*:\s*(?P<value>.*)$", re.DOTALL)

_CONDITION_RE = re.compile(r"^(?P<keyword>style|media|supports)\s*\(")


def _parse_condition(condition: str, allow_literals: bool) -> tuple[ConditionType, str]:
    match = _CONDITION_RE.match(condition)
    if match:
        try:
            close = match_balanced_parens(condition, match.end())
        except UnterminatedFunction:
            raise MalformedExpression(f"Unterminated condition in {condition!r}") from None
        if close != len(condition) - 1:
            raise MalformedExpression(f"Unexpected text after condition in {condition!r}")
        return ConditionType(match.group("keyword")), condition[match.end():close].strip()
    if allow_literals:
        return ConditionType.LITERAL, condition
    raise MalformedExpression(f"Unknown condition type in {condition!r}")


def parse_if_expression(content: str, *, allow_literals: bool = False) -> IfExpression:
    """Parse the inner content of one ``if(...)`` into an IfExpression.

    With *allow_literals* a condition without a recognised keyword (for
    example ``true``) becomes a literal clause instead of an error.

    Raises MalformedExpression for a clause without a top-level ``:``,
    an unknown condition keyword, text after a condition's closing
    parenthesis, or content with no condition clause.
    A missing else clause is not an error: ``else_value`` is ``None``.
    """
    clauses: list[ConditionClause] = []
    else_value: str | None = None

    for raw in split_top_level(content, ";"):
        segment = raw.strip()
        if not segment:
            continue

        else_match = _ELSE_RE.match(segment)
        if else_match:
            else_value = else_match.group("value").strip()
            continue

        colon = find_top_level(":", segment)
        if colon == -1:
            raise MalformedExpression(f"Missing ':' in if() clause {segment!r}")

        condition = segment[:colon].strip()
        value = segment[colon + 1:].strip()
        condition_type, expression = _parse_condition(condition, allow_literals)
        clauses.append(ConditionClause(type=condition_type, expression=expression, value=value))

    if not clauses:
        raise MalformedExpression(f"if() has no condition clause: {content!r}")

    return IfExpression(clauses=tuple(clauses), else_value=else_value)
