"""Runtime evaluator for if() condition clauses.

Clause kinds:
    style(prop)          -> computed value of prop is non-empty and not 'initial'
    style(prop: value)   -> computed value of prop equals value
    media(feature)       -> platform media query '(feature)' matches
    supports(condition)  -> platform reports the condition as supported
    literal              -> 'true' / '1' are true, anything else is false

Clauses are evaluated in declaration order and the first true one wins.
A platform oracle that raises counts as false.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from cssif.errors import OracleFailure
from cssif.model.expression import ConditionClause, ConditionType, IfExpression
from cssif.parser.scanner import find_top_level

if TYPE_CHECKING:
    from cssif.runtime.platform import Platform

__all__ = ["evaluate_clause", "select_value"]

log = logging.getLogger(__name__)

_TRUE_LITERALS = ("true", "1")


def _ask(description: str, oracle: Callable[[], object]) -> bool:
    try:
        return bool(oracle())
    except Exception as exc:
        failure = OracleFailure(f"{description} failed: {exc}", cause=exc)
        log.debug("%s; treating condition as false", failure)
        return False


def _evaluate_style(expression: str, platform: Platform, element: Any) -> bool:
    colon = find_top_level(":", expression)
    if colon == -1:
        prop, expected = expression.strip(), None
    else:
        prop, expected = expression[:colon].strip(), expression[colon + 1:].strip()

    def check() -> bool:
        actual = platform.computed_style(element, prop).strip()
        if expected:
            return actual == expected
        return actual != "" and actual != "initial"

    return _ask(f"style({expression})", check)


def evaluate_clause(clause: ConditionClause, platform: Platform, element: Any = None) -> bool:
    """Evaluate one clause against the current platform state."""
    if clause.type is ConditionType.LITERAL:
        return clause.expression.strip().lower() in _TRUE_LITERALS
    if clause.type is ConditionType.MEDIA:
        return _ask(
            f"media({clause.expression})",
            lambda: platform.match_media(f"({clause.expression})").matches,
        )
    if clause.type is ConditionType.SUPPORTS:
        return _ask(
            f"supports({clause.expression})",
            lambda: platform.supports(clause.expression),
        )
    if clause.type is ConditionType.STYLE:
        return _evaluate_style(clause.expression, platform, element)
    raise ValueError(f"Unknown condition type: {clause.type!r}")


def select_value(
    expression: IfExpression,
    platform: Platform,
    element: Any = None,
    on_media: Callable[[str], None] | None = None,
) -> str:
    """Return the value of the first true clause, else the else value.

    A missing else clause yields an empty string. *on_media* is called
    with the expression of every ``media()`` clause of *expression*,
    reached or not.
    """
    if on_media is not None:
        for clause in expression.clauses:
            if clause.type is ConditionType.MEDIA:
                on_media(clause.expression)
    for clause in expression.clauses:
        if evaluate_clause(clause, platform, element):
            return clause.value
    return expression.else_value or ""
