"""Rewrite one declaration's if() functions into native @media/@supports CSS.

A declaration is native-transformable when every clause of every if()
in its value is a ``media()`` or ``supports()`` condition. Its output is
a fallback rule built from the else values followed by conditional
blocks ordered so that the cascade picks, for every if(), the first
clause whose condition holds. Anything else moves whole to the runtime
stream.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence

from cssif.errors import ParseError
from cssif.model.diagnostic import Diagnostic, Severity
from cssif.model.expression import ConditionClause, ConditionType, ExtractedMatch, IfExpression
from cssif.model.result import PropertyTransform
from cssif.parser.expression import parse_if_expression
from cssif.parser.extractor import contains_if_function, extract_if_functions

__all__ = ["MAX_VARIANTS", "declaration_block", "substitute", "transform_property"]

log = logging.getLogger(__name__)

# Upper bound on generated variants for a shorthand with several if().
MAX_VARIANTS = 64

# A choice for one if() occurrence: a clause, or None for its else value.
_Choice = ConditionClause | None


def declaration_block(selector: str, prop: str, value: str) -> str:
    return f"{selector} {{ {prop}: {value}; }}"


def substitute(text: str, matches: Sequence[ExtractedMatch], replacements: Sequence[str]) -> str:
    """Rebuild *text* with each match replaced by the matching replacement.

    Matches must be in document order and non-overlapping; offsets refer
    to the original *text*.
    """
    parts: list[str] = []
    cursor = 0
    for match, replacement in zip(matches, replacements):
        parts.append(text[cursor:match.start])
        parts.append(replacement)
        cursor = match.end
    parts.append(text[cursor:])
    return "".join(parts)


def _defer(selector: str, prop: str, value: str, diagnostic: Diagnostic) -> PropertyTransform:
    log.debug("Deferring %s { %s } to runtime: %s", selector, prop, diagnostic.message)
    return PropertyTransform(
        runtime_css=declaration_block(selector, prop, value),
        has_runtime_rules=True,
        diagnostics=(diagnostic,),
    )


def _choices(expression: IfExpression) -> list[_Choice]:
    """Choices for one if(), lowest cascade priority first."""
    ordered: list[_Choice] = list(reversed(expression.clauses))
    if expression.has_else:
        ordered.insert(0, None)
    return ordered


def _priority(expression: IfExpression, choice: _Choice) -> int:
    if choice is None:
        return 0
    return len(expression.clauses) - expression.clauses.index(choice)


def _unique(items: list[str]) -> list[str]:
    seen: list[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _wrap(header: str, inner: str) -> str:
    indented = "\n".join(f"  {line}" for line in inner.splitlines())
    return f"{header} {{\n{indented}\n}}"


def _conditional_block(clauses: list[ConditionClause], rule: str) -> str:
    """Wrap *rule* in the conjunction of *clauses*' conditions."""
    media = _unique([c.expression for c in clauses if c.type is ConditionType.MEDIA])
    supports = _unique([c.expression for c in clauses if c.type is ConditionType.SUPPORTS])
    block = rule
    if supports:
        block = _wrap("@supports " + " and ".join(f"({e})" for e in supports), block)
    if media:
        block = _wrap("@media " + " and ".join(f"({e})" for e in media), block)
    return block


def transform_property(selector: str, prop: str, value: str) -> PropertyTransform:
    """Generate native and runtime CSS for one declaration.

    Declarations without any if() come back as a single native rule.
    """
    matches = extract_if_functions(value)
    if not matches:
        if contains_if_function(value):
            return _defer(selector, prop, value, Diagnostic(
                code="unterminated_function",
                severity=Severity.ERROR,
                message="if() has no matching ')'",
                selector=selector,
                prop=prop,
            ))
        return PropertyTransform(native_css=declaration_block(selector, prop, value))

    expressions: list[IfExpression] = []
    for match in matches:
        try:
            expression = parse_if_expression(match.inner_content)
        except ParseError as exc:
            return _defer(selector, prop, value, Diagnostic(
                code="malformed_expression",
                severity=Severity.ERROR,
                message=f"{exc} in {match.full_text}",
                selector=selector,
                prop=prop,
            ))
        if not expression.is_native:
            return _defer(selector, prop, value, Diagnostic(
                code="runtime_condition",
                severity=Severity.INFO,
                message="style() condition requires runtime evaluation",
                selector=selector,
                prop=prop,
            ))
        expressions.append(expression)

    choice_lists = [_choices(expression) for expression in expressions]
    variant_count = 1
    for choices in choice_lists:
        variant_count *= len(choices)
    if variant_count > MAX_VARIANTS:
        return _defer(selector, prop, value, Diagnostic(
            code="too_many_variants",
            severity=Severity.WARNING,
            message=f"{variant_count} condition combinations exceed the limit of {MAX_VARIANTS}",
            selector=selector,
            prop=prop,
        ))

    # Any order consistent with per-if() priority makes the block holding
    # every if()'s first true clause the last one that applies.
    combos = sorted(
        itertools.product(*choice_lists),
        key=lambda combo: (
            sum(_priority(e, c) for e, c in zip(expressions, combo)),
            [_priority(e, c) for e, c in zip(expressions, combo)],
        ),
    )

    blocks: list[str] = []
    for combo in combos:
        replacements = [
            expression.else_value if choice is None else choice.value
            for expression, choice in zip(expressions, combo)
        ]
        resolved = substitute(value, matches, replacements)
        if contains_if_function(resolved):
            return _defer(selector, prop, value, Diagnostic(
                code="nested_if",
                severity=Severity.INFO,
                message="nested if() requires runtime evaluation",
                selector=selector,
                prop=prop,
            ))
        rule = declaration_block(selector, prop, resolved)
        conditions = [choice for choice in combo if choice is not None]
        blocks.append(_conditional_block(conditions, rule) if conditions else rule)

    return PropertyTransform(native_css="\n".join(blocks))
