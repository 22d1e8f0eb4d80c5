"""Expression model: condition clauses, parsed if() expressions and matches."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConditionType(Enum):
    """Kind of condition function used in a clause."""

    STYLE = "style"
    MEDIA = "media"
    SUPPORTS = "supports"
    LITERAL = "literal"

    @property
    def is_native(self) -> bool:
        """True if the condition maps onto a native CSS at-rule."""
        return self in (ConditionType.MEDIA, ConditionType.SUPPORTS)


@dataclass(frozen=True)
class ConditionClause:
    """One ``type(expression): value`` segment of an if() expression."""

    type: ConditionType
    expression: str  # raw inner text, e.g. "min-width: 768px"
    value: str  # CSS fragment substituted when this clause wins


@dataclass(frozen=True)
class IfExpression:
    """Ordered condition clauses plus the optional else value.

    ``else_value`` is ``None`` when the expression has no else clause at
    all, and ``""`` when the else clause is present but empty.
    """

    clauses: tuple[ConditionClause, ...]
    else_value: str | None = None

    @property
    def has_else(self) -> bool:
        return self.else_value is not None

    @property
    def is_native(self) -> bool:
        """True if every clause can be expressed as @media/@supports."""
        return all(clause.type.is_native for clause in self.clauses)

    @property
    def needs_runtime(self) -> bool:
        """True if any clause depends on live style state."""
        return any(clause.type is ConditionType.STYLE for clause in self.clauses)


@dataclass(frozen=True)
class ExtractedMatch:
    """One ``if(...)`` occurrence located inside a larger value string.

    Attributes:
        full_text: The complete ``if(...)`` text.
        inner_content: Text between the outer parentheses.
        start: Offset of the ``i`` of ``if(`` in the source string.
        end: Offset one past the closing parenthesis.
    """

    full_text: str
    inner_content: str
    start: int
    end: int
