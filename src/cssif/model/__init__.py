"""cssif model layer -- public type re-exports."""

from cssif.model.config import RuntimeOptions, TransformOptions
from cssif.model.diagnostic import Diagnostic, Severity
from cssif.model.expression import (
    ConditionClause,
    ConditionType,
    ExtractedMatch,
    IfExpression,
)
from cssif.model.result import PropertyTransform, TransformResult, TransformStats
from cssif.model.stylesheet import Declaration, RawBlock, Rule, Stylesheet

__all__ = [
    # expression
    "ConditionType",
    "ConditionClause",
    "IfExpression",
    "ExtractedMatch",
    # stylesheet
    "Declaration",
    "Rule",
    "RawBlock",
    "Stylesheet",
    # result
    "TransformStats",
    "PropertyTransform",
    "TransformResult",
    # diagnostic
    "Severity",
    "Diagnostic",
    # config
    "TransformOptions",
    "RuntimeOptions",
]
