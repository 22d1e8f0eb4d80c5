"""cssif -- build-time and runtime support for the CSS if() function."""

__version__ = "0.1.0"

from cssif.errors import (  # noqa: E402
    CSSIfError,
    MalformedExpression,
    OracleFailure,
    ParseError,
    UnterminatedFunction,
)
from cssif.model import (  # noqa: E402
    ConditionClause,
    ConditionType,
    Diagnostic,
    ExtractedMatch,
    IfExpression,
    RuntimeOptions,
    Severity,
    TransformOptions,
    TransformResult,
    TransformStats,
)
from cssif.parser import extract_if_functions, parse_if_expression  # noqa: E402
from cssif.runtime import CSSIfRuntime, Document, LinkNode, StaticPlatform, StyleNode  # noqa: E402
from cssif.stylesheet import parse_stylesheet  # noqa: E402
from cssif.transforms import minify, transform  # noqa: E402

__all__ = [
    "__version__",
    # errors
    "CSSIfError",
    "ParseError",
    "MalformedExpression",
    "UnterminatedFunction",
    "OracleFailure",
    # model
    "ConditionType",
    "ConditionClause",
    "IfExpression",
    "ExtractedMatch",
    "Severity",
    "Diagnostic",
    "TransformOptions",
    "RuntimeOptions",
    "TransformResult",
    "TransformStats",
    # build time
    "extract_if_functions",
    "parse_if_expression",
    "parse_stylesheet",
    "transform",
    "minify",
    # runtime
    "CSSIfRuntime",
    "StaticPlatform",
    "Document",
    "StyleNode",
    "LinkNode",
]
