"""if() expression scanning, extraction and parsing."""

from cssif.parser.expression import parse_if_expression
from cssif.parser.extractor import contains_if_function, extract_if_functions
from cssif.parser.scanner import find_top_level, match_balanced_parens, split_top_level

__all__ = [
    "find_top_level",
    "match_balanced_parens",
    "split_top_level",
    "contains_if_function",
    "extract_if_functions",
    "parse_if_expression",
]
