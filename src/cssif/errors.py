"""Error hierarchy for cssif."""

from __future__ import annotations


class CSSIfError(Exception):
    """Base error for all cssif errors."""


class ParseError(CSSIfError):
    """Raised when an if() expression or CSS fragment cannot be parsed."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        super().__init__(message)


class MalformedExpression(ParseError):
    """Missing separator, unknown condition keyword, or empty expression."""


class UnterminatedFunction(ParseError):
    """An opening parenthesis has no matching close parenthesis."""


class OracleFailure(CSSIfError):
    """A platform media/feature/style probe raised instead of answering."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
