"""Error hierarchy for stylesheet parsing.

Every error aborts the whole stylesheet; there is no per-rule recovery.
"""

from __future__ import annotations


class ParseError(Exception):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        line: int | None = None,
        column: int | None = None,
        expected: str | None = None,
    ) -> None:
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = expected
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}, column {self.column})"


class LexicalError(ParseError):
    """Malformed literal or an unterminated string, bracket, or comment."""


class CssSyntaxError(ParseError):
    """A grammar production was not satisfied at the current position."""


class EmbeddedExpressionError(ParseError):
    """Bracketed text was rejected by the grammar its position requires."""

    def __init__(self, message: str, *, text: str = "", reasons: tuple[str, ...] = (), **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.text = text
        self.reasons = reasons
