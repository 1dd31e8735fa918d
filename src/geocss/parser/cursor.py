"""Immutable input position threaded through every grammar production."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeVar

from geocss.errors import LexicalError, ParseError

E = TypeVar("E", bound=ParseError)

_SPACE_RE = re.compile(r"\s*")
_FOUND_RE = re.compile(r"[^\s]{1,20}")


@dataclass(frozen=True)
class Cursor:
    """A position in the source text.

    Productions never mutate a cursor; they return a new one alongside their
    result, so two parses never share positional state.
    """

    text: str
    offset: int = 0

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1

    def peek(self) -> str:
        """The next character, or an empty string at end of input."""
        return self.text[self.offset:self.offset + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset)

    def advance(self, count: int) -> Cursor:
        return Cursor(self.text, min(self.offset + count, len(self.text)))

    def at(self, offset: int) -> Cursor:
        return Cursor(self.text, offset)

    def match(self, pattern: re.Pattern[str]) -> tuple[re.Match[str], Cursor] | None:
        """Match *pattern* at this position; return the match and the cursor after it."""
        m = pattern.match(self.text, self.offset)
        if m is None:
            return None
        return m, self.at(m.end())

    def skip_whitespace(self) -> Cursor:
        m = _SPACE_RE.match(self.text, self.offset)
        return self.at(m.end()) if m else self

    def read_comment(self) -> tuple[str, Cursor]:
        """Read one ``/* ... */`` comment starting here; return its body."""
        end = self.text.find("*/", self.offset + 2)
        if end < 0:
            raise self.error(LexicalError, "Unterminated comment", expected="'*/'")
        return self.text[self.offset + 2:end], self.at(end + 2)

    def skip_space(self) -> Cursor:
        """Skip whitespace and comments."""
        cursor = self.skip_whitespace()
        while cursor.startswith("/*"):
            _, cursor = cursor.read_comment()
            cursor = cursor.skip_whitespace()
        return cursor

    def found(self) -> str:
        """Short description of the text at this position, for error messages."""
        if self.at_end:
            return "end of input"
        m = _FOUND_RE.match(self.text, self.offset)
        return repr(m.group(0)) if m else repr(self.peek())

    def error(self, cls: type[E], message: str, *, expected: str | None = None, **kwargs) -> E:
        """Build an error of type *cls* positioned at this cursor."""
        if expected is not None:
            message = f"{message}: expected {expected}, found {self.found()}"
        return cls(
            message,
            offset=self.offset,
            line=self.line,
            column=self.column,
            expected=expected,
            **kwargs,
        )
