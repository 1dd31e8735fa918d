"""Property values: Literal, Function, Expression, Property, and Description."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

_TAG_RE = re.compile(r"^\s*\*?\s*@(?P<tag>title|abstract)\s+(?P<text>.*?)\s*$", re.MULTILINE)


@dataclass(frozen=True)
class Literal:
    """A single bare token: identifier, number, measure, color, or string body."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Function:
    """A function-call value such as ``url(icon.png)`` or ``rgb(0, 0, 0)``."""

    name: str
    args: tuple[Value, ...] = ()

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Expression:
    """A bracketed scalar expression; *expression* is the engine's handle."""

    expression: Any

    def __str__(self) -> str:
        return f"[{self.expression}]"


Value = Union[Literal, Function, Expression]


@dataclass(frozen=True)
class Property:
    """A named property with one or more comma-separated alternatives.

    Each alternative is a tuple of space-separated values, e.g.
    ``stroke-dasharray: 2 4, 1 1`` has two alternatives of two values each.
    """

    name: str
    alternatives: tuple[tuple[Value, ...], ...]

    def __str__(self) -> str:
        rendered = ", ".join(" ".join(str(v) for v in alt) for alt in self.alternatives)
        return f"{self.name}: {rendered}"


@dataclass(frozen=True)
class Description:
    """Comment body preceding a rule, kept exactly as written.

    The text may carry ``@title`` and ``@abstract`` tags, one per line::

        /* @title Major roads
         * @abstract Motorways and trunk roads */
    """

    text: str = ""

    def __bool__(self) -> bool:
        return bool(self.text.strip())

    def _tag(self, name: str) -> str | None:
        for match in _TAG_RE.finditer(self.text):
            if match.group("tag") == name:
                return match.group("text")
        return None

    @property
    def title(self) -> str:
        """The ``@title`` tag, or the whole trimmed text when untagged."""
        tagged = self._tag("title")
        if tagged is not None:
            return tagged
        if self._tag("abstract") is not None:
            return ""
        return self.text.strip()

    @property
    def abstract(self) -> str | None:
        return self._tag("abstract")

    def __str__(self) -> str:
        return self.text
