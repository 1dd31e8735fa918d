"""Immutable CQL syntax nodes produced by the default engine.

Expressions evaluate to a scalar, filters to a boolean. Both render back to
CQL text with ``str()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Attribute:
    """A feature attribute reference."""

    name: str

    def __str__(self) -> str:
        if self.name.replace("_", "").replace(".", "").isalnum():
            return self.name
        return f'"{self.name}"'


@dataclass(frozen=True)
class LiteralValue:
    value: str | int | float

    def __str__(self) -> str:
        if isinstance(self.value, str):
            return _quote(self.value)
        return repr(self.value)


@dataclass(frozen=True)
class TemporalValue:
    """An ISO 8601 date or date-time literal, kept as written."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class FunctionCall:
    name: str
    args: tuple[CqlExpression, ...] = ()

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


@dataclass(frozen=True)
class Arithmetic:
    operator: str  # "+", "-", "*", "/"
    left: CqlExpression
    right: CqlExpression

    def __str__(self) -> str:
        return f"{_operand(self.left)} {self.operator} {_operand(self.right)}"


@dataclass(frozen=True)
class Negate:
    operand: CqlExpression

    def __str__(self) -> str:
        return f"-{_operand(self.operand)}"


CqlExpression = Union[Attribute, LiteralValue, TemporalValue, FunctionCall, Arithmetic, Negate]


def _operand(expr: CqlExpression) -> str:
    if isinstance(expr, (Arithmetic, Negate)):
        return f"({expr})"
    return str(expr)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Include:
    def __str__(self) -> str:
        return "INCLUDE"


@dataclass(frozen=True)
class Exclude:
    def __str__(self) -> str:
        return "EXCLUDE"


@dataclass(frozen=True)
class Comparison:
    operator: str  # "=", "<>", "<", ">", "<=", ">="
    left: CqlExpression
    right: CqlExpression

    def __str__(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class Between:
    expression: CqlExpression
    lower: CqlExpression
    upper: CqlExpression
    negated: bool = False

    def __str__(self) -> str:
        keyword = "NOT BETWEEN" if self.negated else "BETWEEN"
        return f"{self.expression} {keyword} {self.lower} AND {self.upper}"


@dataclass(frozen=True)
class Like:
    expression: CqlExpression
    pattern: str
    negated: bool = False
    case_insensitive: bool = False

    def __str__(self) -> str:
        keyword = "ILIKE" if self.case_insensitive else "LIKE"
        if self.negated:
            keyword = f"NOT {keyword}"
        return f"{self.expression} {keyword} {_quote(self.pattern)}"


@dataclass(frozen=True)
class IsNull:
    expression: CqlExpression
    negated: bool = False

    def __str__(self) -> str:
        return f"{self.expression} IS {'NOT ' if self.negated else ''}NULL"


@dataclass(frozen=True)
class InList:
    expression: CqlExpression
    values: tuple[CqlExpression, ...]
    negated: bool = False

    def __str__(self) -> str:
        keyword = "NOT IN" if self.negated else "IN"
        return f"{self.expression} {keyword} ({', '.join(str(v) for v in self.values)})"


@dataclass(frozen=True)
class IdFilter:
    """Matches features by identifier: ``IN ('roads.1', 'roads.2')``."""

    ids: tuple[str, ...]

    def __str__(self) -> str:
        return f"IN ({', '.join(_quote(i) for i in self.ids)})"


@dataclass(frozen=True)
class Conjunction:
    children: tuple[CqlFilter, ...]

    def __str__(self) -> str:
        return " AND ".join(
            f"({c})" if isinstance(c, Disjunction) else str(c) for c in self.children
        )


@dataclass(frozen=True)
class Disjunction:
    children: tuple[CqlFilter, ...]

    def __str__(self) -> str:
        return " OR ".join(str(c) for c in self.children)


@dataclass(frozen=True)
class Negation:
    child: CqlFilter

    def __str__(self) -> str:
        return f"NOT ({self.child})"


CqlFilter = Union[
    Include,
    Exclude,
    Comparison,
    Between,
    Like,
    IsNull,
    InList,
    IdFilter,
    Conjunction,
    Disjunction,
    Negation,
]
