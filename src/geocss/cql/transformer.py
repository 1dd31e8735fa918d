"""Lark Transformer that converts a CQL parse tree into CQL nodes."""

from __future__ import annotations

from lark import Token, Transformer

from geocss.cql.nodes import (
    Arithmetic,
    Attribute,
    Between,
    Comparison,
    Conjunction,
    CqlExpression,
    CqlFilter,
    Disjunction,
    Exclude,
    FunctionCall,
    IdFilter,
    Include,
    InList,
    IsNull,
    Like,
    LiteralValue,
    Negate,
    Negation,
    TemporalValue,
)


def _unquote(raw: str) -> str:
    """Strip single quotes and collapse doubled quotes."""
    return raw[1:-1].replace("''", "'")


class CqlTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into immutable CQL nodes."""

    # ---- expressions ----

    def number(self, items: list[Token]) -> LiteralValue:
        raw = str(items[0])
        if any(c in raw for c in ".eE"):
            return LiteralValue(float(raw))
        return LiteralValue(int(raw))

    def datetime(self, items: list[Token]) -> TemporalValue:
        return TemporalValue(str(items[0]))

    def string(self, items: list[Token]) -> LiteralValue:
        return LiteralValue(_unquote(str(items[0])))

    def attribute(self, items: list[Token]) -> Attribute:
        return Attribute(str(items[0]))

    def quoted_attribute(self, items: list[Token]) -> Attribute:
        return Attribute(str(items[0])[1:-1])

    def arguments(self, items: list[CqlExpression]) -> list[CqlExpression]:
        return list(items)

    def function(self, items: list[object]) -> FunctionCall:
        name = str(items[0])
        args = items[1] if len(items) > 1 and items[1] is not None else []
        return FunctionCall(name, tuple(args))  # type: ignore[arg-type]

    def arithmetic(self, items: list[object]) -> Arithmetic:
        left, operator, right = items
        return Arithmetic(str(operator), left, right)  # type: ignore[arg-type]

    def negate(self, items: list[object]) -> CqlExpression:
        operand = items[-1]
        if isinstance(operand, LiteralValue) and not isinstance(operand.value, str):
            return LiteralValue(-operand.value)
        return Negate(operand)  # type: ignore[arg-type]

    # ---- filters ----

    def include(self, items: list[Token]) -> Include:
        return Include()

    def exclude(self, items: list[Token]) -> Exclude:
        return Exclude()

    def comparison(self, items: list[object]) -> Comparison:
        left, operator, right = items
        op = "<>" if str(operator) == "!=" else str(operator)
        return Comparison(op, left, right)  # type: ignore[arg-type]

    def between(self, items: list[object]) -> Between:
        expression, negated, lower, upper = items
        return Between(expression, lower, upper, negated=negated is not None)  # type: ignore[arg-type]

    def like(self, items: list[object]) -> Like:
        expression, negated, keyword, pattern = items
        return Like(
            expression,  # type: ignore[arg-type]
            _unquote(str(pattern)),
            negated=negated is not None,
            case_insensitive=str(keyword).lower() == "ilike",
        )

    def is_null(self, items: list[object]) -> IsNull:
        expression, negated = items
        return IsNull(expression, negated=negated is not None)  # type: ignore[arg-type]

    def in_list(self, items: list[object]) -> InList:
        expression, negated, values = items
        return InList(expression, tuple(values), negated=negated is not None)  # type: ignore[arg-type]

    def id_filter(self, items: list[Token]) -> IdFilter:
        return IdFilter(tuple(_unquote(str(t)) for t in items))

    def not_filter(self, items: list[object]) -> Negation:
        return Negation(items[-1])  # type: ignore[arg-type]

    def conjunction(self, items: list[CqlFilter]) -> Conjunction:
        return Conjunction(tuple(items))

    def disjunction(self, items: list[CqlFilter]) -> Disjunction:
        return Disjunction(tuple(items))
