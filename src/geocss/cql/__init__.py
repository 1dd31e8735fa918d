"""Embedded filter/expression language used inside ``[...]`` brackets.

Grammar (subset of ECQL):
    Filter     = Filter OR Filter | Filter AND Filter | NOT Filter | Predicate
    Predicate  = Expr Cmp Expr | Expr [NOT] BETWEEN Expr AND Expr
               | Expr [NOT] (LIKE|ILIKE) 'pattern' | Expr IS [NOT] NULL
               | Expr [NOT] IN (Expr, ...) | IN ('fid', ...)
               | INCLUDE | EXCLUDE | ( Filter )
    Expr       = Expr (+|-|*|/) Expr | -Expr | Number | Date | 'string'
               | attribute | "attribute" | name(Expr, ...) | ( Expr )
"""

from geocss.cql.engine import EcqlEngine, ExpressionEngine
from geocss.cql.errors import CQLError

__all__ = ["CQLError", "EcqlEngine", "ExpressionEngine"]
