from geocss.model.rule import Binding, Rule
from geocss.model.selectors import (
    Accept,
    And,
    Context,
    FilterExpr,
    Id,
    Or,
    ParameterizedPseudoClass,
    PseudoClass,
    PseudoSelector,
    Selector,
    Typename,
    all_of,
    any_of,
)
from geocss.model.specificity import ZERO, Specificity
from geocss.model.values import Description, Expression, Function, Literal, Property, Value

__all__ = [
    "Accept",
    "And",
    "Binding",
    "Context",
    "Description",
    "Expression",
    "FilterExpr",
    "Function",
    "Id",
    "Literal",
    "Or",
    "ParameterizedPseudoClass",
    "Property",
    "PseudoClass",
    "PseudoSelector",
    "Rule",
    "Selector",
    "Specificity",
    "Typename",
    "Value",
    "ZERO",
    "all_of",
    "any_of",
]
