"""Specificity and grouping: turn one parsed selector list into output rules.

A rule such as ``#a, * { fill: red; }`` names selectors of different
specificity. A cascade orders rules by specificity, so those selectors must
not share one disjunction; they are split into one rule per distinct
specificity, in order of first occurrence. Each member keeps its own
rendering context as a separate binding of the shared property block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from geocss.model.rule import Rule
from geocss.model.selectors import (
    CONTEXT_TYPES,
    Accept,
    And,
    Context,
    FilterExpr,
    Id,
    Or,
    PseudoSelector,
    Selector,
    Typename,
    all_of,
    any_of,
)
from geocss.model.specificity import ZERO, Specificity
from geocss.model.values import Description, Property

log = logging.getLogger("geocss.parser")

Token = Union[Selector, Context]

_WEIGHTS: dict[type, Specificity] = {
    Id: Specificity(ids=1),
    PseudoSelector: Specificity(filters=1),
    FilterExpr: Specificity(filters=1),
    Typename: Specificity(types=1),
    Accept: ZERO,
}


def compute_specificity(selector: Selector) -> Specificity:
    """Return the cascade weight of *selector*.

    ``And`` sums its children. ``Or`` has no single weight and raises
    ``TypeError``; score its members instead.
    """
    if isinstance(selector, And):
        total = ZERO
        for child in selector.children:
            total = total + compute_specificity(child)
        return total
    if isinstance(selector, Or):
        raise TypeError("A disjunction has no specificity; score each member")
    try:
        return _WEIGHTS[type(selector)]
    except KeyError:
        raise TypeError(f"Not a selector: {selector!r}") from None


@dataclass(frozen=True)
class SimpleSelector:
    """One comma-separated unit of a selector list.

    *tokens* holds selectors and contexts in source order, e.g. ``roads:stroke``
    is ``(Typename("roads"), PseudoClass("stroke"))``.
    """

    tokens: tuple[Token, ...]

    @property
    def selectors(self) -> tuple[Selector, ...]:
        return tuple(t for t in self.tokens if not isinstance(t, CONTEXT_TYPES))

    @property
    def selector(self) -> Selector:
        return all_of(self.selectors)

    @property
    def context(self) -> Context | None:
        for token in self.tokens:
            if isinstance(token, CONTEXT_TYPES):
                return token
        return None

    @property
    def specificity(self) -> Specificity:
        total = ZERO
        for selector in self.selectors:
            total = total + compute_specificity(selector)
        return total


def split(
    simple_selectors: Sequence[SimpleSelector],
    properties: Iterable[Property],
    description: Description = Description(),
) -> list[Rule]:
    """Group *simple_selectors* by specificity into output rules.

    Groups keep the order in which each distinct specificity first appears.
    Every member contributes one ``(context, properties)`` binding; identical
    bindings are kept, not merged.
    """
    block = tuple(properties)
    groups: dict[Specificity, list[SimpleSelector]] = {}
    for simple in simple_selectors:
        groups.setdefault(simple.specificity, []).append(simple)

    rules = [
        Rule(
            description=description,
            selector=any_of(member.selector for member in members),
            bindings=tuple((member.context, block) for member in members),
        )
        for members in groups.values()
    ]
    if len(rules) > 1:
        log.debug(
            "Split %d selectors into %d rules by specificity",
            len(simple_selectors),
            len(rules),
        )
    return rules


def _members(rule: Rule) -> list[Selector]:
    if isinstance(rule.selector, Or) and len(rule.selector.children) == len(rule.bindings):
        return list(rule.selector.children)
    return [rule.selector]


def decompose(rule: Rule) -> list[tuple[SimpleSelector, tuple[Property, ...]]]:
    """Recover the simple selectors of *rule*, each with its property block."""
    members = _members(rule)
    if len(members) != len(rule.bindings):
        raise ValueError(
            f"Rule has {len(members)} selector members but {len(rule.bindings)} bindings"
        )
    recovered = []
    for selector, (context, properties) in zip(members, rule.bindings):
        tokens: list[Token] = list(selector.children) if isinstance(selector, And) else [selector]
        if context is not None:
            tokens.append(context)
        recovered.append((SimpleSelector(tuple(tokens)), properties))
    return recovered


def regroup(rule: Rule) -> list[Rule]:
    """Run grouping again over an output rule.

    A rule produced by ``split`` already has uniform specificity, so this
    returns ``[rule]`` for it.
    """
    recovered = decompose(rule)
    if len({properties for _, properties in recovered}) > 1:
        raise ValueError("Cannot regroup a rule whose bindings carry different blocks")
    properties = recovered[0][1] if recovered else ()
    return split([simple for simple, _ in recovered], properties, rule.description)


def rule_specificity(rule: Rule) -> Specificity:
    """Specificity shared by the members of *rule*; the highest if they differ."""
    selector = rule.selector
    members = selector.children if isinstance(selector, Or) else (selector,)
    return max((compute_specificity(m) for m in members), default=ZERO)


def sort_by_specificity(rules: Iterable[Rule]) -> list[Rule]:
    """Stable ascending cascade order: later rules override earlier ones."""
    return sorted(rules, key=rule_specificity)
