"""Selector and rendering-context types.

Selectors form a closed set of frozen dataclasses:

    Accept          matches every feature (``*``)
    Typename        matches by feature-type name
    Id              matches by feature identifier (``#roads.12``)
    PseudoSelector  numeric shorthand such as ``[@scale > 10000]``
    FilterExpr      a bracketed CQL filter
    And / Or        conjunction and disjunction of the above

An empty ``And`` is always true and an empty ``Or`` always false.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union

COMPARATORS = frozenset({">", "<", "="})


@dataclass(frozen=True)
class Accept:
    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class Typename:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Id:
    fid: str

    def __str__(self) -> str:
        return f"#{self.fid}"


@dataclass(frozen=True)
class PseudoSelector:
    """Compare a pseudo attribute (e.g. ``scale``) against a number."""

    attribute: str
    comparator: str
    value: float

    def __post_init__(self) -> None:
        if self.comparator not in COMPARATORS:
            raise ValueError(f"Invalid comparator: {self.comparator!r}")

    def __str__(self) -> str:
        return f"[@{self.attribute}{self.comparator}{self.value:g}]"


@dataclass(frozen=True)
class FilterExpr:
    """A boolean filter; *filter* is the engine's handle."""

    filter: Any

    def __str__(self) -> str:
        return f"[{self.filter}]"


@dataclass(frozen=True)
class And:
    children: tuple[Selector, ...] = ()

    def __str__(self) -> str:
        if not self.children:
            return "*"
        return "".join(str(c) for c in self.children)


@dataclass(frozen=True)
class Or:
    children: tuple[Selector, ...] = ()

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.children)


Selector = Union[Accept, Typename, Id, PseudoSelector, FilterExpr, And, Or]


def all_of(selectors: Iterable[Selector]) -> Selector:
    """Conjunction of *selectors*; a single selector is returned unwrapped."""
    items = tuple(selectors)
    if len(items) == 1:
        return items[0]
    return And(items)


def any_of(selectors: Iterable[Selector]) -> Selector:
    """Disjunction of *selectors*; a single selector is returned unwrapped."""
    items = tuple(selectors)
    if len(items) == 1:
        return items[0]
    return Or(items)


# ---------------------------------------------------------------------------
# Rendering contexts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PseudoClass:
    """A rendering sub-pass such as ``:mark`` or ``:stroke``."""

    name: str

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class ParameterizedPseudoClass:
    """A numbered sub-pass such as ``:nth-mark(2)``; *argument* keeps the source text."""

    name: str
    argument: str

    def __str__(self) -> str:
        return f":{self.name}({self.argument})"


Context = Union[PseudoClass, ParameterizedPseudoClass]

SELECTOR_TYPES = (Accept, Typename, Id, PseudoSelector, FilterExpr, And, Or)
CONTEXT_TYPES = (PseudoClass, ParameterizedPseudoClass)
