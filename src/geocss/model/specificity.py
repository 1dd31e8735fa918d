"""Cascade priority of a selector."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Specificity:
    """Weight of a selector, compared tier by tier.

    Specificity values:
        ids     = number of ``#fid`` selectors
        filters = number of ``[...]`` filters and ``[@attr>n]`` shorthands
        types   = number of feature-type names

    Any count in a higher tier outweighs every combination of lower tiers.
    """

    ids: int = 0
    filters: int = 0
    types: int = 0

    def __add__(self, other: Specificity) -> Specificity:
        if not isinstance(other, Specificity):
            return NotImplemented
        return Specificity(
            ids=self.ids + other.ids,
            filters=self.filters + other.filters,
            types=self.types + other.types,
        )

    def __str__(self) -> str:
        return f"{self.ids},{self.filters},{self.types}"


ZERO = Specificity()
