"""Protocol for consumers that turn parsed rules into renderer styles."""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

from geocss.model.rule import Rule

T_co = TypeVar("T_co", covariant=True)


class RuleTranslator(Protocol[T_co]):
    """A rule-to-style-fragment translation step."""

    def translate(self, rule: Rule) -> T_co: ...


def for_each_rule(rules: Iterable[Rule], translator: RuleTranslator[T_co]) -> list[T_co]:
    """Translate *rules* in order and collect the fragments."""
    return [translator.translate(rule) for rule in rules]
