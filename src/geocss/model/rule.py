"""Rule: a selector paired with property blocks per rendering context."""

from __future__ import annotations

from dataclasses import dataclass, field

from geocss.model.selectors import Context, Selector
from geocss.model.values import Description, Property

Binding = tuple["Context | None", tuple[Property, ...]]


@dataclass(frozen=True)
class Rule:
    """A single output rule of a parsed stylesheet.

    Attributes:
        description: Comment text preceding the rule in the source.
        selector: Combined selector, normally an ``Or`` of conjunctions.
        bindings: One ``(context, properties)`` pair per selector member;
            ``context`` is None for the default rendering pass.
    """

    description: Description
    selector: Selector
    bindings: tuple[Binding, ...] = field(default_factory=tuple)

    @property
    def contexts(self) -> list[Context | None]:
        return [context for context, _ in self.bindings]

    def properties_for(self, context: Context | None) -> list[Property]:
        """Return every property bound to *context*, in binding order."""
        found: list[Property] = []
        for bound, properties in self.bindings:
            if bound == context:
                found.extend(properties)
        return found

    def __str__(self) -> str:
        lines = []
        if self.description:
            lines.append(f"/*{self.description}*/")
        lines.append(f"{self.selector} {{")
        for context, properties in self.bindings:
            prefix = f"  {context} " if context is not None else "  "
            body = "; ".join(str(p) for p in properties)
            lines.append(f"{prefix}{{ {body}; }}")
        lines.append("}")
        return "\n".join(lines)
