"""Decide what a bracketed ``[...]`` text means from where it occurs.

The same bracket notation carries either a boolean filter (selector
position) or a scalar expression (value position). Each position lists the
interpretations it accepts, in order; the first one the engine accepts wins.
The interpretations a position does not accept are only consulted to explain
a failure, never used as a fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from geocss.cql import CQLError, ExpressionEngine
from geocss.errors import EmbeddedExpressionError
from geocss.model.selectors import FilterExpr, Selector
from geocss.model.values import Expression, Value
from geocss.parser.cursor import Cursor

log = logging.getLogger("geocss.parser")


@dataclass(frozen=True)
class Interpretation:
    """One candidate reading of bracket text.

    Attributes:
        kind: Engine grammar to try, ``"filter"`` or ``"expression"``.
        label: Name used in error messages.
        build: Wraps the engine's handle into a model value.
    """

    kind: str
    label: str
    build: Callable[[Any], Any]

    def attempt(self, engine: ExpressionEngine, text: str) -> tuple[Any, str | None]:
        """Return ``(handle, None)`` on success or ``(None, reason)`` on rejection."""
        parse = engine.parse_filter if self.kind == "filter" else engine.parse_expression
        try:
            return parse(text), None
        except CQLError as e:
            return None, str(e)


SELECTOR_INTERPRETATIONS = (Interpretation("filter", "boolean filter", FilterExpr),)
VALUE_INTERPRETATIONS = (Interpretation("expression", "scalar expression", Expression),)


def _resolve(
    text: str,
    engine: ExpressionEngine,
    cursor: Cursor,
    position: str,
    accepted: tuple[Interpretation, ...],
    rejected: tuple[Interpretation, ...],
) -> Any:
    reasons: list[str] = []
    for candidate in accepted:
        handle, reason = candidate.attempt(engine, text)
        if reason is None:
            return candidate.build(handle)
        log.debug("Bracket %r is not a %s: %s", text, candidate.kind, reason)
        reasons.append(reason)

    wanted = " or ".join(c.label for c in accepted)
    message = f"Invalid {position} [{text}]: not a valid {wanted}"
    for rival in rejected:
        _, reason = rival.attempt(engine, text)
        if reason is None:
            message = f"Invalid {position} [{text}]: a {rival.label} is not allowed as a {position}"
            break
    raise cursor.error(EmbeddedExpressionError, message, text=text, reasons=tuple(reasons))


def resolve_as_selector(text: str, engine: ExpressionEngine, cursor: Cursor) -> Selector:
    """Interpret bracket *text* found in selector position at *cursor*."""
    return _resolve(
        text, engine, cursor, "selector", SELECTOR_INTERPRETATIONS, VALUE_INTERPRETATIONS
    )


def resolve_as_value(text: str, engine: ExpressionEngine, cursor: Cursor) -> Value:
    """Interpret bracket *text* found in value position at *cursor*."""
    return _resolve(
        text, engine, cursor, "value", VALUE_INTERPRETATIONS, SELECTOR_INTERPRETATIONS
    )
