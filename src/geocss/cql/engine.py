"""Engines for the embedded filter/expression language."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Protocol

from lark import Lark
from lark.exceptions import LarkError, UnexpectedInput

from geocss.cql.errors import CQLError
from geocss.cql.nodes import CqlExpression, CqlFilter
from geocss.cql.transformer import CqlTransformer

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

log = logging.getLogger("geocss.cql")


class ExpressionEngine(Protocol):
    """The two entry points the stylesheet parser needs.

    Each returns an opaque handle, or raises ``CQLError`` when the text is
    not accepted by that grammar.
    """

    def parse_filter(self, text: str) -> Any: ...

    def parse_expression(self, text: str) -> Any: ...


class EcqlEngine:
    """Default engine backed by a Lark grammar for a subset of ECQL.

    Parses are serialized on an internal lock so one engine can be shared by
    parsers running in several threads.
    """

    def __init__(self) -> None:
        self._parser = Lark(
            GRAMMAR_PATH.read_text(),
            parser="earley",
            start=["filter", "expression"],
            maybe_placeholders=True,
        )
        self._transformer = CqlTransformer()
        self._lock = threading.Lock()

    def _parse(self, text: str, start: str) -> Any:
        try:
            with self._lock:
                tree = self._parser.parse(text, start=start)
        except UnexpectedInput as e:
            log.debug("CQL %s rejected %r: %s", start, text, e)
            column = getattr(e, "column", None)
            raise CQLError(
                f"Not a valid CQL {start}: {text!r} ({type(e).__name__} at column {column})",
                text=text,
                column=column if isinstance(column, int) else None,
            ) from e
        except LarkError as e:
            log.debug("CQL %s rejected %r: %s", start, text, e)
            raise CQLError(f"Not a valid CQL {start}: {text!r}", text=text) from e
        return self._transformer.transform(tree)

    def parse_filter(self, text: str) -> CqlFilter:
        return self._parse(text, "filter")

    def parse_expression(self, text: str) -> CqlExpression:
        return self._parse(text, "expression")
