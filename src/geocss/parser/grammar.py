"""Recursive-descent parser for CSS-like map stylesheets.

Syntax example:
    /* @title Populous states */
    states[population > 10000000] {
        fill: #4444ff;
        fill-opacity: 50%;
    }
    roads:stroke, rivers:stroke { stroke-width: [lanes * 2] 1px; }

Every production takes a ``Cursor`` and returns ``(result, next_cursor)``.
Failure raises a ``ParseError`` positioned at the offending text.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import IO, Union

from geocss.config import ParserConfig
from geocss.errors import CssSyntaxError, LexicalError
from geocss.grouping import SimpleSelector, Token, split
from geocss.model.rule import Rule
from geocss.model.selectors import (
    Accept,
    Id,
    ParameterizedPseudoClass,
    PseudoClass,
    PseudoSelector,
    Selector,
    Typename,
)
from geocss.model.values import Description, Function, Literal, Property, Value
from geocss.parser import lexical
from geocss.parser.cursor import Cursor
from geocss.parser.resolver import resolve_as_selector, resolve_as_value

__all__ = ["CssParser", "parse_stylesheet", "parse_file"]

log = logging.getLogger("geocss.parser")


def _expect(cursor: Cursor, literal: str, context: str) -> Cursor:
    """Skip space, require *literal*, and return the cursor after it."""
    cursor = cursor.skip_space()
    if not cursor.startswith(literal):
        raise cursor.error(CssSyntaxError, context, expected=repr(literal))
    return cursor.advance(len(literal))


class CssParser:
    """Stylesheet parser bound to a configuration.

    The parser keeps no state between calls, so one instance may serve
    several threads at once.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    # ---- entry points ----

    def parse(self, source: Union[str, IO[str]]) -> list[Rule]:
        """Parse a whole stylesheet from text or a readable text stream."""
        text = source if isinstance(source, str) else source.read()
        cursor = Cursor(text)
        rules: list[Rule] = []
        while True:
            comments, cursor = self._comments(cursor)
            if cursor.at_end:
                break
            description = Description(comments[-1]) if comments else Description()
            produced, cursor = self._rule(cursor, description)
            rules.extend(produced)
        log.debug("Parsed %d rules from %d characters", len(rules), len(text))
        return rules

    def parse_file(self, path: Union[str, Path]) -> list[Rule]:
        return self.parse(Path(path).read_text(encoding=self.config.encoding))

    # ---- structural ----

    def _comments(self, cursor: Cursor) -> tuple[list[str], Cursor]:
        """Read the run of comments before a rule."""
        comments: list[str] = []
        cursor = cursor.skip_whitespace()
        while cursor.startswith("/*"):
            body, cursor = cursor.read_comment()
            comments.append(body)
            cursor = cursor.skip_whitespace()
        return comments, cursor

    def _rule(self, cursor: Cursor, description: Description) -> tuple[list[Rule], Cursor]:
        simple_selectors, cursor = self._selector_list(cursor)
        properties, cursor = self._block(cursor)
        return split(simple_selectors, properties, description), cursor

    def _selector_list(self, cursor: Cursor) -> tuple[list[SimpleSelector], Cursor]:
        first, cursor = self._simple_selector(cursor)
        selectors = [first]
        while True:
            after = cursor.skip_space()
            if not after.startswith(","):
                return selectors, cursor
            simple, cursor = self._simple_selector(after.advance(1))
            selectors.append(simple)

    def _simple_selector(self, cursor: Cursor) -> tuple[SimpleSelector, Cursor]:
        tokens: list[Token] = []
        while True:
            start = cursor.skip_space()
            matched = self._selector_token(start)
            if matched is None:
                break
            token, cursor = matched
            tokens.append(token)
        if not tokens:
            raise start.error(CssSyntaxError, "Missing selector", expected="a selector")
        return SimpleSelector(tuple(tokens)), cursor

    def _selector_token(self, cursor: Cursor) -> tuple[Token, Cursor] | None:
        ch = cursor.peek()
        if ch == "*":
            return Accept(), cursor.advance(1)
        if ch == "#":
            return self._id_selector(cursor)
        if ch == ":":
            return self._pseudo_element(cursor)
        if ch == "[":
            return self._bracket_selector(cursor)
        matched = cursor.match(lexical.IDENTIFIER)
        if matched is not None:
            m, after = matched
            return Typename(m.group(0)), after
        return None

    def _id_selector(self, cursor: Cursor) -> tuple[Id, Cursor]:
        start = cursor.advance(1).skip_space()
        matched = start.match(lexical.FID)
        if matched is None:
            raise start.error(CssSyntaxError, "Invalid id selector", expected="a feature id")
        m, after = matched
        return Id(m.group(0)), after

    def _pseudo_element(self, cursor: Cursor) -> tuple[PseudoClass | ParameterizedPseudoClass, Cursor]:
        start = cursor.advance(1).skip_space()
        matched = start.match(lexical.IDENTIFIER)
        if matched is None:
            raise start.error(CssSyntaxError, "Invalid pseudo-class", expected="a pseudo-class name")
        m, after = matched
        name = m.group(0)
        opening = after.skip_space()
        if not opening.startswith("("):
            return PseudoClass(name), after
        arg_start = opening.advance(1).skip_space()
        number = arg_start.match(lexical.NUMBER)
        if number is None:
            raise arg_start.error(CssSyntaxError, f"Invalid argument to :{name}", expected="a number")
        n, after = number
        after = _expect(after, ")", f"Unclosed argument to :{name}")
        return ParameterizedPseudoClass(name, n.group(0)), after

    def _bracket_selector(self, cursor: Cursor) -> tuple[Selector, Cursor]:
        matched = cursor.match(lexical.PSEUDO_NUMERIC)
        if matched is not None:
            m, after = matched
            selector = PseudoSelector(
                m.group("attribute"), m.group("comparator"), float(m.group("number"))
            )
            return selector, after
        text, after = lexical.scan_bracket(cursor)
        return resolve_as_selector(text, self.config.engine, cursor), after

    def _block(self, cursor: Cursor) -> tuple[list[Property], Cursor]:
        cursor = _expect(cursor, "{", "Missing property block")
        prop, cursor = self._property(cursor)
        properties = [prop]
        while True:
            after = cursor.skip_space()
            if after.startswith(";"):
                after = after.advance(1).skip_space()
                if after.startswith("}"):
                    return properties, after.advance(1)
                prop, cursor = self._property(after)
                properties.append(prop)
            elif after.startswith("}"):
                return properties, after.advance(1)
            elif after.at_end:
                raise after.error(CssSyntaxError, "Unterminated block", expected="'}'")
            else:
                raise after.error(CssSyntaxError, "Invalid property list", expected="';' or '}'")

    def _property(self, cursor: Cursor) -> tuple[Property, Cursor]:
        start = cursor.skip_space()
        matched = start.match(lexical.PROPNAME)
        if matched is None:
            raise start.error(CssSyntaxError, "Missing property", expected="a property name")
        m, cursor = matched
        name = m.group(0)
        cursor = _expect(cursor, ":", f"Invalid property {name!r}")
        values, cursor = self._value_list(cursor, name)
        alternatives = [values]
        while True:
            after = cursor.skip_space()
            if not after.startswith(","):
                return Property(name, tuple(alternatives)), cursor
            values, cursor = self._value_list(after.advance(1), name)
            alternatives.append(values)

    # ---- values ----

    def _value_list(self, cursor: Cursor, name: str) -> tuple[tuple[Value, ...], Cursor]:
        values: list[Value] = []
        while True:
            start = cursor.skip_space()
            matched = self._value(start)
            if matched is None:
                break
            value, cursor = matched
            values.append(value)
        if not values:
            raise start.error(CssSyntaxError, f"Missing value for {name!r}", expected="a value")
        return tuple(values), cursor

    def _value(self, cursor: Cursor) -> tuple[Value, Cursor] | None:
        url = cursor.match(lexical.URL)
        if url is not None:
            m, after = url
            return Function("url", (Literal(m.group(1)),)), after

        ident = cursor.match(lexical.IDENTIFIER)
        if ident is not None:
            m, after = ident
            if after.skip_space().startswith("("):
                return self._function(m.group(0), after.skip_space().advance(1))
            return Literal(m.group(0)), after

        for pattern in lexical.LITERALS:
            matched = cursor.match(pattern)
            if matched is not None:
                m, after = matched
                return Literal(m.group(0)), after

        ch = cursor.peek()
        if ch and ch in lexical.QUOTES:
            body, after = lexical.scan_string(cursor)
            return Literal(body), after
        if ch == "#":
            color = cursor.match(lexical.COLOR)
            if color is None:
                raise cursor.error(LexicalError, "Malformed color", expected="3 or 6 hex digits")
            m, after = color
            return Literal(m.group(0)), after
        if ch == "[":
            text, after = lexical.scan_bracket(cursor)
            return resolve_as_value(text, self.config.engine, cursor), after
        return None

    def _function(self, name: str, cursor: Cursor) -> tuple[Function, Cursor]:
        """Parse call arguments; *cursor* is just past the opening parenthesis."""
        after = cursor.skip_space()
        if after.startswith(")"):
            return Function(name), after.advance(1)
        args: list[Value] = []
        while True:
            start = cursor.skip_space()
            matched = self._value(start)
            if matched is None:
                raise start.error(CssSyntaxError, f"Invalid argument to {name}()", expected="a value")
            value, cursor = matched
            args.append(value)
            after = cursor.skip_space()
            if after.startswith(","):
                cursor = after.advance(1)
            elif after.startswith(")"):
                return Function(name, tuple(args)), after.advance(1)
            else:
                raise after.error(CssSyntaxError, f"Unclosed call to {name}()", expected="',' or ')'")


_default_parser: CssParser | None = None
_default_lock = threading.Lock()


def _parser() -> CssParser:
    global _default_parser
    with _default_lock:
        if _default_parser is None:
            _default_parser = CssParser()
        return _default_parser


def parse_stylesheet(source: Union[str, IO[str]]) -> list[Rule]:
    """Parse a stylesheet with the default configuration.

    Returns all rules in source order, after splitting by specificity.
    Raises ``ParseError`` on the first error; no partial result is returned.
    """
    return _parser().parse(source)


def parse_file(path: Union[str, Path]) -> list[Rule]:
    """Parse the stylesheet stored at *path*."""
    return _parser().parse_file(path)
