"""Lexical classes of the stylesheet language.

Literal classes are tried in a fixed order: percentage, measured number,
plain number, quoted string, color.
"""

from __future__ import annotations

import re

from geocss.errors import LexicalError
from geocss.parser.cursor import Cursor

IDENTIFIER = re.compile(r"[a-zA-Z](?:[a-zA-Z0-9]|[-_][a-zA-Z0-9])*")
FID = re.compile(r"[a-zA-Z](?:[a-zA-Z0-9]|[-._][a-zA-Z0-9])*")
PROPNAME = re.compile(r"-?[a-zA-Z][_a-zA-Z0-9\-]*")

NUMBER = re.compile(r"-?[0-9]*(?:[0-9]\.|\.[0-9]|[0-9])[0-9]*")
MEASURE = re.compile(r"(?:[0-9]*\.[0-9]+|[0-9]+)[a-zA-Z]+")
PERCENTAGE = re.compile(r"-?(?:[0-9]*\.[0-9]+|[0-9]+)%")
COLOR = re.compile(r"#(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})(?![0-9A-Za-z_-])")
URL = re.compile(r"url\(([.!#$%&*-~:/\w]+)\)")

PSEUDO_NUMERIC = re.compile(
    r"\[@\s*(?P<attribute>[a-zA-Z](?:[a-zA-Z0-9]|[-_][a-zA-Z0-9])*)\s*"
    r"(?P<comparator>[<>=])\s*"
    r"(?P<number>-?[0-9]*(?:[0-9]\.|\.[0-9]|[0-9])[0-9]*)\s*\]"
)

LITERALS = (PERCENTAGE, MEASURE, NUMBER)

QUOTES = "\"'"


def scan_string(cursor: Cursor) -> tuple[str, Cursor]:
    """Read a quoted string starting at *cursor*; return the unquoted body.

    A backslash escapes the closing quote character.
    """
    quote = cursor.peek()
    text = cursor.text
    i = cursor.offset + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            i += 2
            continue
        if ch == quote:
            body = text[cursor.offset + 1:i]
            return body.replace("\\" + quote, quote), cursor.at(i + 1)
        i += 1
    raise cursor.error(LexicalError, "Unterminated string", expected=quote)


def scan_bracket(cursor: Cursor) -> tuple[str, Cursor]:
    """Capture the raw text of a ``[...]`` bracket starting at *cursor*.

    Quoted runs are opaque so a ``]`` inside a string literal does not close
    the bracket; unquoted brackets must balance.
    """
    text = cursor.text
    depth = 0
    i = cursor.offset
    while i < len(text):
        ch = text[i]
        if ch in QUOTES:
            end = text.find(ch, i + 1)
            if end < 0:
                raise cursor.at(i).error(LexicalError, "Unterminated string in bracket", expected=ch)
            i = end + 1
            continue
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[cursor.offset + 1:i], cursor.at(i + 1)
        i += 1
    raise cursor.error(LexicalError, "Unterminated bracket", expected="']'")
