from geocss.errors import CssSyntaxError, EmbeddedExpressionError, LexicalError, ParseError
from geocss.parser.cursor import Cursor
from geocss.parser.grammar import CssParser, parse_file, parse_stylesheet
from geocss.parser.resolver import resolve_as_selector, resolve_as_value

__all__ = [
    "CssParser",
    "CssSyntaxError",
    "Cursor",
    "EmbeddedExpressionError",
    "LexicalError",
    "ParseError",
    "parse_file",
    "parse_stylesheet",
    "resolve_as_selector",
    "resolve_as_value",
]
