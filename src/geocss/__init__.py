"""geocss: CSS-like map stylesheets with embedded CQL filters."""

from geocss.config import ParserConfig
from geocss.errors import CssSyntaxError, EmbeddedExpressionError, LexicalError, ParseError
from geocss.grouping import compute_specificity, regroup, sort_by_specificity, split
from geocss.model import Rule
from geocss.parser import CssParser, parse_file, parse_stylesheet
from geocss.translate import RuleTranslator, for_each_rule

__version__ = "0.3.0"

__all__ = [
    "CssParser",
    "CssSyntaxError",
    "EmbeddedExpressionError",
    "LexicalError",
    "ParseError",
    "ParserConfig",
    "Rule",
    "RuleTranslator",
    "compute_specificity",
    "for_each_rule",
    "parse_file",
    "parse_stylesheet",
    "regroup",
    "sort_by_specificity",
    "split",
]
