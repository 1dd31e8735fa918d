"""Comprehensive tests for the stylesheet parser."""

import io
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from geocss import CssParser, ParserConfig, parse_file, parse_stylesheet
from geocss.cql.nodes import Arithmetic, Attribute, Comparison, LiteralValue
from geocss.errors import CssSyntaxError, EmbeddedExpressionError, LexicalError, ParseError
from geocss.model import (
    Accept,
    And,
    Description,
    Expression,
    FilterExpr,
    Function,
    Id,
    Literal,
    Or,
    ParameterizedPseudoClass,
    Property,
    PseudoClass,
    PseudoSelector,
    Rule,
    Typename,
)
from geocss.parser import grammar

FIXTURES = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _single(source: str) -> Rule:
    rules = parse_stylesheet(source)
    assert len(rules) == 1
    return rules[0]


def _values(source: str) -> tuple:
    """Parse ``* { p: <source>; }`` and return the alternatives of ``p``."""
    rule = _single(f"* {{ p: {source}; }}")
    (prop,) = rule.bindings[0][1]
    return prop.alternatives


# ---------------------------------------------------------------------------
# Basic shapes
# ---------------------------------------------------------------------------


class TestBasicRules:
    def test_accept_rule(self):
        rule = _single("* { fill: red; }")
        assert rule.selector == Accept()
        assert rule.bindings == ((None, (Property("fill", ((Literal("red"),),)),)),)
        assert rule.description == Description()

    def test_multi_value_alternatives(self):
        rule = _single("#a { stroke-width: 2 4, 1 1; }")
        assert rule.selector == Id("a")
        (prop,) = rule.bindings[0][1]
        assert prop == Property(
            "stroke-width",
            ((Literal("2"), Literal("4")), (Literal("1"), Literal("1"))),
        )

    def test_multiple_properties(self):
        rule = _single("roads { stroke: black; stroke-width: 2; }")
        names = [p.name for p in rule.bindings[0][1]]
        assert names == ["stroke", "stroke-width"]

    def test_trailing_semicolon_optional(self):
        assert _single("* { fill: red }") == _single("* { fill: red; }")

    def test_multiple_rules_in_order(self):
        rules = parse_stylesheet("A { fill: red; }\nB { fill: blue; }")
        assert [r.selector for r in rules] == [Typename("A"), Typename("B")]

    def test_empty_stylesheet(self):
        assert parse_stylesheet("") == []
        assert parse_stylesheet("   \n\t  ") == []

    def test_comments_only(self):
        assert parse_stylesheet("/* nothing here */") == []

    def test_deterministic(self):
        source = (FIXTURES / "states.css").read_text()
        assert parse_stylesheet(source) == parse_stylesheet(source)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class TestSelectors:
    def test_typename(self):
        assert _single("roads { fill: red; }").selector == Typename("roads")

    def test_fid_with_dots(self):
        assert _single("#states.1 { fill: red; }").selector == Id("states.1")

    def test_conjunction(self):
        rule = _single("states[PERSONS > 100] { fill: red; }")
        assert rule.selector == And(
            (
                Typename("states"),
                FilterExpr(Comparison(">", Attribute("PERSONS"), LiteralValue(100))),
            )
        )

    def test_pseudo_numeric(self):
        rule = _single("[@scale < 50000] { fill: red; }")
        assert rule.selector == PseudoSelector("scale", "<", 50000.0)

    def test_pseudo_numeric_without_spaces(self):
        rule = _single("[@scale>1.5] { fill: red; }")
        assert rule.selector == PseudoSelector("scale", ">", 1.5)

    def test_filter_selector(self):
        rule = _single("[population > 10000] { fill: red; }")
        assert isinstance(rule.selector, FilterExpr)
        assert rule.selector.filter == Comparison(
            ">", Attribute("population"), LiteralValue(10000)
        )

    def test_date_filter_not_read_as_arithmetic(self):
        rule = _single("[date > 2010-01-01] { fill: red; }")
        assert str(rule.selector) == "[date > 2010-01-01]"

    def test_bracket_with_quoted_bracket(self):
        rule = _single("[name = 'a]b'] { fill: red; }")
        assert rule.selector == FilterExpr(
            Comparison("=", Attribute("name"), LiteralValue("a]b"))
        )

    def test_pseudo_class(self):
        rule = _single("roads:stroke { stroke: black; }")
        assert rule.selector == Typename("roads")
        assert rule.bindings[0][0] == PseudoClass("stroke")

    def test_parameterized_pseudo_class(self):
        rule = _single("roads:nth-stroke(2) { stroke: black; }")
        assert rule.bindings[0][0] == ParameterizedPseudoClass("nth-stroke", "2")

    def test_context_preserved_without_split(self):
        rule = _single("A:mark, B:stroke { fill: red; }")
        props = (Property("fill", ((Literal("red"),),)),)
        assert rule.selector == Or((Typename("A"), Typename("B")))
        assert rule.bindings == (
            (PseudoClass("mark"), props),
            (PseudoClass("stroke"), props),
        )

    def test_split_by_specificity(self):
        rules = parse_stylesheet("#a, * { fill: red; }")
        assert [r.selector for r in rules] == [Id("a"), Accept()]
        assert rules[0].bindings == rules[1].bindings

    def test_whitespace_around_commas(self):
        rules = parse_stylesheet("A ,B , C{ fill: red; }")
        assert rules[0].selector == Or((Typename("A"), Typename("B"), Typename("C")))


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


class TestValues:
    def test_identifier(self):
        assert _values("red") == ((Literal("red"),),)

    def test_numbers(self):
        assert _values("12 -1.5 .5") == ((Literal("12"), Literal("-1.5"), Literal(".5")),)

    def test_percentage(self):
        assert _values("50%") == ((Literal("50%"),),)

    def test_measure(self):
        assert _values("10px 2.5em") == ((Literal("10px"), Literal("2.5em")),)

    def test_strings(self):
        assert _values("\"DejaVu Sans\", 'serif'") == (
            (Literal("DejaVu Sans"),),
            (Literal("serif"),),
        )

    def test_escaped_quote_in_string(self):
        assert _values('"say \\"hi\\""') == ((Literal('say "hi"'),),)

    def test_colors(self):
        assert _values("#abc #AABBCC") == ((Literal("#abc"), Literal("#AABBCC")),)

    def test_url(self):
        assert _values("url(icons/pin.png)") == (
            (Function("url", (Literal("icons/pin.png"),)),),
        )

    def test_quoted_url(self):
        assert _values("url('icons/pin.png')") == (
            (Function("url", (Literal("icons/pin.png"),)),),
        )

    def test_function(self):
        assert _values("rgb(0, 128, 255)") == (
            (Function("rgb", (Literal("0"), Literal("128"), Literal("255"))),),
        )

    def test_function_without_args(self):
        assert _values("now()") == ((Function("now"),),)

    def test_expression(self):
        assert _values("[population * 2]") == (
            (Expression(Arithmetic("*", Attribute("population"), LiteralValue(2))),),
        )

    def test_expression_among_values(self):
        (alternative,) = _values("[lanes] 1px")
        assert alternative == (Expression(Attribute("lanes")), Literal("1px"))

    def test_vendor_property_name(self):
        rule = _single("* { -gt-label-priority: 10; }")
        assert rule.bindings[0][1][0].name == "-gt-label-priority"


# ---------------------------------------------------------------------------
# Comments and descriptions
# ---------------------------------------------------------------------------


class TestComments:
    def test_comment_becomes_description(self):
        rule = _single("/* Major roads */ roads { fill: red; }")
        assert rule.description == Description(" Major roads ")
        assert rule.description.title == "Major roads"

    def test_last_comment_in_run_wins(self):
        rule = _single("/* first */\n/* second */\nroads { fill: red; }")
        assert rule.description.text == " second "

    def test_comment_body_not_trimmed(self):
        rule = _single("/*\n * Major roads\n */\nroads { fill: red; }")
        assert rule.description.text == "\n * Major roads\n "

    def test_description_not_inherited(self):
        rules = parse_stylesheet("/* one */ A { fill: red; } B { fill: blue; }")
        assert rules[0].description.text == " one "
        assert rules[1].description == Description()

    def test_comments_between_tokens(self):
        rule = _single("A /* x */ , /* y */ B { fill: /* z */ red; }")
        assert rule.selector == Or((Typename("A"), Typename("B")))

    def test_description_shared_by_split_rules(self):
        rules = parse_stylesheet("/* both */ #a, * { fill: red; }")
        assert [r.description.text for r in rules] == [" both ", " both "]

    def test_tagged_description(self):
        rules = parse_file(FIXTURES / "states.css")
        assert rules[0].description.title == "Populous states"
        assert rules[0].description.abstract == "States with more than ten million inhabitants"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_missing_colon(self):
        source = "#a { fill red }"
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_stylesheet(source)
        err = exc_info.value
        assert err.offset == source.index("red")
        assert err.line == 1
        assert err.column == source.index("red") + 1
        assert err.expected == "':'"
        assert "'red'" in str(err)

    def test_missing_selector(self):
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_stylesheet("{ fill: red; }")
        assert exc_info.value.offset == 0

    def test_missing_selector_after_comma(self):
        with pytest.raises(CssSyntaxError):
            parse_stylesheet("A, { fill: red; }")

    def test_missing_block(self):
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_stylesheet("A")
        assert exc_info.value.expected == "'{'"

    def test_unterminated_block(self):
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_stylesheet("A { fill: red")
        assert exc_info.value.expected == "'}'"

    def test_missing_value(self):
        with pytest.raises(CssSyntaxError):
            parse_stylesheet("A { fill: ; }")

    def test_empty_block(self):
        with pytest.raises(CssSyntaxError):
            parse_stylesheet("A { }")

    def test_unterminated_string(self):
        with pytest.raises(LexicalError):
            parse_stylesheet('A { font: "DejaVu; }')

    def test_unterminated_bracket(self):
        with pytest.raises(LexicalError):
            parse_stylesheet("[a = 1 { fill: red; }")

    def test_unterminated_comment(self):
        with pytest.raises(LexicalError):
            parse_stylesheet("A { fill: red; } /* never closed")

    def test_malformed_color(self):
        with pytest.raises(LexicalError):
            parse_stylesheet("A { fill: #12; }")

    def test_expression_in_selector_position(self):
        with pytest.raises(EmbeddedExpressionError):
            parse_stylesheet("[population * 2] { fill: red; }")

    def test_filter_in_value_position(self):
        with pytest.raises(EmbeddedExpressionError):
            parse_stylesheet("* { fill: [population > 2]; }")

    def test_error_on_later_line(self):
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_file(FIXTURES / "broken.css")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 10

    def test_all_errors_are_parse_errors(self):
        for cls in (CssSyntaxError, LexicalError, EmbeddedExpressionError):
            assert issubclass(cls, ParseError)

    def test_leftmost_error_reported(self):
        with pytest.raises(CssSyntaxError) as exc_info:
            parse_stylesheet("A { fill: red; }\nB { fill blue; }\nC { fill: #1; }")
        assert exc_info.value.line == 2


# ---------------------------------------------------------------------------
# Sources and configuration
# ---------------------------------------------------------------------------


class TestSources:
    def test_fixture(self):
        rules = parse_file(FIXTURES / "states.css")
        assert len(rules) == 5
        assert rules[1].selector == Or((Typename("roads"), Typename("rivers")))
        assert rules[2].selector == Id("states.1")
        assert rules[3].selector == Accept()
        assert rules[4].selector == PseudoSelector("scale", "<", 50000.0)

    def test_stream_input(self):
        rules = CssParser().parse(io.StringIO("* { fill: red; }"))
        assert rules[0].selector == Accept()

    def test_file_encoding(self, tmp_path):
        path = tmp_path / "latin.css"
        path.write_bytes("/* Stra\xdfen */ roads { fill: red; }".encode("latin-1"))
        parser = CssParser(ParserConfig(encoding="latin-1"))
        (rule,) = parser.parse_file(path)
        assert rule.description.title == "Stra\xdfen"

    def test_default_parser_built_once_across_threads(self, monkeypatch):
        built = []

        class CountingParser(CssParser):
            def __init__(self, config=None):
                built.append(self)
                time.sleep(0.01)
                super().__init__(config)

        monkeypatch.setattr(grammar, "_default_parser", None)
        monkeypatch.setattr(grammar, "CssParser", CountingParser)
        with ThreadPoolExecutor(max_workers=8) as pool:
            parsers = list(pool.map(lambda _: grammar._parser(), range(8)))
        assert len(built) == 1
        assert all(p is built[0] for p in parsers)

    def test_shared_parser_across_threads(self):
        parser = CssParser()
        source = (FIXTURES / "states.css").read_text()
        expected = parser.parse(source)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: parser.parse(source), range(8)))
        assert all(r == expected for r in results)
