"""Tests for the extfmt parser.

Covers the grammar: literal runs, placeholders, renames, hidden control
variables, repetitions with nesting and separators, escapes, and the
Malformed errors with their offsets.
"""

from __future__ import annotations

import pytest

from extfmt import ParseError, TemplateSyntaxError, parse
from extfmt.environment.exceptions import ErrorCode
from extfmt.nodes import (
    CharSeparator,
    ControlVar,
    Literal,
    Placeholder,
    Repetition,
    StringSeparator,
    Template,
    ZipEntry,
)


def shape(nodes):
    """Offset-free view of a node list for structural comparison."""
    out = []
    for node in nodes:
        if isinstance(node, Literal):
            out.append(("lit", node.text))
        elif isinstance(node, Placeholder):
            out.append(("var", node.name, node.rename))
        elif isinstance(node, ControlVar):
            out.append(("hidden", node.name, node.rename))
        elif isinstance(node, Repetition):
            sep = None if node.separator is None else node.separator.text
            out.append(("rep", shape(node.body), sep))
    return out


def parsed(source: str):
    return shape(parse(source).body)


class TestLiterals:
    """Literal runs and escapes."""

    def test_empty_template(self) -> None:
        ast = parse("")
        assert isinstance(ast, Template)
        assert ast.body == ()

    def test_plain_text_is_single_literal(self) -> None:
        assert parsed("Hello (world) @ {x}") == [("lit", "Hello (world) @ {x}")]

    def test_escaped_dollar(self) -> None:
        assert parsed("Cost: \\$5") == [("lit", "Cost: $5")]

    def test_escape_sequences(self) -> None:
        assert parsed("a\\nb\\tc\\\\d\\re") == [("lit", "a\nb\tc\\d\re")]

    def test_hex_escape(self) -> None:
        assert parsed("\\x41\\x62") == [("lit", "Ab")]

    def test_unknown_escape_maps_to_itself(self) -> None:
        assert parsed("\\q\\xzz") == [("lit", "qxzz")]

    def test_literal_offsets(self) -> None:
        body = parse("ab$x cd").body
        assert body[0] == Literal(offset=0, text="ab")
        assert body[1] == Placeholder(offset=2, name="x")
        assert body[2] == Literal(offset=4, text=" cd")


class TestPlaceholders:
    """$name, ${name} and ${name:new}."""

    def test_bare_placeholder(self) -> None:
        assert parsed("Hello, $name!") == [
            ("lit", "Hello, "),
            ("var", "name", None),
            ("lit", "!"),
        ]

    def test_identifier_chars(self) -> None:
        assert parsed("$foo123_") == [("var", "foo123_", None)]

    def test_identifier_leading_underscore(self) -> None:
        assert parsed("$_foo") == [("var", "_foo", None)]

    def test_identifier_stops_at_special_char(self) -> None:
        assert parsed("$foo@") == [("var", "foo", None), ("lit", "@")]

    def test_unicode_identifier(self) -> None:
        assert parsed("$größe") == [("var", "größe", None)]

    def test_braced_placeholder(self) -> None:
        assert parsed("${x}abc") == [("var", "x", None), ("lit", "abc")]

    def test_adjacent_placeholders(self) -> None:
        assert parsed("${x}${y}") == parsed("$x$y") == [("var", "x", None), ("var", "y", None)]

    def test_rename(self) -> None:
        assert parsed("Number: ${number:n} $n") == [
            ("lit", "Number: "),
            ("var", "number", "n"),
            ("lit", " "),
            ("var", "n", None),
        ]

    def test_top_level_at_sign_is_literal(self) -> None:
        assert parsed("mail@example.com") == [("lit", "mail@example.com")]


class TestRepetitions:
    """$( body ) [separator] *"""

    def test_basic(self) -> None:
        assert parsed("$(literal)*") == [("rep", [("lit", "literal")], None)]

    def test_char_separator(self) -> None:
        ast = parse("$(literal);*")
        rep = ast.body[0]
        assert isinstance(rep, Repetition)
        assert rep.separator == CharSeparator(";")

    def test_string_separator(self) -> None:
        rep = parse("$(literal)(=>)*").body[0]
        assert rep.separator == StringSeparator("=>")

    def test_raw_newline_separator(self) -> None:
        assert parsed("$(literal)(\n)*") == [("rep", [("lit", "literal")], "\n")]

    def test_escaped_newline_separator(self) -> None:
        assert parsed("$(literal)(\\n)*") == [("rep", [("lit", "literal")], "\n")]

    def test_escaped_char_separator(self) -> None:
        assert parsed("$($a $b)\\n*") == [
            ("rep", [("var", "a", None), ("lit", " "), ("var", "b", None)], "\n")
        ]

    def test_string_separator_escaped_parens(self) -> None:
        assert parsed("$($x)(\\t|\\)\\()*") == [("rep", [("var", "x", None)], "\t|)(")]

    def test_variable_in_body(self) -> None:
        assert parsed("$(literal $var)*") == [
            ("rep", [("lit", "literal "), ("var", "var", None)], None)
        ]

    def test_variable_with_trailing_literal(self) -> None:
        assert parsed("$(literal1 $variable literal2)*") == [
            ("rep", [("lit", "literal1 "), ("var", "variable", None), ("lit", " literal2")], None)
        ]

    def test_hidden_variable(self) -> None:
        assert parsed("$(literal @var)*") == [
            ("rep", [("lit", "literal "), ("hidden", "var", None)], None)
        ]

    def test_hidden_variable_trailing_star_is_literal(self) -> None:
        assert parsed("$(literal1 @variable literal2)**") == [
            (
                "rep",
                [("lit", "literal1 "), ("hidden", "variable", None), ("lit", " literal2")],
                None,
            ),
            ("lit", "*"),
        ]

    def test_hidden_variable_forms(self) -> None:
        assert parsed("$(@{foo:bar}@{baz}@qux)*") == [
            (
                "rep",
                [("hidden", "foo", "bar"), ("hidden", "baz", None), ("hidden", "qux", None)],
                None,
            )
        ]

    def test_escaped_at_in_body(self) -> None:
        assert parsed("$($x\\@host)*") == [("rep", [("var", "x", None), ("lit", "@host")], None)]

    def test_balanced_parentheses(self) -> None:
        assert parsed("$(literal () ((literal), ((), ())))*") == [
            ("rep", [("lit", "literal () ((literal), ((), ()))")], None)
        ]

    def test_escaped_parentheses_do_not_nest(self) -> None:
        source = r"$(literal \( () (\(literal, (\(, ()))\)\))*"
        assert parsed(source) == [("rep", [("lit", "literal ( () ((literal, ((, ()))))")], None)]

    def test_top_level_parentheses_are_literal(self) -> None:
        assert parsed("f(x)) ($y") == [("lit", "f(x)) ("), ("var", "y", None)]

    def test_repetition_offset(self) -> None:
        rep = parse("ab $($x)*").body[1]
        assert rep.offset == 3
        assert rep.body[0].offset == 5


class TestDocumentExamples:
    """Larger templates mixing every construct."""

    def test_function_signature(self) -> None:
        source = (
            "void $name($($types $names)(, )*) {\n"
            '    $func("hallo", $num);\n'
            '    $(@lines printf("$($lines)( --> )* %d, %d", $nums, $nums2))(;\\n    )*;\n'
            "}"
        )
        assert parsed(source) == [
            ("lit", "void "),
            ("var", "name", None),
            ("lit", "("),
            ("rep", [("var", "types", None), ("lit", " "), ("var", "names", None)], ", "),
            ("lit", ") {\n    "),
            ("var", "func", None),
            ("lit", '("hallo", '),
            ("var", "num", None),
            ("lit", ");\n    "),
            (
                "rep",
                [
                    ("hidden", "lines", None),
                    ("lit", ' printf("'),
                    ("rep", [("var", "lines", None)], " --> "),
                    ("lit", ' %d, %d", '),
                    ("var", "nums", None),
                    ("lit", ", "),
                    ("var", "nums2", None),
                    ("lit", ")"),
                ],
                ";\n    ",
            ),
            ("lit", ";\n}"),
        ]

    def test_matrix(self) -> None:
        source = (
            "void func() {\n"
            '    $(@{matrix:inner_matrix}printf("$($inner_matrix) *");)(\\n    )*\n'
            '    printf("\\(");\n'
            "}"
        )
        assert parsed(source) == [
            ("lit", "void func() {\n    "),
            (
                "rep",
                [
                    ("hidden", "matrix", "inner_matrix"),
                    ("lit", 'printf("'),
                    ("rep", [("var", "inner_matrix", None)], " "),
                    ("lit", '");'),
                ],
                "\n    ",
            ),
            ("lit", '\n    printf("(");\n}'),
        ]


class TestControlVars:
    """Repetition.control_vars derivation."""

    def test_direct_placeholders_in_order(self) -> None:
        rep = parse("$(@a $b ${c:d} $d $($e)*)*").body[0]
        assert rep.control_vars == (
            ZipEntry("a", None, True),
            ZipEntry("b", None, False),
            ZipEntry("c", "d", False),
        )

    def test_first_occurrence_wins(self) -> None:
        rep = parse("$(@{xs:x} $xs $x)*").body[0]
        assert rep.control_vars == (ZipEntry("xs", "x", True),)

    def test_computed_once_and_not_compared(self) -> None:
        rep = parse("$($a @b),*").body[0]
        assert rep.control_vars is rep.control_vars
        assert Repetition(offset=rep.offset, body=rep.body, separator=rep.separator) == rep
        assert "control_vars" not in repr(rep)

    def test_built_by_hand(self) -> None:
        rep = Repetition(offset=0, body=(Placeholder(offset=2, name="xs"),))
        assert rep.control_vars == (ZipEntry("xs", None, False),)


class TestMalformed:
    """ParseError kinds and offsets."""

    @pytest.mark.parametrize(
        ("source", "offset"),
        [
            ("abc $(x", 4),  # unterminated repetition
            ("$(", 0),
            ("$(x)", 4),  # nothing after ')'
            ("$($x),", 6),  # separator without '*'
            ("$($x)(, )", 9),  # string separator without '*'
            ("$($x)(, ", 5),  # unterminated string separator
            ("$1invalid", 1),
            ("${1foo:bar}", 2),
            ("${foo|", 5),
            ("${foo:bar", 9),
            ("${foo", 1),
            ("x\\", 1),  # dangling escape
            ("$", 0),
            ("$(@)*", 3),
            ("$(@1)*", 3),
        ],
    )
    def test_offsets(self, source: str, offset: int) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        assert exc_info.value.offset == offset
        assert exc_info.value.kind == "Malformed"

    def test_is_template_syntax_error(self) -> None:
        with pytest.raises(TemplateSyntaxError):
            parse("$(")

    def test_line_and_column(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("line one\n  $(x", name="demo.txt")
        error = exc_info.value
        assert error.offset == 11
        assert error.lineno == 2
        assert error.col_offset == 2
        assert "demo.txt:2:2" in str(error)
        assert "  $(x" in str(error)

    def test_error_codes(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("$(x")
        assert exc_info.value.code is ErrorCode.UNTERMINATED_REPETITION

        with pytest.raises(ParseError) as exc_info:
            parse("$(x),")
        assert exc_info.value.code is ErrorCode.MISSING_STAR

        with pytest.raises(ParseError) as exc_info:
            parse("$9")
        assert exc_info.value.code is ErrorCode.INVALID_IDENTIFIER

    def test_suggestion_in_message(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("price: $")
        assert "Suggestion:" in str(exc_info.value)
        assert exc_info.value.format_compact().startswith("E-PAR-004")
