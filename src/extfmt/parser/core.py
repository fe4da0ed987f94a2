"""extfmt Parser core — recursive descent over a character cursor.

The parser walks the template source once, left to right, building an
immutable AST of Literal, Placeholder, ControlVar and Repetition nodes.

Grammar (informal):
    block       := ( literal | placeholder | repetition | control )*
    placeholder := '$' ident | '${' ident [ ':' ident ] '}'
    repetition  := '$(' block ')' [ char | '(' text ')' ] '*'
    control     := '@' ident | '@{' ident [ ':' ident ] '}'   (bodies only)

Inside a repetition body, parentheses nest: only the ``)`` matching the
opening ``$(`` closes the body. Escaped parentheses never count.

"""

from __future__ import annotations

from extfmt.environment.exceptions import ErrorCode
from extfmt.nodes import Literal, Node, Template
from extfmt.parser.blocks import PlaceholderParsingMixin, RepetitionParsingMixin
from extfmt.parser.errors import ParseError
from extfmt.utils.constants import CONTROL_CHAR, ESCAPE_CHAR, PLACEHOLDER_CHAR
from extfmt.utils.text import read_escape


class Parser(PlaceholderParsingMixin, RepetitionParsingMixin):
    """Recursive descent parser producing an extfmt AST.

    Example:
        >>> Parser("Hello, $name!").parse().body
        (Literal(offset=0, text='Hello, '), Placeholder(offset=7, name='name', rename=None), Literal(offset=12, text='!'))

    """

    __slots__ = ("_end", "_name", "_pos", "_source")

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self._name = name
        self._pos = 0
        self._end = len(source)

    def parse(self) -> Template:
        """Parse the whole source.

        Raises:
            ParseError: On the first malformed construct.
        """
        body = self._parse_block(in_body=False)
        return Template(offset=0, body=tuple(body))

    # -- cursor navigation ------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= self._end

    def _peek(self) -> str:
        return self._source[self._pos]

    def _advance(self) -> str:
        char = self._source[self._pos]
        self._pos += 1
        return char

    def _expect(self, char: str, message: str, code: ErrorCode | None = None) -> None:
        if self._at_end() or self._peek() != char:
            raise self._error(message, code=code)
        self._pos += 1

    def _read_escape(self) -> str:
        if self._pos + 1 >= self._end:
            raise self._error(
                "Dangling escape at end of template",
                suggestion="Write '\\\\' for a literal backslash",
            )
        char, self._pos = read_escape(self._source, self._pos)
        return char

    def _error(
        self,
        message: str,
        offset: int | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ) -> ParseError:
        return ParseError(
            message,
            offset=self._pos if offset is None else offset,
            source=self._source,
            name=self._name,
            suggestion=suggestion,
            code=code,
        )

    # -- blocks -----------------------------------------------------------

    def _parse_block(self, in_body: bool) -> list[Node]:
        """Parse nodes until end of input, or the closing ``)`` of a body.

        The closing parenthesis is left for the caller to consume.
        """
        nodes: list[Node] = []
        buf: list[str] = []
        buf_start = self._pos
        depth = 0

        def flush() -> None:
            if buf:
                nodes.append(Literal(offset=buf_start, text="".join(buf)))
                buf.clear()

        while not self._at_end():
            char = self._peek()
            if char == ESCAPE_CHAR:
                if not buf:
                    buf_start = self._pos
                buf.append(self._read_escape())
                continue
            if char == PLACEHOLDER_CHAR:
                flush()
                nodes.append(self._parse_dollar())
                continue
            if in_body:
                if char == CONTROL_CHAR:
                    flush()
                    nodes.append(self._parse_control_var())
                    continue
                if char == ")":
                    if depth == 0:
                        break
                    depth -= 1
                elif char == "(":
                    depth += 1
            if not buf:
                buf_start = self._pos
            buf.append(self._advance())

        flush()
        return nodes

    def _parse_dollar(self) -> Node:
        start = self._pos
        self._advance()  # consume '$'
        if self._at_end():
            raise self._error(
                "Expected identifier, '{' or '(' after '$'",
                offset=start,
                suggestion="Write '\\$' for a literal dollar sign",
                code=ErrorCode.INVALID_IDENTIFIER,
            )
        if self._peek() == "(":
            return self._parse_repetition(start)
        return self._parse_placeholder(start)


def parse(source: str, name: str | None = None) -> Template:
    """Parse ``source`` into a Template AST."""
    return Parser(source, name).parse()
