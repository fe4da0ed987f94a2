"""Repetition parsing for extfmt parser.

Provides mixin for parsing ``$( body ) [separator] *`` blocks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from extfmt.environment.exceptions import ErrorCode
from extfmt.nodes import CharSeparator, Node, Repetition, Separator, StringSeparator
from extfmt.utils.constants import ESCAPE_CHAR, REPETITION_STAR

if TYPE_CHECKING:
    from extfmt.parser.errors import ParseError


class RepetitionParsingMixin:
    """Mixin for parsing repetition blocks.

    Required Host Attributes:
        - _pos
        - _parse_block: method
        - _at_end, _peek, _advance, _expect, _read_escape, _error: methods
    """

    if TYPE_CHECKING:
        _pos: int

        def _parse_block(self, in_body: bool) -> list[Node]: ...
        def _at_end(self) -> bool: ...
        def _peek(self) -> str: ...
        def _advance(self) -> str: ...
        def _expect(self, char: str, message: str, code: ErrorCode | None = None) -> None: ...
        def _read_escape(self) -> str: ...
        def _error(
            self,
            message: str,
            offset: int | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def _parse_repetition(self, start: int) -> Repetition:
        """Parse from '(' of '$(' through the closing '*'."""
        self._advance()  # consume '('
        body = self._parse_block(in_body=True)
        if self._at_end():
            raise self._error(
                "Unterminated repetition: missing ')'",
                offset=start,
                suggestion="Close the block with ')' followed by an optional separator and '*'",
                code=ErrorCode.UNTERMINATED_REPETITION,
            )
        self._advance()  # consume ')'
        separator = self._parse_separator()
        return Repetition(offset=start, body=tuple(body), separator=separator)

    def _parse_separator(self) -> Separator:
        if self._at_end():
            raise self._error(
                "Expected separator or '*' after repetition",
                code=ErrorCode.MISSING_STAR,
            )
        char = self._peek()
        if char == ESCAPE_CHAR:
            separator: Separator = CharSeparator(self._read_escape())
        else:
            self._advance()
            if char == REPETITION_STAR:
                return None
            if char == "(":
                separator = StringSeparator(self._parse_separator_text())
            else:
                separator = CharSeparator(char)
        self._expect(
            REPETITION_STAR,
            "Expected '*' after repetition separator",
            code=ErrorCode.MISSING_STAR,
        )
        return separator

    def _parse_separator_text(self) -> str:
        """Read separator text up to the first unescaped ')', resolving escapes."""
        start = self._pos - 1
        parts: list[str] = []
        while not self._at_end():
            char = self._peek()
            if char == ESCAPE_CHAR:
                parts.append(self._read_escape())
            elif char == ")":
                self._advance()
                return "".join(parts)
            else:
                parts.append(self._advance())
        raise self._error(
            "Unterminated separator: missing ')'",
            offset=start,
            code=ErrorCode.MALFORMED,
        )
