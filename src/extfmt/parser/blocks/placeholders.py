"""Placeholder parsing for extfmt parser.

Provides mixin for parsing ``$name``, ``${name}``, ``${name:new}`` and the
hidden ``@`` forms used inside repetition bodies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from extfmt.environment.exceptions import ErrorCode
from extfmt.nodes import ControlVar, Placeholder

if TYPE_CHECKING:
    from extfmt.parser.errors import ParseError

# Letter or underscore, then letters, digits or underscores
_IDENT_RE = re.compile(r"[^\W\d]\w*")


class PlaceholderParsingMixin:
    """Mixin for parsing variable references.

    Required Host Attributes:
        - _source, _pos
        - _at_end, _peek, _advance, _expect, _error: methods
    """

    if TYPE_CHECKING:
        _source: str
        _pos: int

        def _at_end(self) -> bool: ...
        def _peek(self) -> str: ...
        def _advance(self) -> str: ...
        def _expect(self, char: str, message: str, code: ErrorCode | None = None) -> None: ...
        def _error(
            self,
            message: str,
            offset: int | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def _parse_placeholder(self, start: int) -> Placeholder:
        """Parse after '$': name, {name} or {name:new}."""
        name, rename = self._parse_names()
        return Placeholder(offset=start, name=name, rename=rename)

    def _parse_control_var(self) -> ControlVar:
        """Parse @name, @{name} or @{name:new}."""
        start = self._pos
        self._advance()  # consume '@'
        if self._at_end():
            raise self._error(
                "Expected identifier or '{' after '@'",
                offset=start,
                suggestion="Write '\\@' for a literal at-sign inside a repetition",
                code=ErrorCode.INVALID_IDENTIFIER,
            )
        name, rename = self._parse_names()
        return ControlVar(offset=start, name=name, rename=rename)

    def _parse_names(self) -> tuple[str, str | None]:
        if self._peek() != "{":
            return self._parse_identifier(), None

        brace = self._pos
        self._advance()  # consume '{'
        name = self._parse_identifier()
        if self._at_end():
            raise self._error("Unterminated '{' in placeholder", offset=brace)
        char = self._advance()
        if char == "}":
            return name, None
        if char != ":":
            raise self._error(
                f"Expected ':' or '}}' after '{name}', found {char!r}",
                offset=self._pos - 1,
            )
        rename = self._parse_identifier()
        self._expect("}", f"Expected '}}' to close '{{{name}:{rename}'")
        return name, rename

    def _parse_identifier(self) -> str:
        match = _IDENT_RE.match(self._source, self._pos)
        if match is None:
            found = "end of template" if self._at_end() else repr(self._peek())
            raise self._error(
                f"Expected identifier, found {found}",
                suggestion="Identifiers start with a letter or '_'",
                code=ErrorCode.INVALID_IDENTIFIER,
            )
        self._pos = match.end()
        return match.group()
