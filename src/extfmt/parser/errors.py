"""Parser error handling for extfmt.

Provides ParseError: a malformed template, located by character offset and
displayed with a source snippet and an optional suggestion.
"""

from __future__ import annotations

from extfmt.environment.exceptions import ErrorCode, TemplateSyntaxError, locate


class ParseError(TemplateSyntaxError):
    """Malformed template: unbalanced delimiters, missing ``*`` after a
    separator, or invalid identifier syntax.

    Parsing aborts on the first error; no partial AST is returned.

    Attributes:
        offset: 0-based character offset of the offending character.
        kind: Always ``"Malformed"``.
    """

    kind = "Malformed"

    def __init__(
        self,
        message: str,
        offset: int,
        source: str | None = None,
        name: str | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.offset = offset
        self.suggestion = suggestion
        if code is not None:
            self.code = code
        lineno, col_offset = locate(source, offset) if source is not None else (None, None)
        super().__init__(
            message,
            lineno=lineno,
            name=name,
            source=source,
            col_offset=col_offset,
        )

    def _format_message(self) -> str:
        msg = super()._format_message()
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg
