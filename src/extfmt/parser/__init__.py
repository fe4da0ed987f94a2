"""extfmt parser: template text → immutable AST."""

from extfmt.parser.core import Parser, parse
from extfmt.parser.errors import ParseError

__all__ = ["ParseError", "Parser", "parse"]
