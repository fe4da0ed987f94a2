"""Parsing mixins for extfmt constructs."""

from extfmt.parser.blocks.placeholders import PlaceholderParsingMixin
from extfmt.parser.blocks.repetitions import RepetitionParsingMixin

__all__ = ["PlaceholderParsingMixin", "RepetitionParsingMixin"]
