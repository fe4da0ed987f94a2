"""extfmt environment: configuration, errors and diagnostics formatting."""

from extfmt.environment.exceptions import (
    EmptyRepetitionError,
    EngineError,
    ErrorCode,
    SourceSnippet,
    TemplateError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    TypeMismatchError,
    UndefinedError,
    ZipLengthError,
    build_source_snippet,
)
from extfmt.environment.core import Environment

__all__ = [
    "EmptyRepetitionError",
    "EngineError",
    "Environment",
    "ErrorCode",
    "SourceSnippet",
    "TemplateError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "TypeMismatchError",
    "UndefinedError",
    "ZipLengthError",
    "build_source_snippet",
]
