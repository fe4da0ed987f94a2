"""extfmt — string formatting with zipped, nested repetitions.

A small template engine for generating text (source code, reports, tables)
from scalars and sequences. Placeholders substitute values, renames bind new
names, and repetition blocks expand once per element of their zipped
sequences, joined by an optional separator.

Quickstart:
    >>> from extfmt import render_template
    >>> render_template("Hello, $name!", name="Alice")
    'Hello, Alice!'
    >>> render_template("Numbers: $($numbers),*", numbers=[1, 2, 3])
    'Numbers: 1,2,3'
    >>> render_template("$(@{matrix:row}$($row) *)(\\n)*", matrix=[[1, 2], [3, 4]])
    '1 2\\n3 4'

Syntax:
- ``$name`` / ``${name}``: substitute a scalar
- ``${name:new}``: substitute, and bind ``new`` for the rest of the block
- ``$( ... )*``: repeat for each element of the sequences referenced inside
- ``$( ... ),*`` / ``$( ... )(, )*``: same, with a char or string separator
- ``@name`` / ``@{name:new}``: hidden loop driver inside a repetition
- ``\\$``, ``\\@``, ``\\(``, ``\\)``, ``\\n``, ``\\t``, ``\\\\``: escapes

Architecture:
Template Source → (dedent) → Parser → AST → Renderer(AST, Scope) → str

Thread-Safety:
Parsing and rendering are pure. Parsed templates are immutable and can be
rendered concurrently; each render builds its own scope chain.

Free-Threading (PEP 703):
Declares GIL-independence via `_Py_mod_gil = 0` attribute.

"""

from collections.abc import Mapping
from typing import Any

from extfmt.environment import (
    EmptyRepetitionError,
    EngineError,
    Environment,
    ErrorCode,
    SourceSnippet,
    TemplateError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    TypeMismatchError,
    UndefinedError,
    ZipLengthError,
)
from extfmt.parser import ParseError, parse
from extfmt.renderer import Renderer
from extfmt.template import Template
from extfmt.utils.text import dedent
from extfmt.values import (
    DefaultConverter,
    Scalar,
    Scope,
    Sequence,
    Value,
    ValueConverter,
    to_value,
)

__version__ = "0.1.0"

_default_env = Environment()


def get_default_environment() -> Environment:
    """The shared Environment used by the module-level entry points."""
    return _default_env


def _merge(bindings: Mapping[str, Any] | None, kwargs: dict[str, Any]) -> dict[str, Any]:
    merged = dict(bindings or {})
    merged.update(kwargs)
    return merged


def render_template(text: str, bindings: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
    """Render ``text`` with ``bindings`` (and/or keyword bindings).

    Raises:
        ParseError: If the template is malformed.
        TemplateRuntimeError: On undefined names, kind or length mismatches.
    """
    return _default_env.from_string(text, unindent=False).render(_merge(bindings, kwargs))


def render_template_unindented(
    text: str, bindings: Mapping[str, Any] | None = None, /, **kwargs: Any
) -> str:
    """Like :func:`render_template`, stripping common indentation first."""
    return _default_env.from_string(text, unindent=True).render(_merge(bindings, kwargs))


__all__ = [
    "DefaultConverter",
    "EmptyRepetitionError",
    "EngineError",
    "Environment",
    "ErrorCode",
    "ParseError",
    "Renderer",
    "Scalar",
    "Scope",
    "Sequence",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "TypeMismatchError",
    "UndefinedError",
    "Value",
    "ValueConverter",
    "ZipLengthError",
    "__version__",
    "dedent",
    "get_default_environment",
    "parse",
    "render_template",
    "render_template_unindented",
    "to_value",
]


def __getattr__(name: str) -> object:
    """Module-level getattr for the free-threading declaration."""
    if name == "_Py_mod_gil":
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'extfmt' has no attribute {name!r}")
