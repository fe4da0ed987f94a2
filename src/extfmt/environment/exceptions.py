"""Exceptions for the extfmt template engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateSyntaxError       # Parse-time syntax error
│   └── ParseError            # Malformed template (see extfmt.parser.errors)
└── TemplateRuntimeError      # Render-time error with context
    ├── UndefinedError        # Name not bound in the scope chain
    ├── TypeMismatchError     # Scalar where a sequence is required, or vice versa
    ├── ZipLengthError        # Zipped sequences of unequal length
    └── EmptyRepetitionError  # Repetition with nothing to iterate

Error Messages:
All exceptions carry enough context for a precise diagnostic:
- Source location (template name, line and column)
- The offending names, kinds or lengths
- A source snippet with a caret under the failing construct
- A hint where one helps

Example:
    ```
    E-RUN-003: Zipped sequences differ in length: a=2, b=1 in <template>:1:0
       |
    >  1 | $($a $b)\\n*
       | ^
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from extfmt.environment import terminal

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes.

    Format: E-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (runtime)
    """

    # Parser errors (E-PAR-xxx)
    MALFORMED = "E-PAR-001"
    UNTERMINATED_REPETITION = "E-PAR-002"
    MISSING_STAR = "E-PAR-003"
    INVALID_IDENTIFIER = "E-PAR-004"

    # Runtime errors (E-RUN-xxx)
    UNDEFINED_VARIABLE = "E-RUN-001"
    TYPE_MISMATCH = "E-RUN-002"
    ZIP_LENGTH_MISMATCH = "E-RUN-003"
    EMPTY_REPETITION = "E-RUN-004"
    RUNTIME_ERROR = "E-RUN-005"

    @property
    def category(self) -> str:
        """Error category ('parser' or 'runtime')."""
        prefix = self.value.split("-")[1]
        return {"PAR": "parser", "RUN": "runtime"}.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source locations and snippets
# ---------------------------------------------------------------------------


def locate(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based line and 0-based column."""
    offset = max(0, min(offset, len(source)))
    lineno = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return lineno, offset - line_start


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
            if is_error and self.column is not None:
                caret = " " * self.column + "^"
                parts.append(f"{terminal.dim_text('     |')} {terminal.paint(caret, 'bright_red')}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet with ``context_lines`` around ``error_line``."""
    all_lines = source.split("\n")
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


def _format_location(name: str | None, lineno: int | None, col_offset: int | None) -> str:
    loc = name or "<template>"
    if lineno:
        loc += f":{lineno}"
        if col_offset is not None:
            loc += f":{col_offset}"
    return loc


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


class TemplateError(Exception):
    """Base exception for all extfmt errors.

    Every failure of parsing or rendering is a subclass, so callers can
    handle the whole engine with one clause:

        >>> try:
        ...     render_template(source, bindings)
        ... except TemplateError as e:
        ...     log.error("template failed: %s", e.format_compact())

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


# Name used at the call boundary for "any engine failure".
EngineError = TemplateError


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    When ``source`` and ``lineno`` are provided, the message includes the
    offending line with a caret under ``col_offset``.
    """

    code: ErrorCode | None = ErrorCode.MALFORMED

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = _format_location(self.name, self.lineno, self.col_offset)
        header = f"Syntax Error: {self.message}\n  --> {location}"

        if self.source is not None and self.lineno:
            lines = self.source.split("\n")
            if 0 < self.lineno <= len(lines):
                snippet = f"\n   |\n{self.lineno:>3} | {lines[self.lineno - 1]}"
                if self.col_offset is not None:
                    snippet += f"\n   | {' ' * self.col_offset}^"
                return header + snippet

        return header

    def format_compact(self) -> str:
        parts: list[str] = []
        code_prefix = f"{self.code.value}: " if self.code else ""
        parts.append(f"{code_prefix}{self.message}")
        parts.append(f"  --> {_format_location(self.name, self.lineno, self.col_offset)}")
        if self.source is not None and self.lineno:
            snippet = build_source_snippet(
                self.source, self.lineno, context_lines=0, column=self.col_offset
            )
            parts.append(snippet.format())
        return "\n".join(parts)


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Output Format:
            ```
            Runtime Error: Repetition has no sequence to iterate
              Location: report.txt:3:4
               |
            >  3 | $( $title )*
                 |     ^
               |
              Iteration: rows[1]
              Suggestion: Reference at least one sequence inside $( ... )*
            ```

    Attributes:
        message: Error description
        template_name: Name of the template
        lineno: Line number in template source
        col_offset: Column of the failing construct
        suggestion: Actionable fix suggestion
        source_snippet: Source lines around the failure
        iteration_stack: (name, index) pairs of the enclosing repetitions
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        suggestion: str | None = None,
        source_snippet: SourceSnippet | None = None,
        iteration_stack: list[tuple[str, int]] | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.lineno = lineno
        self.col_offset = col_offset
        self.suggestion = suggestion
        self.source_snippet = source_snippet
        self.iteration_stack = iteration_stack or []
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        return _format_location(self.template_name, self.lineno, self.col_offset)

    def _format_iterations(self) -> str:
        path = ", ".join(f"{name}[{index}]" for name, index in self.iteration_stack)
        return f"  Iteration: {path}"

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name or self.lineno:
            parts.append(f"  Location: {terminal.location(self.location)}")
        if self.source_snippet:
            parts.append(self.source_snippet.format())
        if self.iteration_stack:
            parts.append(self._format_iterations())
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        parts: list[str] = [
            terminal.format_error_header(
                self.code.value if self.code else None,
                f"{self.message} in {terminal.location(self.location)}",
            )
        ]
        if self.source_snippet:
            parts.append(self.source_snippet.format())
        if self.iteration_stack:
            parts.append(self._format_iterations())
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


# ---------------------------------------------------------------------------
# Runtime failures
# ---------------------------------------------------------------------------


class UndefinedError(TemplateRuntimeError):
    """A referenced name has no binding in the active scope chain.

    If ``available_names`` is provided, a "Did you mean?" hint is included
    when a close match exists.

    Example:
            >>> render_template("Hello, $nmae!", name="World")
        UndefinedError: Undefined variable 'nmae'. Did you mean 'name'?

    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_VARIABLE

    def __init__(
        self,
        name: str,
        available_names: frozenset[str] | None = None,
        **kwargs: object,
    ):
        self.name = name
        self.available_names = available_names or frozenset()
        message = f"Undefined variable '{name}'"
        if self.available_names:
            from difflib import get_close_matches

            matches = get_close_matches(name, sorted(self.available_names), n=1, cutoff=0.6)
            if matches:
                message += f". Did you mean '{terminal.suggestion(matches[0])}'?"
        super().__init__(
            message,
            suggestion=f"Pass '{name}' in the bindings, or bind it with ${{other:{name}}}",
            **kwargs,  # type: ignore[arg-type]
        )


class TypeMismatchError(TemplateRuntimeError):
    """A value has the wrong kind for its use.

    Raised when a bare placeholder resolves to a sequence, or a repetition
    control variable resolves to a scalar.
    """

    code: ErrorCode | None = ErrorCode.TYPE_MISMATCH

    def __init__(self, name: str, expected: str, actual: str, **kwargs: object):
        self.name = name
        self.expected = expected
        self.actual = actual
        if expected == "scalar":
            hint = f"Wrap the reference in a repetition: $(${name}),*"
        else:
            hint = f"'{name}' must be bound to a sequence to drive a repetition"
        super().__init__(
            f"Variable '{name}' is a {actual}, expected a {expected}",
            suggestion=hint,
            **kwargs,  # type: ignore[arg-type]
        )


class ZipLengthError(TemplateRuntimeError):
    """Sequences zipped by one repetition have unequal lengths.

    Attributes:
        name_lengths: (name, length) for every member of the zip, in order.
    """

    code: ErrorCode | None = ErrorCode.ZIP_LENGTH_MISMATCH

    def __init__(self, name_lengths: tuple[tuple[str, int], ...], **kwargs: object):
        self.name_lengths = name_lengths
        detail = ", ".join(f"{name}={length}" for name, length in name_lengths)
        super().__init__(
            f"Zipped sequences differ in length: {detail}",
            suggestion="Bind sequences of equal length, or use Environment(zip_mode='shortest')",
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def lengths(self) -> dict[str, int]:
        return dict(self.name_lengths)


class EmptyRepetitionError(TemplateRuntimeError):
    """A repetition references no sequence, so its length is undefined."""

    code: ErrorCode | None = ErrorCode.EMPTY_REPETITION

    def __init__(self, **kwargs: object):
        super().__init__(
            "Repetition has no sequence to iterate",
            suggestion="Reference at least one sequence inside $( ... )*, e.g. @items",
            **kwargs,  # type: ignore[arg-type]
        )
