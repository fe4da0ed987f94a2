"""extfmt Renderer — evaluates an AST against a scope chain.

Rendering is a pure recursive walk. Each node handler receives the active
scope and returns the scope for the following siblings, so renames thread
left to right through a block:

    ${number:n} $n $n
    └─ binds n ─┴─ sees n

Repetitions zip every sequence referenced directly in their body, render the
body once per index in a child scope, and join the fragments with the
separator (between fragments only).

StringBuilder Pattern:
Output is collected in a list and joined once per block, so cost stays
linear in output size.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Literal as LiteralType

from extfmt.environment.exceptions import (
    EmptyRepetitionError,
    TypeMismatchError,
    UndefinedError,
    ZipLengthError,
    build_source_snippet,
    locate,
)
from extfmt.nodes import ControlVar, Literal, Node, Placeholder, Repetition, Template
from extfmt.render_context import RenderContext, get_render_context
from extfmt.values import Scalar, Scope, Sequence, Value

logger = logging.getLogger(__name__)

ZipMode = LiteralType["strict", "shortest"]

ZIP_MODES: frozenset[str] = frozenset({"strict", "shortest"})


class Renderer:
    """Walks extfmt AST nodes and produces output text.

    The renderer holds configuration only. All per-call state lives in the
    scope chain and the output buffers, so one instance can serve concurrent
    renders.

    Node Dispatch:
        O(1) dict lookup from node class name to handler. Handlers have the
        shape ``handler(node, scope, buf) -> Scope``.

    Example:
        >>> from extfmt.parser import parse
        >>> Renderer().render(parse("$($xs),*"), Scope.root({"xs": [1, 2, 3]}))
        '1,2,3'

    """

    __slots__ = ("_dispatch", "_zip_mode")

    def __init__(self, zip_mode: ZipMode = "strict"):
        if zip_mode not in ZIP_MODES:
            raise ValueError(f"zip_mode must be one of {sorted(ZIP_MODES)}, got {zip_mode!r}")
        self._zip_mode = zip_mode
        self._dispatch: dict[str, Callable[[Node, Scope, list[str]], Scope]] = {
            "Literal": self._render_literal,  # type: ignore[dict-item]
            "Placeholder": self._render_placeholder,  # type: ignore[dict-item]
            "ControlVar": self._render_control_var,  # type: ignore[dict-item]
            "Repetition": self._render_repetition,  # type: ignore[dict-item]
        }

    @property
    def zip_mode(self) -> str:
        return self._zip_mode

    def render(self, ast: Template | Iterable[Node], scope: Scope) -> str:
        """Render ``ast`` against ``scope``.

        Raises:
            UndefinedError, TypeMismatchError, ZipLengthError,
            EmptyRepetitionError: No partial output is produced.
        """
        body = ast.body if isinstance(ast, Template) else ast
        buf: list[str] = []
        self._render_block(body, scope, buf)
        return "".join(buf)

    def _render_block(self, nodes: Iterable[Node], scope: Scope, buf: list[str]) -> None:
        dispatch = self._dispatch
        for node in nodes:
            scope = dispatch[type(node).__name__](node, scope, buf)

    # -- node handlers ----------------------------------------------------

    def _render_literal(self, node: Literal, scope: Scope, buf: list[str]) -> Scope:
        buf.append(node.text)
        return scope

    def _render_placeholder(self, node: Placeholder, scope: Scope, buf: list[str]) -> Scope:
        value = self._lookup(node, node.name, scope)
        if node.rename is None:
            if isinstance(value, Sequence):
                raise TypeMismatchError(node.name, "scalar", "sequence", **self._location(node))
            buf.append(value.text)
            return scope
        # Rename site emits once, then binds for later siblings
        if isinstance(value, Scalar):
            buf.append(value.text)
        return scope.bind(node.rename, value)

    def _render_control_var(self, node: ControlVar, scope: Scope, buf: list[str]) -> Scope:
        if node.rename is None:
            return scope
        return scope.bind(node.rename, self._lookup(node, node.name, scope))

    def _render_repetition(self, node: Repetition, scope: Scope, buf: list[str]) -> Scope:
        members: list[tuple[str, Sequence]] = []
        for entry in node.control_vars:
            value = self._lookup(node, entry.name, scope)
            if isinstance(value, Sequence):
                members.append((entry.name, value))
            elif entry.hidden:
                raise TypeMismatchError(entry.name, "sequence", "scalar", **self._location(node))

        if not members:
            raise EmptyRepetitionError(**self._location(node))

        name_lengths = tuple((name, len(seq)) for name, seq in members)
        count = min(length for _, length in name_lengths)
        if any(length != count for _, length in name_lengths):
            if self._zip_mode == "strict":
                raise ZipLengthError(name_lengths, **self._location(node))
            logger.debug("Truncating repetition at offset %d to %d: %s", node.offset, count, name_lengths)

        ctx = get_render_context() or RenderContext()
        driver = members[0][0]
        fragments: list[str] = []
        for index in range(count):
            # Renames bind when their node is reached, not before
            bindings: dict[str, Value] = {name: seq[index] for name, seq in members}
            part: list[str] = []
            with ctx.iteration(driver, index):
                self._render_block(node.body, scope.child(bindings), part)
            fragments.append("".join(part))

        buf.append(node.separator_text.join(fragments))
        return scope

    # -- helpers ----------------------------------------------------------

    def _lookup(self, node: Node, name: str, scope: Scope) -> Value:
        try:
            return scope.lookup(name)
        except KeyError:
            raise UndefinedError(
                name, available_names=scope.names(), **self._location(node)
            ) from None

    def _location(self, node: Node) -> dict[str, object]:
        """Keyword arguments locating ``node`` for a TemplateRuntimeError."""
        ctx = get_render_context()
        if ctx is None:
            return {}
        location: dict[str, object] = {
            "template_name": ctx.template_name,
            "iteration_stack": list(ctx.iteration_stack),
        }
        if ctx.source is not None:
            lineno, col_offset = locate(ctx.source, node.offset)
            location["lineno"] = lineno
            location["col_offset"] = col_offset
            location["source_snippet"] = build_source_snippet(
                ctx.source, lineno, context_lines=1, column=col_offset
            )
        return location
