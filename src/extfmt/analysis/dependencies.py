"""Dependency analysis for template introspection.

Extracts the names a template needs from its caller: every placeholder or
control variable whose name is not introduced by an enclosing rename.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from extfmt.analysis.visitor import visit_children

if TYPE_CHECKING:
    from extfmt.nodes import ControlVar, Node, Placeholder, Repetition


class DependencyWalker:
    """Collect the free names of an AST.

    Renames open a binding for the remaining siblings of their block. A
    repetition body gets its own frame, so renames made inside it never
    reach the nodes after the repetition.

    Thread-safe: Creates new state for each analyze() call.

    Example:
            >>> DependencyWalker().analyze(parse("${a:b} $b $($c)*"))
        frozenset({'a', 'c'})

    """

    def __init__(self) -> None:
        self._scope_stack: list[set[str]] = []
        self._dependencies: set[str] = set()
        self._dispatch: dict[str, Callable[..., None]] = {
            "Placeholder": self._visit_reference,
            "ControlVar": self._visit_reference,
            "Repetition": self._visit_repetition,
        }

    def analyze(self, node: Node) -> frozenset[str]:
        """Return the names ``node`` reads from the caller's bindings."""
        self._scope_stack = [set()]
        self._dependencies = set()
        self._visit_block(node)
        return frozenset(self._dependencies)

    def _visit(self, node: Node) -> None:
        handler = self._dispatch.get(type(node).__name__)
        if handler:
            handler(node)

    def _visit_block(self, node: Node) -> None:
        visit_children(node, self._visit)

    def _visit_reference(self, node: Placeholder | ControlVar) -> None:
        if not self._is_local(node.name):
            self._dependencies.add(node.name)
        if node.rename is not None:
            self._scope_stack[-1].add(node.rename)

    def _visit_repetition(self, node: Repetition) -> None:
        self._scope_stack.append(set())
        self._visit_block(node)
        self._scope_stack.pop()

    def _is_local(self, name: str) -> bool:
        return any(name in scope for scope in self._scope_stack)
