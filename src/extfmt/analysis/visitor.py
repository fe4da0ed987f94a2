"""Shared visitor patterns for extfmt AST analysis.

Provides visit_children and iter_nodes for generic AST traversal.
Used by DependencyWalker and template introspection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extfmt.nodes import Node

# Attributes holding child node sequences
CONTAINER_ATTRS = ("body",)


def visit_children(node: Node, visit: Callable[[Node], None]) -> None:
    """Visit all direct child nodes of an extfmt AST node."""
    for attr in CONTAINER_ATTRS:
        children = getattr(node, attr, None)
        if children:
            for child in children:
                visit(child)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth-first, in source order."""
    yield node
    for attr in CONTAINER_ATTRS:
        for child in getattr(node, attr, None) or ():
            yield from iter_nodes(child)
