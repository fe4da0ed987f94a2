"""Base node class for extfmt AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track the character offset of their source construct for
    error reporting. Nodes are immutable for thread-safety.

    """

    offset: int
