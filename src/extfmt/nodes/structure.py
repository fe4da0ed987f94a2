"""Template structure nodes for extfmt AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from extfmt.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Template(Node):
    """Root node: the top-level block of a parsed template."""

    body: Sequence[Node]
