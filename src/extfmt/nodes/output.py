"""Output nodes for extfmt AST."""

from __future__ import annotations

from dataclasses import dataclass

from extfmt.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """Raw text between template constructs, escapes already resolved."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder(Node):
    """Variable reference: $name, ${name} or ${name:rename}"""

    name: str
    rename: str | None = None

    @property
    def bound_name(self) -> str:
        """Name this node makes visible to later siblings."""
        return self.rename or self.name
