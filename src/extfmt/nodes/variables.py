"""Scoping nodes for extfmt AST."""

from __future__ import annotations

from dataclasses import dataclass

from extfmt.nodes.base import Node


@dataclass(frozen=True, slots=True)
class ControlVar(Node):
    """Hidden loop-control variable: @name, @{name} or @{name:rename}

    Drives the length of its enclosing repetition and never emits output.
    """

    name: str
    rename: str | None = None

    @property
    def bound_name(self) -> str:
        return self.rename or self.name
