"""Static analysis of extfmt templates."""

from extfmt.analysis.dependencies import DependencyWalker
from extfmt.analysis.visitor import iter_nodes, visit_children

__all__ = ["DependencyWalker", "iter_nodes", "visit_children"]
