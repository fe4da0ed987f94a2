"""Template introspection mixin.

Adds static analysis methods to the Template class via mixin inheritance.
Results depend only on the AST, so they are computed once and cached.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from extfmt.analysis import DependencyWalker, iter_nodes
from extfmt.nodes import ControlVar, Placeholder

if TYPE_CHECKING:
    from extfmt.nodes import Template as TemplateNode


class TemplateIntrospectionMixin:
    """Mixin adding static analysis to Template.

    Requires the host class to define the following slots:
        _ast: TemplateNode
        _required_cache: frozenset[str] | None

    """

    if TYPE_CHECKING:
        _ast: TemplateNode
        _required_cache: frozenset[str] | None

    def referenced_names(self) -> frozenset[str]:
        """Every source name read by a placeholder or control variable."""
        return frozenset(
            node.name
            for node in iter_nodes(self._ast)
            if isinstance(node, (Placeholder, ControlVar))
        )

    def required_names(self) -> frozenset[str]:
        """Names the caller must bind for this template to render.

        Names introduced by renames inside the template are excluded.

        Example:
            >>> env.from_string("${number:n} $n $($xs),*").required_names()
            frozenset({'number', 'xs'})
        """
        if self._required_cache is None:
            self._required_cache = DependencyWalker().analyze(self._ast)
        return self._required_cache

    def control_names(self) -> frozenset[str]:
        """Names marked with ``@`` as hidden repetition drivers."""
        return frozenset(
            node.name for node in iter_nodes(self._ast) if isinstance(node, ControlVar)
        )
