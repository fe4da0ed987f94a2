"""extfmt Template — parsed template object ready for rendering.

The Template class wraps an immutable AST and provides the ``render()``
API. Templates are immutable and thread-safe for concurrent rendering.

Architecture:
    ```
    Template
    ├── _env_ref: WeakRef[Environment]  # Prevents circular refs
    ├── _ast: nodes.Template            # Parsed, immutable AST
    ├── _source: str                    # For error snippets
    └── _name                           # For error messages
    ```

Memory Safety:
Uses ``weakref.ref(env)`` to break potential cycles:
``Template → (weak) → Environment → cache → Template``

Thread-Safety:
- Templates are immutable after construction
- ``render()`` builds a private scope chain and render context
- Multiple threads can call ``render()`` concurrently

"""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from extfmt.render_context import render_context
from extfmt.template.introspection import TemplateIntrospectionMixin

if TYPE_CHECKING:
    from extfmt.environment import Environment
    from extfmt.nodes import Template as TemplateNode
    from extfmt.values import Scope


class Template(TemplateIntrospectionMixin):
    """Parsed template ready for rendering.

    Attributes:
        name: Template identifier (for error messages)
        source: Template text as parsed (after unindent, if applied)
        ast: Root AST node

    Example:
            >>> from extfmt import Environment
            >>> env = Environment()
            >>> t = env.from_string("Profiles:\\n$($names $ages)\\n*")
            >>> t.render(names=["Alice", "Bob"], ages=[30, 40])
            'Profiles:\\nAlice 30\\nBob 40'

            >>> t.render({"names": ["Eve"], "ages": [25]})  # Dict bindings also work
            'Profiles:\\nEve 25'

    """

    __slots__ = (
        "_ast",
        "_env_ref",
        "_name",
        "_required_cache",  # Cached dependency analysis
        "_source",
    )

    def __init__(
        self,
        env: Environment,
        ast: TemplateNode,
        source: str,
        name: str | None = None,
    ):
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._ast = ast
        self._source = source
        self._name = name
        self._required_cache: frozenset[str] | None = None

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def source(self) -> str:
        return self._source

    @property
    def ast(self) -> TemplateNode:
        return self._ast

    @property
    def _env(self) -> Environment:
        env = self._env_ref()
        if env is None:
            raise RuntimeError("Environment has been garbage collected")
        return env

    def render(self, *args: Mapping[str, Any], **kwargs: Any) -> str:
        """Render the template with the given bindings.

        Args:
            *args: Single mapping of bindings
            **kwargs: Bindings as keyword arguments (override the mapping)

        Returns:
            Rendered text

        Raises:
            TemplateRuntimeError: On undefined names, kind mismatches or
                zip length mismatches. No partial output is returned.
        """
        if len(args) > 1:
            raise TypeError(f"render() takes at most 1 positional argument ({len(args)} given)")
        bindings: dict[str, Any] = dict(args[0]) if args else {}
        bindings.update(kwargs)
        return self.render_scope(self._env.make_scope(bindings))

    def render_scope(self, scope: Scope) -> str:
        """Render against a prebuilt scope chain."""
        with render_context(template_name=self._name, source=self._source):
            return self._env.renderer.render(self._ast, scope)

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'!r}>"
