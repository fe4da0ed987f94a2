"""extfmt RenderContext — per-render state isolated from user bindings.

Diagnostic state (template name, source text, the repetition iterations
being rendered) lives in a ContextVar rather than in the scope chain, so
bindings stay clean and concurrent renders never see each other's state.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Per-render state for error reporting.

    Thread Safety:
        ContextVars are thread-local by design. Each thread or async task
        has its own RenderContext instance.

    Attributes:
        template_name: Current template name for error messages
        source: Template source for error snippets
        iteration_stack: (control name, index) of each enclosing repetition
    """

    template_name: str | None = None
    source: str | None = None
    iteration_stack: list[tuple[str, int]] = field(default_factory=list)

    @contextmanager
    def iteration(self, name: str, index: int) -> Iterator[None]:
        """Record that the body of repetition ``name`` is at ``index``."""
        self.iteration_stack.append((name, index))
        try:
            yield
        finally:
            self.iteration_stack.pop()


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "extfmt_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


@contextmanager
def render_context(
    template_name: str | None = None,
    source: str | None = None,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Creates a new RenderContext, makes it current for the duration of the
    with block and restores the previous one on exit.

    Example:
        with render_context(template_name="page.txt", source=src) as ctx:
            text = renderer.render(ast, scope)
    """
    ctx = RenderContext(template_name=template_name, source=source)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
