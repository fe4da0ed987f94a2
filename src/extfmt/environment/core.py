"""extfmt Environment — configuration and parse cache.

The Environment owns everything that is fixed across renders: how host
values are converted, how repetitions treat zipped sequences of unequal
length, whether templates are unindented by default, and a cache of parsed
templates keyed by source text.

Example:
    >>> env = Environment(zip_mode="shortest")
    >>> env.render("$(@counter$items)\\n*", items=["a", "b", "c"], counter=[1, 2])
    'a\\nb'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from extfmt.values import DEFAULT_CONVERTER, Scope, ValueConverter

if TYPE_CHECKING:
    from extfmt.nodes import Template as TemplateNode
    from extfmt.renderer import Renderer, ZipMode
    from extfmt.template import Template

logger = logging.getLogger(__name__)


class Environment:
    """Central configuration for parsing and rendering.

    Attributes:
        converter: ValueConverter turning host objects into values
        zip_mode: "strict" raises ZipLengthError on unequal lengths,
            "shortest" truncates to the shortest sequence
        unindent: Default for ``from_string(..., unindent=None)``
        cache_size: Number of parsed templates kept in the LRU cache
            (0 disables caching)

    Thread-Safety:
        Configuration is read-only after construction and the parse cache
        is a ``functools.lru_cache``, so one Environment can be shared.
    """

    def __init__(
        self,
        converter: ValueConverter | None = None,
        zip_mode: ZipMode = "strict",
        unindent: bool = False,
        cache_size: int = 128,
    ):
        from extfmt.renderer import Renderer

        if converter is not None and not isinstance(converter, ValueConverter):
            raise TypeError(
                f"converter must provide to_scalar() and to_sequence(), got {type(converter).__name__}"
            )
        if cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {cache_size}")

        self.converter: ValueConverter = converter or DEFAULT_CONVERTER
        self.unindent = unindent
        self.cache_size = cache_size
        self._renderer = Renderer(zip_mode=zip_mode)
        self._parse_cached = lru_cache(maxsize=cache_size)(self._parse_uncached)

    @property
    def zip_mode(self) -> str:
        return self._renderer.zip_mode

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    def parse(self, source: str, name: str | None = None) -> TemplateNode:
        """Parse ``source`` into an AST, reusing cached results.

        Raises:
            ParseError: If the template is malformed.
        """
        if self.cache_size == 0:
            return self._parse_uncached(source, name)
        return self._parse_cached(source, name)

    def _parse_uncached(self, source: str, name: str | None) -> TemplateNode:
        from extfmt.parser import Parser

        ast = Parser(source, name).parse()
        logger.debug("Parsed template %s: %d top-level nodes", name or "<template>", len(ast.body))
        return ast

    def from_string(
        self,
        source: str,
        name: str | None = None,
        unindent: bool | None = None,
    ) -> Template:
        """Parse a template from a string.

        Args:
            source: Template text
            name: Optional name used in error messages
            unindent: Strip the common indentation first; defaults to the
                environment's ``unindent`` setting

        Returns:
            Template ready for rendering
        """
        from extfmt.template import Template
        from extfmt.utils.text import dedent

        if self.unindent if unindent is None else unindent:
            source = dedent(source)
        return Template(self, self.parse(source, name), source, name)

    def make_scope(self, bindings: Mapping[str, Any] | None = None) -> Scope:
        """Build a root scope, converting host values with ``converter``."""
        return Scope.root(bindings, self.converter)

    def render(
        self,
        source: str,
        /,
        *args: Mapping[str, Any],
        **kwargs: Any,
    ) -> str:
        """Parse (cached) and render ``source`` in one call.

        Every keyword is a binding. Unindenting follows the environment
        default; use ``from_string(source, unindent=...)`` to override it.
        """
        return self.from_string(source).render(*args, **kwargs)

    def clear_cache(self) -> None:
        self._parse_cached.cache_clear()

    def cache_info(self) -> dict[str, int]:
        """Parse cache statistics: hits, misses, size and maxsize."""
        info = self._parse_cached.cache_info()
        return {
            "hits": info.hits,
            "misses": info.misses,
            "size": info.currsize,
            "maxsize": info.maxsize or 0,
        }

    def __repr__(self) -> str:
        return (
            f"Environment(zip_mode={self.zip_mode!r}, unindent={self.unindent!r}, "
            f"cache_size={self.cache_size!r})"
        )
