"""Runtime value model for extfmt.

Values bound to a template are either a ``Scalar`` (already-stringified text)
or a ``Sequence`` (ordered, fixed-length, possibly nested). Sequences drive
repetition blocks; scalars are emitted.

Scopes form a persistent chain: every rename and every repetition iteration
pushes one frame, and no frame is mutated after construction. Lookup walks
outward from the innermost frame to the root.

Host objects are turned into values through a ``ValueConverter``. The engine
never inspects host types itself:

    >>> to_value([1, [2, 3]])
    Sequence(items=(Scalar(text='1'), Sequence(items=(Scalar(text='2'), Scalar(text='3')))))

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Scalar:
    """A leaf value, stored as its final text."""

    text: str

    @property
    def kind(self) -> str:
        return "scalar"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Sequence:
    """An ordered list of values used to drive repetition."""

    items: tuple[Value, ...]

    @property
    def kind(self) -> str:
        return "sequence"

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


Value = Scalar | Sequence


@runtime_checkable
class ValueConverter(Protocol):
    """Capability interface turning host objects into engine values."""

    def to_scalar(self, obj: Any) -> Scalar: ...

    def to_sequence(self, obj: Any) -> Sequence: ...


class DefaultConverter:
    """Converter for plain Python objects.

    Strings, mappings and non-iterables become scalars via ``str()``.
    Any other iterable becomes a sequence, converting elements recursively,
    so a list of lists is a matrix.
    """

    __slots__ = ()

    def to_scalar(self, obj: Any) -> Scalar:
        if isinstance(obj, Scalar):
            return obj
        return Scalar(str(obj))

    def to_sequence(self, obj: Any) -> Sequence:
        if isinstance(obj, Sequence):
            return obj
        return Sequence(tuple(to_value(item, self) for item in obj))

    def is_sequence(self, obj: Any) -> bool:
        if isinstance(obj, Sequence):
            return True
        if isinstance(obj, (Scalar, str, bytes, bytearray, Mapping)):
            return False
        return isinstance(obj, Iterable)


DEFAULT_CONVERTER = DefaultConverter()


def to_value(obj: Any, converter: ValueConverter | None = None) -> Value:
    """Convert a host object to a ``Value`` using ``converter``.

    Converters that do not provide ``is_sequence`` get the default
    classification of :class:`DefaultConverter`.
    """
    if isinstance(obj, (Scalar, Sequence)):
        return obj
    converter = converter or DEFAULT_CONVERTER
    is_sequence = getattr(converter, "is_sequence", DEFAULT_CONVERTER.is_sequence)
    if is_sequence(obj):
        return converter.to_sequence(obj)
    return converter.to_scalar(obj)


class Scope:
    """Immutable frame of name → value bindings with an optional parent.

    Example:
        >>> root = Scope.root({"n": Scalar("42")})
        >>> inner = root.bind("x", root.lookup("n"))
        >>> inner.lookup("x").text
        '42'
        >>> "x" in root
        False

    """

    __slots__ = ("_bindings", "_parent")

    def __init__(
        self,
        bindings: Mapping[str, Value] | None = None,
        parent: Scope | None = None,
    ):
        self._bindings: dict[str, Value] = dict(bindings or {})
        self._parent = parent

    @classmethod
    def root(
        cls,
        bindings: Mapping[str, Any] | None = None,
        converter: ValueConverter | None = None,
    ) -> Scope:
        """Build a root scope, converting host objects with ``converter``."""
        values = {name: to_value(obj, converter) for name, obj in (bindings or {}).items()}
        return cls(values)

    @property
    def parent(self) -> Scope | None:
        return self._parent

    def child(self, bindings: Mapping[str, Value]) -> Scope:
        return Scope(bindings, parent=self)

    def bind(self, name: str, value: Value) -> Scope:
        return Scope({name: value}, parent=self)

    def lookup(self, name: str) -> Value:
        """Resolve ``name`` from the innermost frame outward.

        Raises:
            KeyError: If no frame binds ``name``.
        """
        scope: Scope | None = self
        while scope is not None:
            if name in scope._bindings:
                return scope._bindings[name]
            scope = scope._parent
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        scope: Scope | None = self
        while scope is not None:
            if name in scope._bindings:
                return True
            scope = scope._parent
        return False

    def names(self) -> frozenset[str]:
        """All names visible from this frame."""
        seen: set[str] = set()
        scope: Scope | None = self
        while scope is not None:
            seen.update(scope._bindings)
            scope = scope._parent
        return frozenset(seen)

    def depth(self) -> int:
        count = 0
        scope = self._parent
        while scope is not None:
            count += 1
            scope = scope._parent
        return count

    def __repr__(self) -> str:
        return f"Scope({sorted(self._bindings)!r}, depth={self.depth()})"
