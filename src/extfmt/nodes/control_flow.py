"""Repetition nodes for extfmt AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from extfmt.nodes.base import Node
from extfmt.nodes.output import Placeholder
from extfmt.nodes.variables import ControlVar


@dataclass(frozen=True, slots=True)
class CharSeparator:
    """Single-character separator: $(...),*"""

    char: str

    @property
    def text(self) -> str:
        return self.char


@dataclass(frozen=True, slots=True)
class StringSeparator:
    """String separator with escapes resolved: $(...)(, )*"""

    value: str

    @property
    def text(self) -> str:
        return self.value


Separator = CharSeparator | StringSeparator | None

NO_SEPARATOR: Separator = None


@dataclass(frozen=True, slots=True)
class ZipEntry:
    """A candidate member of a repetition's zip."""

    name: str
    rename: str | None
    hidden: bool


@dataclass(frozen=True, slots=True)
class Repetition(Node):
    """Repeated block: $( body ) [separator] *

    ``control_vars`` is derived from the body once, at construction.
    """

    body: Sequence[Node]
    separator: Separator = NO_SEPARATOR
    control_vars: tuple[ZipEntry, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "control_vars", _zip_entries(self.body))

    @property
    def separator_text(self) -> str:
        return "" if self.separator is None else self.separator.text


def _zip_entries(body: Sequence[Node]) -> tuple[ZipEntry, ...]:
    """Direct placeholders of a repetition body that may drive it.

    Names introduced by an earlier rename in the same body refer to
    already-entered values and are skipped. The first occurrence of a
    name wins. Placeholders inside nested repetitions belong to those.
    """
    entries: list[ZipEntry] = []
    seen: set[str] = set()
    introduced: set[str] = set()
    for node in body:
        if not isinstance(node, (Placeholder, ControlVar)):
            continue
        if node.name not in introduced and node.name not in seen:
            seen.add(node.name)
            entries.append(ZipEntry(node.name, node.rename, isinstance(node, ControlVar)))
        if node.rename is not None:
            introduced.add(node.rename)
    return tuple(entries)
