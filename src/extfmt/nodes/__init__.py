"""extfmt AST node definitions.

Immutable, frozen dataclass nodes produced by the parser and walked by the
renderer. Every node records the character offset of its source construct.

Node Categories:
    Output: Literal, Placeholder
    Scoping: ControlVar
    Repetition: Repetition, CharSeparator, StringSeparator, ZipEntry
    Structure: Template

"""

from extfmt.nodes.base import Node
from extfmt.nodes.control_flow import (
    NO_SEPARATOR,
    CharSeparator,
    Repetition,
    Separator,
    StringSeparator,
    ZipEntry,
)
from extfmt.nodes.output import Literal, Placeholder
from extfmt.nodes.structure import Template
from extfmt.nodes.variables import ControlVar

__all__ = [
    "NO_SEPARATOR",
    "CharSeparator",
    "ControlVar",
    "Literal",
    "Node",
    "Placeholder",
    "Repetition",
    "Separator",
    "StringSeparator",
    "Template",
    "ZipEntry",
]
