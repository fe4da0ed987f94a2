"""Shared constants for extfmt grammar.

Kept in one module so the parser and tests agree on the special characters.
"""

from __future__ import annotations

# Opens a placeholder or repetition
PLACEHOLDER_CHAR = "$"

# Opens a hidden control variable inside a repetition body
CONTROL_CHAR = "@"

ESCAPE_CHAR = "\\"

REPETITION_STAR = "*"

# Escape sequence → resolved character. Any other escaped character maps
# to itself; ``\xHH`` is handled separately.
SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "(": "(",
    ")": ")",
}

HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

# Line terminators are never part of an indentation run
LINE_BREAKS = "\r\n"
