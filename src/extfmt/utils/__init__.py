"""Utility helpers for extfmt."""

from extfmt.utils.text import dedent, read_escape, unescape

__all__ = ["dedent", "read_escape", "unescape"]
