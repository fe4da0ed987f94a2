"""Terminal color helpers for extfmt diagnostics.

ANSI colors with TTY detection, honoring NO_COLOR and FORCE_COLOR.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
}

Style = Literal["reset", "bold", "dim", "green", "yellow", "cyan", "bright_red", "bright_green"]

_ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def _detect_colors() -> bool:
    """FORCE_COLOR wins over NO_COLOR; otherwise color only on a TTY."""
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _detect_colors()


def supports_color() -> bool:
    return _USE_COLORS


def paint(text: str, *styles: Style) -> str:
    """Wrap ``text`` in ANSI codes when colors are enabled."""
    if not _USE_COLORS or not styles:
        return text
    prefix = "".join(_CODES[style] for style in styles)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    return _ANSI_RE.sub("", text)


def error_code(text: str) -> str:
    return paint(text, "bright_red", "bold")


def location(text: str) -> str:
    return paint(text, "cyan")


def hint(text: str) -> str:
    return paint(text, "green")


def suggestion(text: str) -> str:
    return paint(text, "bright_green", "bold")


def dim_text(text: str) -> str:
    return paint(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    if code:
        return f"{error_code(code)}: {message}"
    return message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """Render one numbered source line, marking the failing one with ``>``."""
    marker = ">" if is_error else " "
    number = paint(f"{marker}{lineno:>3}", "yellow")
    body = paint(content, "bright_red") if is_error else dim_text(content)
    return f"{number} | {body}"
