"""Text helpers: escape resolution and the dedent preprocessor.

Both are purely textual. ``dedent`` runs before the parser sees a template
and knows nothing about the interpolation grammar.
"""

from __future__ import annotations

from extfmt.utils.constants import ESCAPE_CHAR, HEX_DIGITS, LINE_BREAKS, SIMPLE_ESCAPES


def read_escape(source: str, pos: int) -> tuple[str, int]:
    """Resolve the escape sequence whose backslash sits at ``source[pos]``.

    Returns the resolved character and the position just past the sequence.
    The caller guarantees that a character follows the backslash.

    Example:
        >>> read_escape(r"a\\nb", 1)
        ('\\n', 3)
    """
    char = source[pos + 1]
    if char in SIMPLE_ESCAPES:
        return SIMPLE_ESCAPES[char], pos + 2
    if char == "x":
        digits = source[pos + 2 : pos + 4]
        if len(digits) == 2 and all(d in HEX_DIGITS for d in digits):
            return chr(int(digits, 16)), pos + 4
    return char, pos + 2


def unescape(text: str) -> str:
    """Resolve every escape sequence in ``text``.

    A trailing lone backslash is kept as-is.
    """
    if ESCAPE_CHAR not in text:
        return text
    parts: list[str] = []
    pos = 0
    end = len(text)
    while pos < end:
        char = text[pos]
        if char == ESCAPE_CHAR and pos + 1 < end:
            resolved, pos = read_escape(text, pos)
            parts.append(resolved)
        else:
            parts.append(char)
            pos += 1
    return "".join(parts)


def _indent_width(line: str) -> int:
    width = 0
    for char in line:
        if char in LINE_BREAKS or not char.isspace():
            break
        width += 1
    return width


def dedent(text: str) -> str:
    """Strip the common leading-whitespace prefix from a multiline template.

    The indent is the shortest leading-whitespace run among non-blank lines.
    Every line loses that many leading whitespace characters; blank lines
    lose at most their own whitespace. Line separators are preserved, and
    text with no non-blank line is returned unchanged.

    Example:
        >>> dedent("\\n    a\\n      b\\n  ")
        '\\na\\n  b\\n'
    """
    lines = text.split("\n")
    widths = [_indent_width(line) for line in lines if line.strip()]
    if not widths:
        return text
    indent = min(widths)
    if indent == 0:
        return text
    return "\n".join(line[min(indent, _indent_width(line)) :] for line in lines)
