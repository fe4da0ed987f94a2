"""extfmt Template package — parsed template objects ready for rendering."""

from extfmt.template.core import Template

__all__ = ["Template"]
