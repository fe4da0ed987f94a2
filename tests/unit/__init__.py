"""Unit tests for extfmt building blocks."""
