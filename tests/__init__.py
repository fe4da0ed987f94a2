"""extfmt test suite."""
