"""Pytest configuration and fixtures for extfmt tests."""

import pytest

from extfmt import Environment


@pytest.fixture
def env():
    """Create a basic extfmt Environment (strict zipping)."""
    return Environment()


@pytest.fixture
def env_shortest():
    """Create an Environment that truncates zips to the shortest sequence."""
    return Environment(zip_mode="shortest")


@pytest.fixture
def env_unindent():
    """Create an Environment that unindents every template."""
    return Environment(unindent=True)


@pytest.fixture
def no_colors(monkeypatch):
    """Disable ANSI colors so error messages compare as plain text."""
    from extfmt.environment import terminal

    monkeypatch.setattr(terminal, "_USE_COLORS", False)


def assert_contains(text: str, *expected_parts: str) -> None:
    """Assert ``text`` contains all expected parts.

    Args:
        text: The actual output or error message.
        expected_parts: Strings that should all be present in the text.
    """
    for part in expected_parts:
        assert part in text, (
            f"Output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {text!r}"
        )
