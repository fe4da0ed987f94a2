"""Fixtures for the runnable extfmt examples.

Every example directory holds an ``app.py`` that renders at import time
and a ``test_*.py`` that checks the module-level results. ``example_app``
executes the sibling ``app.py`` under a private module name, with terminal
colors off so any formatted error text is plain.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

from extfmt.environment import terminal


def _load_app(app_path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        f"extfmt_example_{app_path.parent.name}", app_path
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load example {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    """The ``app.py`` beside the requesting test, freshly executed."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)
    return _load_app(Path(request.path).parent / "app.py")
