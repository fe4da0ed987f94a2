from __future__ import annotations

import json
import os
import platform
import sys
from pathlib import Path

import pytest
from jinja2 import Environment as Jinja2Environment

from extfmt import Environment as ExtfmtEnvironment

try:
    import importlib.metadata as importlib_metadata
except ModuleNotFoundError:  # pragma: no cover
    import importlib_metadata  # type: ignore


BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "extfmt": _version("extfmt"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def extfmt_env() -> ExtfmtEnvironment:
    return ExtfmtEnvironment()


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    # Plain text output: no autoescaping, keep trailing newlines as written
    return Jinja2Environment(autoescape=False, keep_trailing_newline=True)


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {"name": "Benchmark", "items": [f"item-{i}" for i in range(5)]}


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return {
        "names": [f"field_{i}" for i in range(1000)],
        "types": ["int", "double", "char *", "size_t"] * 250,
    }


@pytest.fixture(scope="session")
def matrix_context() -> dict[str, object]:
    return {"matrix": [[row * 50 + col for col in range(50)] for row in range(50)]}
