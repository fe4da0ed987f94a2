"""Concurrent rendering of shared templates."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from extfmt import Environment, UndefinedError, ZipLengthError
from extfmt.render_context import get_render_context


class TestConcurrentRendering:
    def test_shared_template(self, env: Environment) -> None:
        template = env.from_string("$(@{rows:r}$($r),*)(; )*")

        def work(n: int) -> str:
            return template.render(rows=[[n, n + 1], [n * 2]])

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(200)))

        assert results == [f"{n},{n + 1}; {n * 2}" for n in range(200)]

    def test_errors_isolated_per_thread(self, env: Environment) -> None:
        template = env.from_string("$(@{rows:r}$($r $other) *)\\n*", name="grid")

        def work(n: int) -> list[tuple[str, int]] | str:
            rows = [[1]] * n + [[1, 2]]
            try:
                return template.render(rows=rows, other=[0])
            except ZipLengthError as e:
                assert get_render_context() is None
                return e.iteration_stack

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(50)))

        assert results == [[("rows", n)] for n in range(50)]

    def test_shared_environment_cache(self) -> None:
        env = Environment(cache_size=4)

        def work(n: int) -> str:
            return env.render(f"${{a}}{n % 8}", a=n)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(100)))

        assert results == [f"{n}{n % 8}" for n in range(100)]
        assert env.cache_info()["size"] <= 4

    def test_undefined_in_thread(self, env: Environment) -> None:
        template = env.from_string("$missing")
        with ThreadPoolExecutor(max_workers=2) as pool:
            future = pool.submit(template.render)
            with pytest.raises(UndefinedError):
                future.result()
