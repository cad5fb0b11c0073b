"""Tests for PromiseSchema under the sync and async entry points."""

import asyncio
import gc
import inspect
import warnings
from collections.abc import Generator
from typing import Any

import pytest

import shapecheck as sc
from shapecheck.domain.issues import IssueCode
from shapecheck.domain.result import ParseFailure
from tests.conftest import issues_of


async def _resolve(value: Any) -> Any:
    await asyncio.sleep(0)
    return value


async def _await(value: Any) -> Any:
    return await value


class _Ready:
    """Awaitable that is not a coroutine, so dropping it never warns."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def __await__(self) -> Generator[None, None, Any]:
        return self.value
        yield


class TestPromiseSync:
    schema = sc.promise(sc.number())

    def test_rejects_non_awaitable(self) -> None:
        [issue] = issues_of(self.schema, 5)
        assert issue.code is IssueCode.TYPE_MISMATCH
        assert issue.message == "Expected promise, received number"

    def test_output_is_awaitable_resolving_to_parsed_value(self) -> None:
        deferred = self.schema.parse(_resolve(5))
        assert asyncio.run(_await(deferred)) == 5

    def test_deferred_failure_raises_with_path(self) -> None:
        schema = sc.object_({"total": sc.promise(sc.number())})
        out = schema.parse({"total": _resolve("five")})
        with pytest.raises(sc.SchemaValidationError) as excinfo:
            asyncio.run(_await(out["total"]))
        [issue] = excinfo.value.issues
        assert issue.path == ("total",)
        assert issue.message == "Expected number, received string"

    def test_output_starts_nothing_until_awaited(self) -> None:
        deferred = self.schema.parse(_Ready(5))
        assert inspect.isawaitable(deferred)
        assert not inspect.iscoroutine(deferred)
        assert asyncio.run(_await(deferred)) == 5

    def test_discarded_by_failed_parent_leaves_nothing_pending(self) -> None:
        schema = sc.object_({"total": sc.promise(sc.number()), "name": sc.string()})
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = schema.safe_parse({"total": _Ready(5), "name": 1})
            del result
            gc.collect()
        assert not [w for w in caught if issubclass(w.category, RuntimeWarning)]


class TestPromiseAsync:
    def test_resolves_inline(self) -> None:
        schema = sc.promise(sc.string())
        assert asyncio.run(schema.parse_async(_resolve("ok"))) == "ok"

    def test_nested_inside_containers(self) -> None:
        schema = sc.object_(
            {
                "user": sc.promise(sc.object_({"name": sc.string()})),
                "scores": sc.array(sc.promise(sc.number())),
            }
        )
        value = {"user": _resolve({"name": "Faizan", "x": 1}), "scores": [_resolve(1), _resolve(2)]}
        assert asyncio.run(schema.parse_async(value)) == {
            "user": {"name": "Faizan"},
            "scores": [1, 2],
        }

    def test_issues_located_inside_resolved_value(self) -> None:
        schema = sc.object_({"scores": sc.array(sc.promise(sc.number()))})
        value = {"scores": [_resolve(1), _resolve("two")]}
        result = asyncio.run(schema.safe_parse_async(value))
        assert isinstance(result, ParseFailure)
        assert [i.path for i in result.issues] == [("scores", 1)]

    def test_promise_of_promise(self) -> None:
        schema = sc.promise(sc.promise(sc.number()))

        async def outer() -> Any:
            return _resolve(3)

        assert asyncio.run(schema.parse_async(outer())) == 3

    def test_parse_async_raises(self) -> None:
        with pytest.raises(sc.SchemaValidationError):
            asyncio.run(sc.promise(sc.number()).parse_async(_resolve(None)))

    def test_timeout_imposed_by_caller(self) -> None:
        async def never_resolves() -> int:
            await asyncio.Event().wait()
            return 1

        async def run() -> Any:
            return await asyncio.wait_for(
                sc.promise(sc.number()).parse_async(never_resolves()),
                timeout=0.01,
            )

        with pytest.raises(TimeoutError):
            asyncio.run(run())
