"""Container schemas: array, tuple, record, map, and set.

INVARIANT: containers never short-circuit. Every element is validated
and every element issue is collected under an index- or key-prefixed
path, so one parse surfaces every fault.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from shapecheck.domain.errors import SchemaDefinitionError
from shapecheck.domain.issues import IssueCode, PathSegment
from shapecheck.schemas.base import (
    CheckedSchema,
    Schema,
    length_checks,
    max_length_check,
    min_length_check,
)
from shapecheck.schemas.context import INVALID, ParseContext
from shapecheck.schemas.primitives import StringSchema


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _key_segment(key: Any) -> PathSegment:
    """Path segment for a mapping key; keys that are not str or int use their repr."""
    if isinstance(key, str) or (isinstance(key, int) and not isinstance(key, bool)):
        return key
    return repr(key)


def _require_schema(method: str, value: Any) -> None:
    if not isinstance(value, Schema):
        msg = f"{method}() expects a schema, got {type(value).__name__}"
        raise SchemaDefinitionError(msg)


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class ArraySchema(CheckedSchema):
    """Uniform list of ``element`` values. Accepts lists and tuples, outputs a list."""

    element: Schema

    def __post_init__(self) -> None:
        _require_schema("array", self.element)

    def _accepts(self, value: Any, ctx: ParseContext) -> bool:
        if not _is_sequence(value):
            ctx.add_type_issue("array", value)
            return False
        return True

    @staticmethod
    def _collect(results: list[Any], passed: bool) -> Any:
        if not passed or any(r is INVALID for r in results):
            return INVALID
        return results

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        passed = self._run_checks(value, ctx)
        results = [self.element._parse(item, ctx.child(i)) for i, item in enumerate(value)]
        return self._collect(results, passed)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        passed = self._run_checks(value, ctx)
        results = [
            await self.element._parse_async(item, ctx.child(i)) for i, item in enumerate(value)
        ]
        return self._collect(results, passed)

    def min(self, length: int, message: str | None = None) -> ArraySchema:
        return self._with_check(min_length_check("Array", "element", length, message))

    def max(self, length: int, message: str | None = None) -> ArraySchema:
        return self._with_check(max_length_check("Array", "element", length, message))

    def length(self, length: int, message: str | None = None) -> ArraySchema:
        low, high = length_checks("Array", "element", "length", length, message)
        return self._with_check(low)._with_check(high)

    def nonempty(self, message: str | None = None) -> ArraySchema:
        return self.min(1, message)

    @property
    def min_length(self) -> int | None:
        return self._bound("minimum", max)

    @property
    def max_length(self) -> int | None:
        return self._bound("maximum", min)


# ---------------------------------------------------------------------------
# Tuple
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class TupleSchema(Schema):
    """Fixed-position ``items`` plus an optional ``rest`` schema for the tail.

    Accepts lists and tuples; outputs a tuple in input order.
    """

    items: tuple[Schema, ...]
    rest: Schema | None = None

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            _require_schema("tuple_", item)
        if self.rest is not None:
            _require_schema("rest", self.rest)
        object.__setattr__(self, "items", items)

    def _plan(self, value: Any, ctx: ParseContext) -> list[tuple[Schema, Any]] | None:
        """Pair each element with its schema, or return None when nothing can be checked."""
        if not _is_sequence(value):
            ctx.add_type_issue("array", value)
            return None
        fixed = len(self.items)
        if len(value) < fixed:
            ctx.add_issue(
                IssueCode.TOO_SMALL,
                f"Array must contain at least {fixed} element(s)",
                minimum=fixed,
                inclusive=True,
                type="array",
            )
            return None
        if self.rest is None and len(value) > fixed:
            ctx.add_issue(
                IssueCode.TOO_BIG,
                f"Array must contain at most {fixed} element(s)",
                maximum=fixed,
                inclusive=True,
                type="array",
            )
            value = value[:fixed]
        return [(self.items[i] if i < fixed else self.rest, item) for i, item in enumerate(value)]

    @staticmethod
    def _collect(results: list[Any], ctx: ParseContext, mark: int) -> Any:
        if len(ctx.issues) > mark or any(r is INVALID for r in results):
            return INVALID
        return tuple(results)

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        mark = len(ctx.issues)
        plan = self._plan(value, ctx)
        if plan is None:
            return INVALID
        results = [schema._parse(item, ctx.child(i)) for i, (schema, item) in enumerate(plan)]
        return self._collect(results, ctx, mark)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        mark = len(ctx.issues)
        plan = self._plan(value, ctx)
        if plan is None:
            return INVALID
        results = [
            await schema._parse_async(item, ctx.child(i)) for i, (schema, item) in enumerate(plan)
        ]
        return self._collect(results, ctx, mark)

    def with_rest(self, rest: Schema) -> TupleSchema:
        """Tuple accepting any number of trailing *rest* elements."""
        return replace(self, rest=rest)


# ---------------------------------------------------------------------------
# Record / Map
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class RecordSchema(Schema):
    """Mapping with arbitrary keys; issues are located at each key.

    Keys that are neither ``str`` nor ``int`` appear in issue paths as
    their ``repr``.
    """

    value_schema: Schema
    key_schema: Schema = StringSchema()

    def __post_init__(self) -> None:
        _require_schema("record", self.value_schema)
        _require_schema("record", self.key_schema)

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, Mapping):
            ctx.add_type_issue("object", value)
            return INVALID
        mark = len(ctx.issues)
        output: dict[Any, Any] = {}
        for key, item in value.items():
            child = ctx.child(_key_segment(key))
            parsed_key = self.key_schema._parse(key, child)
            output[parsed_key] = self.value_schema._parse(item, child)
        return INVALID if len(ctx.issues) > mark else output

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, Mapping):
            ctx.add_type_issue("object", value)
            return INVALID
        mark = len(ctx.issues)
        output: dict[Any, Any] = {}
        for key, item in value.items():
            child = ctx.child(_key_segment(key))
            parsed_key = await self.key_schema._parse_async(key, child)
            output[parsed_key] = await self.value_schema._parse_async(item, child)
        return INVALID if len(ctx.issues) > mark else output


@dataclass(frozen=True, eq=False, kw_only=True)
class MapSchema(Schema):
    """Mapping whose keys may be any hashable value.

    Entry issues are located at ``(index, "key")`` or ``(index, "value")``
    since non-string keys cannot name a path segment.
    """

    key_schema: Schema
    value_schema: Schema

    def __post_init__(self) -> None:
        _require_schema("map_", self.key_schema)
        _require_schema("map_", self.value_schema)

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, Mapping):
            ctx.add_type_issue("map", value)
            return INVALID
        mark = len(ctx.issues)
        output: dict[Any, Any] = {}
        for index, (key, item) in enumerate(value.items()):
            parsed_key = self.key_schema._parse(key, ctx.child(index, "key"))
            parsed_value = self.value_schema._parse(item, ctx.child(index, "value"))
            if len(ctx.issues) == mark:
                output[parsed_key] = parsed_value
        return INVALID if len(ctx.issues) > mark else output

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, Mapping):
            ctx.add_type_issue("map", value)
            return INVALID
        mark = len(ctx.issues)
        output: dict[Any, Any] = {}
        for index, (key, item) in enumerate(value.items()):
            parsed_key = await self.key_schema._parse_async(key, ctx.child(index, "key"))
            parsed_value = await self.value_schema._parse_async(item, ctx.child(index, "value"))
            if len(ctx.issues) == mark:
                output[parsed_key] = parsed_value
        return INVALID if len(ctx.issues) > mark else output


# ---------------------------------------------------------------------------
# Set
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class SetSchema(CheckedSchema):
    """Set of ``element`` members. Accepts ``set``/``frozenset``, outputs a ``set``."""

    element: Schema

    def __post_init__(self) -> None:
        _require_schema("set_", self.element)

    def _accepts(self, value: Any, ctx: ParseContext) -> bool:
        if not isinstance(value, (set, frozenset)):
            ctx.add_type_issue("set", value)
            return False
        return True

    @staticmethod
    def _collect(results: Sequence[Any], passed: bool) -> Any:
        if not passed or any(r is INVALID for r in results):
            return INVALID
        return set(results)

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        passed = self._run_checks(value, ctx)
        results = [self.element._parse(member, ctx.child(i)) for i, member in enumerate(value)]
        return self._collect(results, passed)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        passed = self._run_checks(value, ctx)
        results = [
            await self.element._parse_async(member, ctx.child(i))
            for i, member in enumerate(value)
        ]
        return self._collect(results, passed)

    def min(self, size: int, message: str | None = None) -> SetSchema:
        return self._with_check(min_length_check("Set", "element", size, message))

    def max(self, size: int, message: str | None = None) -> SetSchema:
        return self._with_check(max_length_check("Set", "element", size, message))

    def size(self, size: int, message: str | None = None) -> SetSchema:
        low, high = length_checks("Set", "element", "size", size, message)
        return self._with_check(low)._with_check(high)

    def nonempty(self, message: str | None = None) -> SetSchema:
        return self.min(1, message)
