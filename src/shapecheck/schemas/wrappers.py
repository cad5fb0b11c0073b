"""Wrapper schemas: optional, nullable, default, refinement, and promise.

Each wrapper holds an ``inner`` schema and decides, before or after
delegating to it, how absent values, ``None``, predicates, and
awaitables are handled.
"""

from __future__ import annotations

import copy
import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine, Generator
from dataclasses import dataclass
from typing import Any

from shapecheck.domain.errors import (
    AsyncParseRequired,
    SchemaDefinitionError,
    SchemaValidationError,
)
from shapecheck.domain.issues import MISSING, IssueCode, PathSegment
from shapecheck.schemas.base import Schema
from shapecheck.schemas.context import INVALID, ParseContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, kw_only=True)
class WrapperSchema(Schema):
    """Schema delegating to a single ``inner`` schema."""

    inner: Schema

    def __post_init__(self) -> None:
        if not isinstance(self.inner, Schema):
            msg = f"{type(self).__name__} expects a schema, got {type(self.inner).__name__}"
            raise SchemaDefinitionError(msg)

    def unwrap(self) -> Schema:
        return self.inner


@dataclass(frozen=True, eq=False, kw_only=True)
class OptionalSchema(WrapperSchema):
    """Accepts an absent value; anything else goes to ``inner``."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            return MISSING
        return self.inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            return MISSING
        return await self.inner._parse_async(value, ctx)


@dataclass(frozen=True, eq=False, kw_only=True)
class NullableSchema(WrapperSchema):
    """Accepts ``None``; anything else goes to ``inner``."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is None:
            return None
        return self.inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is None:
            return None
        return await self.inner._parse_async(value, ctx)


@dataclass(frozen=True, eq=False, kw_only=True)
class DefaultSchema(WrapperSchema):
    """Substitutes ``default_value`` for an absent input, then validates it."""

    default_value: Any

    def materialize(self) -> Any:
        """Return a fresh default for one parse."""
        if callable(self.default_value):
            return self.default_value()
        return copy.deepcopy(self.default_value)

    def remove_default(self) -> Schema:
        return self.inner

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            value = self.materialize()
        return self.inner._parse(value, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if value is MISSING:
            value = self.materialize()
        return await self.inner._parse_async(value, ctx)


@dataclass(frozen=True, eq=False, kw_only=True)
class RefinedSchema(WrapperSchema):
    """Runs ``predicate`` on the parsed value once ``inner`` has accepted it.

    Attributes:
        predicate: Returns truthy to accept. May return an awaitable only
            under the async entry points.
        message: Message of the ``custom`` issue recorded on rejection.
        path: Extra segments appended to the current path for that issue.
    """

    predicate: Callable[[Any], Any]
    message: str = "Invalid input"
    path: tuple[PathSegment, ...] = ()

    def _verdict(self, outcome: Any, result: Any, ctx: ParseContext) -> Any:
        if outcome:
            return result
        ctx.add_issue(IssueCode.CUSTOM, self.message, path=self.path)
        return INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        result = self.inner._parse(value, ctx)
        if result is INVALID:
            return INVALID
        outcome = self.predicate(result)
        if inspect.isawaitable(outcome):
            if inspect.iscoroutine(outcome):
                outcome.close()
            msg = "Asynchronous refinement encountered during synchronous parse; use parse_async()"
            raise AsyncParseRequired(msg)
        return self._verdict(outcome, result, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        result = await self.inner._parse_async(value, ctx)
        if result is INVALID:
            return INVALID
        outcome = self.predicate(result)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return self._verdict(outcome, result, ctx)


class DeferredResult:
    """Awaitable returned for a promise under a synchronous parse.

    Nothing runs until the first ``await``, so a result discarded by a
    failed parent parse leaves no coroutine pending.
    """

    __slots__ = ("_start",)

    def __init__(self, start: Callable[[], Coroutine[Any, Any, Any]]) -> None:
        self._start = start

    def __await__(self) -> Generator[Any, None, Any]:
        return self._start().__await__()


@dataclass(frozen=True, eq=False, kw_only=True)
class PromiseSchema(WrapperSchema):
    """Accepts an awaitable whose resolved value must satisfy ``inner``.

    Under ``parse``/``safe_parse`` the output is a :class:`DeferredResult`
    that resolves and validates the input when awaited, raising
    ``SchemaValidationError`` with issues located at this schema's path.
    Under the async entry points the awaitable is resolved inline.
    """

    def _accepts(self, value: Any, ctx: ParseContext) -> bool:
        if inspect.isawaitable(value):
            return True
        ctx.add_type_issue("promise", value)
        return False

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        return DeferredResult(functools.partial(self._deferred, value, ctx.path))

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._accepts(value, ctx):
            return INVALID
        resolved = await value
        return await self.inner._parse_async(resolved, ctx)

    async def _deferred(self, awaitable: Awaitable[Any], path: tuple[PathSegment, ...]) -> Any:
        resolved = await awaitable
        ctx = ParseContext(path=path)
        result = await self.inner._parse_async(resolved, ctx)
        if ctx.issues:
            logger.debug("Deferred value at %r failed with %d issue(s)", path, len(ctx.issues))
            raise SchemaValidationError(ctx.issues)
        return result
