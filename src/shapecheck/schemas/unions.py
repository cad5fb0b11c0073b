"""Union of alternative schemas."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from shapecheck.domain.errors import SchemaDefinitionError
from shapecheck.domain.issues import Issue
from shapecheck.schemas.base import Schema
from shapecheck.schemas.context import INVALID, ParseContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, kw_only=True)
class UnionSchema(Schema):
    """Accepts a value matching any of ``options``, tried in declared order.

    The first alternative that records no issue wins. When every
    alternative fails, the first issue of each alternative is reported,
    so a union of N options yields exactly N issues.
    """

    options: tuple[Schema, ...]

    def __post_init__(self) -> None:
        options = tuple(self.options)
        if len(options) < 2:
            logger.debug("Rejected union with %d option(s)", len(options))
            msg = f"union() requires at least two options, got {len(options)}"
            raise SchemaDefinitionError(msg)
        for option in options:
            if not isinstance(option, Schema):
                msg = f"union() options must be schemas, got {type(option).__name__}"
                raise SchemaDefinitionError(msg)
        object.__setattr__(self, "options", options)

    @staticmethod
    def _report(failures: list[list[Issue]], ctx: ParseContext) -> Any:
        ctx.issues.extend(issues[0] for issues in failures)
        return INVALID

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        failures: list[list[Issue]] = []
        for option in self.options:
            attempt = ctx.fork()
            result = option._parse(value, attempt)
            if not attempt.issues:
                return result
            failures.append(attempt.issues)
        return self._report(failures, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        failures: list[list[Issue]] = []
        for option in self.options:
            attempt = ctx.fork()
            result = await option._parse_async(value, attempt)
            if not attempt.issues:
                return result
            failures.append(attempt.issues)
        return self._report(failures, ctx)

    def or_(self, other: Schema) -> UnionSchema:
        """Union extended with *other* as the last alternative."""
        return UnionSchema(options=(*self.options, other))
