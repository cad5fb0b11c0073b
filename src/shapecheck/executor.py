"""Validation executor — the four entry points.

``parse`` and ``safe_parse`` never disagree: ``parse`` raises exactly
when ``safe_parse`` returns a :class:`ParseFailure`, and both collect
every issue before reporting.

The async variants await promise schemas and async refinements nested
anywhere in the schema before returning a fully validated value.
"""

from __future__ import annotations

import logging
from typing import Any

from shapecheck.domain.issues import MISSING
from shapecheck.domain.result import ParseFailure, ParseResult, ParseSuccess
from shapecheck.schemas.base import Schema
from shapecheck.schemas.context import ParseContext

logger = logging.getLogger(__name__)


def _result(schema: Schema, data: Any, ctx: ParseContext) -> ParseResult:
    if ctx.issues:
        logger.debug(
            "%s rejected input with %d issue(s)",
            type(schema).__name__,
            len(ctx.issues),
        )
        return ParseFailure(issues=tuple(ctx.issues))
    return ParseSuccess(data=data)


def safe_parse(schema: Schema, value: Any = MISSING) -> ParseResult:
    """Validate *value* against *schema* without raising on invalid input.

    Returns:
        ``ParseSuccess`` with the parsed data, or ``ParseFailure`` with
        every issue found.
    """
    ctx = ParseContext()
    data = schema._parse(value, ctx)
    return _result(schema, data, ctx)


def parse(schema: Schema, value: Any = MISSING) -> Any:
    """Validate *value* against *schema* and return the parsed data.

    Raises:
        SchemaValidationError: If validation fails. Carries every issue.
    """
    result = safe_parse(schema, value)
    if isinstance(result, ParseFailure):
        raise result.error
    return result.data


async def safe_parse_async(schema: Schema, value: Any = MISSING) -> ParseResult:
    """Async :func:`safe_parse`; awaits promises and async refinements."""
    ctx = ParseContext()
    data = await schema._parse_async(value, ctx)
    return _result(schema, data, ctx)


async def parse_async(schema: Schema, value: Any = MISSING) -> Any:
    """Async :func:`parse`; awaits promises and async refinements."""
    result = await safe_parse_async(schema, value)
    if isinstance(result, ParseFailure):
        raise result.error
    return result.data
