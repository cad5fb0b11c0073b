"""Exception hierarchy for shapecheck.

Two fault classes are kept apart:

- :class:`SchemaDefinitionError` — misuse while *building* a schema
  (unknown key in ``pick``, a one-option union). Raised at build time.
- :class:`SchemaValidationError` — input rejected while *parsing*.
  Raised only by the raising entry points and always carries every
  issue collected during the call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from shapecheck.domain.issues import Issue


class ShapecheckError(Exception):
    """Base class for every error raised by shapecheck."""


class SchemaDefinitionError(ShapecheckError, ValueError):
    """A schema was constructed with invalid arguments."""


class AsyncParseRequired(ShapecheckError, RuntimeError):
    """An awaitable was produced during a synchronous parse.

    Async refinements can only run under ``parse_async`` or
    ``safe_parse_async``.
    """


class SchemaValidationError(ShapecheckError, ValueError):
    """Input failed validation.

    Attributes:
        issues: Every issue found, in discovery order.
    """

    def __init__(self, issues: Iterable[Issue]) -> None:
        self.issues: tuple[Issue, ...] = tuple(issues)
        super().__init__(self.issues)

    def __str__(self) -> str:
        from shapecheck.output.formatters import format_issues

        return format_issues(self.issues)

    def __repr__(self) -> str:
        return f"SchemaValidationError({len(self.issues)} issue(s))"

    def flatten(self) -> dict[str, Any]:
        """Group issue messages by top-level field. See :func:`flatten_issues`."""
        from shapecheck.output.formatters import flatten_issues

        return flatten_issues(self.issues)
