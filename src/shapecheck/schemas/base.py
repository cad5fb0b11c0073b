"""Schema ABC and the modifier combinators shared by every schema.

Schemas are frozen dataclasses. Every combinator returns a new schema
via :func:`dataclasses.replace` or by wrapping the receiver; nothing
mutates a schema after construction.

Each concrete schema implements ``_parse`` (synchronous) and, when it
has children, ``_parse_async`` so promise schemas and async refinements
nested anywhere can be awaited by the async entry points.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from shapecheck.domain.errors import SchemaDefinitionError
from shapecheck.domain.issues import MISSING, IssueCode, PathSegment

if TYPE_CHECKING:
    from shapecheck.domain.result import ParseResult
    from shapecheck.schemas.collections import ArraySchema
    from shapecheck.schemas.context import ParseContext
    from shapecheck.schemas.unions import UnionSchema
    from shapecheck.schemas.wrappers import (
        DefaultSchema,
        NullableSchema,
        OptionalSchema,
        RefinedSchema,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False, kw_only=True)
class Schema(ABC):
    """Abstract base for all schema descriptors."""

    @abstractmethod
    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        """Validate *value*, returning the output or ``INVALID``.

        INVARIANT: ``INVALID`` is returned if and only if at least one
        issue was added to ``ctx`` by this call.
        """
        ...

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        """Async counterpart of :meth:`_parse`. Leaves have nothing to await."""
        return self._parse(value, ctx)

    # --- Entry points ---

    def parse(self, value: Any = MISSING) -> Any:
        """Return the parsed value or raise ``SchemaValidationError``."""
        from shapecheck.executor import parse

        return parse(self, value)

    def safe_parse(self, value: Any = MISSING) -> ParseResult:
        """Return ``ParseSuccess`` or ``ParseFailure``; never raises on bad input."""
        from shapecheck.executor import safe_parse

        return safe_parse(self, value)

    async def parse_async(self, value: Any = MISSING) -> Any:
        from shapecheck.executor import parse_async

        return await parse_async(self, value)

    async def safe_parse_async(self, value: Any = MISSING) -> ParseResult:
        from shapecheck.executor import safe_parse_async

        return await safe_parse_async(self, value)

    def is_optional(self) -> bool:
        """Whether an absent value is accepted."""
        return self.safe_parse(MISSING).success

    def is_nullable(self) -> bool:
        """Whether an explicit ``None`` is accepted."""
        return self.safe_parse(None).success

    # --- Modifiers ---

    def optional(self) -> OptionalSchema:
        from shapecheck.schemas.wrappers import OptionalSchema

        return OptionalSchema(inner=self)

    def nullable(self) -> NullableSchema:
        from shapecheck.schemas.wrappers import NullableSchema

        return NullableSchema(inner=self)

    def nullish(self) -> OptionalSchema:
        """Accept both an absent value and ``None``."""
        return self.nullable().optional()

    def default(self, value: Any) -> DefaultSchema:
        """Substitute *value* when the input is absent (never when ``None``).

        A callable *value* is invoked on every parse; anything else is
        deep-copied so parses never share a mutable default.
        """
        from shapecheck.schemas.wrappers import DefaultSchema

        return DefaultSchema(inner=self, default_value=value)

    def refine(
        self,
        predicate: Callable[[Any], Any],
        message: str = "Invalid input",
        *,
        path: tuple[PathSegment, ...] = (),
    ) -> RefinedSchema:
        """Apply *predicate* to the parsed value once base validation passes.

        A falsy result records a ``custom`` issue carrying *message* at
        this schema's path, extended by *path* when given.
        """
        from shapecheck.schemas.wrappers import RefinedSchema

        if not callable(predicate):
            msg = f"refine() expects a callable, got {type(predicate).__name__}"
            raise SchemaDefinitionError(msg)
        return RefinedSchema(inner=self, predicate=predicate, message=message, path=tuple(path))

    def array(self) -> ArraySchema:
        from shapecheck.schemas.collections import ArraySchema

        return ArraySchema(element=self)

    def or_(self, other: Schema) -> UnionSchema:
        from shapecheck.schemas.unions import UnionSchema

        return UnionSchema(options=(self, other))


@dataclass(frozen=True)
class Check:
    """One constraint evaluated against an already type-checked value.

    Attributes:
        name: Constraint identifier (``"min"``, ``"email"``, ...).
        code: Issue code recorded when ``test`` fails.
        message: Issue message recorded when ``test`` fails.
        test: Predicate returning True when the value satisfies the check.
        params: Issue params, also used by accessor properties.
    """

    name: str
    code: IssueCode
    message: str
    test: Callable[[Any], bool]
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=False, kw_only=True)
class CheckedSchema(Schema):
    """Schema carrying an ordered tuple of :class:`Check` constraints."""

    checks: tuple[Check, ...] = ()

    def _with_check(self, check: Check) -> Any:
        return replace(self, checks=(*self.checks, check))

    def _run_checks(self, value: Any, ctx: ParseContext) -> bool:
        """Evaluate every check; all failures are recorded. Returns True if none failed."""
        passed = True
        for check in self.checks:
            if not check.test(value):
                ctx.add_issue(check.code, check.message, **check.params)
                passed = False
        return passed

    def _bound(self, key: str, pick: Callable[..., Any]) -> Any:
        values = [c.params[key] for c in self.checks if key in c.params]
        return pick(values) if values else None


def require_non_negative(method: str, value: int) -> None:
    """Reject negative length/size bounds at build time."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        logger.debug("Rejected %s bound: %r", method, value)
        msg = f"{method}() expects a non-negative integer, got {value!r}"
        raise SchemaDefinitionError(msg)


def length_checks(
    kind: str, unit: str, method: str, length: int, message: str | None
) -> tuple[Check, Check]:
    """Build the pair of checks behind an exact ``length``/``size`` constraint."""
    require_non_negative(method, length)
    text = message or f"{kind} must contain exactly {length} {unit}(s)"
    return (
        Check(
            name=method,
            code=IssueCode.TOO_SMALL,
            message=text,
            test=lambda v: len(v) >= length,
            params={"minimum": length, "inclusive": True, "exact": True, "type": kind.lower()},
        ),
        Check(
            name=method,
            code=IssueCode.TOO_BIG,
            message=text,
            test=lambda v: len(v) <= length,
            params={"maximum": length, "inclusive": True, "exact": True, "type": kind.lower()},
        ),
    )


def min_length_check(kind: str, unit: str, minimum: int, message: str | None) -> Check:
    require_non_negative("min", minimum)
    return Check(
        name="min",
        code=IssueCode.TOO_SMALL,
        message=message or f"{kind} must contain at least {minimum} {unit}(s)",
        test=lambda v: len(v) >= minimum,
        params={"minimum": minimum, "inclusive": True, "type": kind.lower()},
    )


def max_length_check(kind: str, unit: str, maximum: int, message: str | None) -> Check:
    require_non_negative("max", maximum)
    return Check(
        name="max",
        code=IssueCode.TOO_BIG,
        message=message or f"{kind} must contain at most {maximum} {unit}(s)",
        test=lambda v: len(v) <= maximum,
        params={"maximum": maximum, "inclusive": True, "type": kind.lower()},
    )
