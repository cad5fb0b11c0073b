"""Primitive schemas: string, number, boolean, date, literal, enum, and
the catch-all kinds (any, unknown, never, null).

Bounds and formats are stored as :class:`Check` tuples; every check is
evaluated so a single parse reports each violated constraint.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from fractions import Fraction
from typing import Any
from urllib.parse import urlparse

from shapecheck.domain.errors import SchemaDefinitionError
from shapecheck.domain.issues import IssueCode
from shapecheck.schemas.base import (
    Check,
    CheckedSchema,
    Schema,
    length_checks,
    max_length_check,
    min_length_check,
)
from shapecheck.schemas.context import INVALID, ParseContext

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme and (parsed.netloc or parsed.path))


def _display(value: Any) -> str:
    """Render a literal/enum value the way it appears in messages."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _same_value(left: Any, right: Any) -> bool:
    """Equality that keeps ``True`` and ``1`` apart."""
    return type(left) is type(right) and left == right


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class StringSchema(CheckedSchema):
    """Accepts ``str`` values."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, str):
            ctx.add_type_issue("string", value)
            return INVALID
        if not self._run_checks(value, ctx):
            return INVALID
        return value

    def min(self, length: int, message: str | None = None) -> StringSchema:
        return self._with_check(min_length_check("String", "character", length, message))

    def max(self, length: int, message: str | None = None) -> StringSchema:
        return self._with_check(max_length_check("String", "character", length, message))

    def length(self, length: int, message: str | None = None) -> StringSchema:
        low, high = length_checks("String", "character", "length", length, message)
        return self._with_check(low)._with_check(high)

    def nonempty(self, message: str | None = None) -> StringSchema:
        return self.min(1, message)

    def _format(self, name: str, test: Any, message: str, **params: Any) -> StringSchema:
        return self._with_check(
            Check(
                name=name,
                code=IssueCode.TYPE_MISMATCH,
                message=message,
                test=test,
                params={"format": name, **params},
            )
        )

    def email(self, message: str | None = None) -> StringSchema:
        text = message or "Invalid email"
        return self._format("email", lambda v: EMAIL_PATTERN.match(v) is not None, text)

    def url(self, message: str | None = None) -> StringSchema:
        return self._format("url", _is_url, message or "Invalid url")

    def uuid(self, message: str | None = None) -> StringSchema:
        text = message or "Invalid uuid"
        return self._format("uuid", lambda v: UUID_PATTERN.match(v) is not None, text)

    def regex(self, pattern: str | re.Pattern[str], message: str | None = None) -> StringSchema:
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            msg = f"regex() received an invalid pattern: {exc}"
            raise SchemaDefinitionError(msg) from exc
        return self._format(
            "regex",
            lambda v: compiled.search(v) is not None,
            message or f"Invalid string: must match pattern {compiled.pattern}",
            pattern=compiled.pattern,
        )

    def starts_with(self, prefix: str, message: str | None = None) -> StringSchema:
        return self._format(
            "starts_with",
            lambda v: v.startswith(prefix),
            message or f'Invalid input: must start with "{prefix}"',
            prefix=prefix,
        )

    def ends_with(self, suffix: str, message: str | None = None) -> StringSchema:
        return self._format(
            "ends_with",
            lambda v: v.endswith(suffix),
            message or f'Invalid input: must end with "{suffix}"',
            suffix=suffix,
        )

    def includes(self, needle: str, message: str | None = None) -> StringSchema:
        return self._format(
            "includes",
            lambda v: needle in v,
            message or f'Invalid input: must include "{needle}"',
            includes=needle,
        )

    @property
    def min_length(self) -> int | None:
        return self._bound("minimum", max)

    @property
    def max_length(self) -> int | None:
        return self._bound("maximum", min)

    @property
    def formats(self) -> tuple[str, ...]:
        return tuple(c.params["format"] for c in self.checks if "format" in c.params)


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------


def _require_number(method: str, value: Any) -> None:
    is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
    if not is_number or (isinstance(value, float) and math.isnan(value)):
        msg = f"{method}() expects a number, got {value!r}"
        raise SchemaDefinitionError(msg)


def _is_finite(value: float) -> bool:
    """Ints are always finite, however large."""
    return isinstance(value, int) or math.isfinite(value)


def _is_multiple(value: float, step: float) -> bool:
    if isinstance(value, int) and isinstance(step, int):
        return value % step == 0
    if not _is_finite(value):
        return False
    # Exact rational remainder; floats tolerate representation error.
    size = abs(Fraction(step))
    remainder = Fraction(value) % size
    return math.isclose(float(min(remainder, size - remainder)), 0, abs_tol=1e-9)


@dataclass(frozen=True, eq=False, kw_only=True)
class NumberSchema(CheckedSchema):
    """Accepts ``int`` and ``float`` values. ``bool`` and NaN are rejected."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not is_number or (isinstance(value, float) and math.isnan(value)):
            ctx.add_type_issue("number", value)
            return INVALID
        if not self._run_checks(value, ctx):
            return INVALID
        return value

    def _lower(self, bound: float, inclusive: bool, message: str | None) -> NumberSchema:
        _require_number("gte" if inclusive else "gt", bound)
        relation = "greater than or equal to" if inclusive else "greater than"
        return self._with_check(
            Check(
                name="min",
                code=IssueCode.TOO_SMALL,
                message=message or f"Number must be {relation} {bound}",
                test=(lambda v: v >= bound) if inclusive else (lambda v: v > bound),
                params={"minimum": bound, "inclusive": inclusive, "type": "number"},
            )
        )

    def _upper(self, bound: float, inclusive: bool, message: str | None) -> NumberSchema:
        _require_number("lte" if inclusive else "lt", bound)
        relation = "less than or equal to" if inclusive else "less than"
        return self._with_check(
            Check(
                name="max",
                code=IssueCode.TOO_BIG,
                message=message or f"Number must be {relation} {bound}",
                test=(lambda v: v <= bound) if inclusive else (lambda v: v < bound),
                params={"maximum": bound, "inclusive": inclusive, "type": "number"},
            )
        )

    def gt(self, bound: float, message: str | None = None) -> NumberSchema:
        return self._lower(bound, False, message)

    def gte(self, bound: float, message: str | None = None) -> NumberSchema:
        return self._lower(bound, True, message)

    min = gte

    def lt(self, bound: float, message: str | None = None) -> NumberSchema:
        return self._upper(bound, False, message)

    def lte(self, bound: float, message: str | None = None) -> NumberSchema:
        return self._upper(bound, True, message)

    max = lte

    def positive(self, message: str | None = None) -> NumberSchema:
        return self.gt(0, message)

    def negative(self, message: str | None = None) -> NumberSchema:
        return self.lt(0, message)

    def nonnegative(self, message: str | None = None) -> NumberSchema:
        return self.gte(0, message)

    def nonpositive(self, message: str | None = None) -> NumberSchema:
        return self.lte(0, message)

    def int(self, message: str | None = None) -> NumberSchema:
        return self._with_check(
            Check(
                name="int",
                code=IssueCode.TYPE_MISMATCH,
                message=message or "Expected integer, received float",
                test=lambda v: isinstance(v, int) or (math.isfinite(v) and v.is_integer()),
                params={"expected": "integer", "received": "float"},
            )
        )

    def multiple_of(self, step: float, message: str | None = None) -> NumberSchema:
        _require_number("multiple_of", step)
        if step == 0 or not _is_finite(step):
            msg = f"multiple_of() expects a finite non-zero step, got {step!r}"
            raise SchemaDefinitionError(msg)
        return self._with_check(
            Check(
                name="multiple_of",
                code=IssueCode.CUSTOM,
                message=message or f"Number must be a multiple of {step}",
                test=lambda v: _is_multiple(v, step),
                params={"multiple_of": step},
            )
        )

    def finite(self, message: str | None = None) -> NumberSchema:
        return self._with_check(
            Check(
                name="finite",
                code=IssueCode.CUSTOM,
                message=message or "Number must be finite",
                test=_is_finite,
                params={"finite": True},
            )
        )

    @property
    def min_value(self) -> float | None:
        return self._bound("minimum", max)

    @property
    def max_value(self) -> float | None:
        return self._bound("maximum", min)

    @property
    def is_int(self) -> bool:
        return any(c.name == "int" for c in self.checks)


# ---------------------------------------------------------------------------
# Boolean / Date
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class BooleanSchema(Schema):
    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, bool):
            ctx.add_type_issue("boolean", value)
            return INVALID
        return value


def _is_aware(value: date) -> bool:
    return isinstance(value, datetime) and value.utcoffset() is not None


def _aligned(value: date, bound: date) -> date:
    """Convert *value* to the kind of *bound* (date or datetime) for comparison.

    A plain date compared with a datetime bound is taken at midnight in
    the bound's timezone; a datetime compared with a plain date bound
    is reduced to its calendar date.
    """
    if isinstance(bound, datetime):
        if isinstance(value, datetime):
            return value
        return datetime.combine(value, time.min, tzinfo=bound.tzinfo)
    if isinstance(value, datetime):
        return value.date()
    return value


def _require_date(method: str, value: Any) -> None:
    if not isinstance(value, date):
        msg = f"{method}() expects a date or datetime, got {value!r}"
        raise SchemaDefinitionError(msg)


@dataclass(frozen=True, eq=False, kw_only=True)
class DateSchema(CheckedSchema):
    """Accepts ``datetime.date`` and ``datetime.datetime`` instances.

    Bounds may be dates or datetimes; values are compared after
    :func:`_aligned`. A naive datetime checked against an aware datetime
    bound (or the reverse) cannot be ordered and fails with
    ``type_mismatch``.
    """

    def _awareness_conflict(self, value: date) -> bool:
        if not isinstance(value, datetime):
            return False
        bounds = [c.params.get("minimum", c.params.get("maximum")) for c in self.checks]
        return any(
            isinstance(bound, datetime) and _is_aware(bound) != _is_aware(value)
            for bound in bounds
        )

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, date):
            ctx.add_type_issue("date", value)
            return INVALID
        if self._awareness_conflict(value):
            received = "aware" if _is_aware(value) else "naive"
            expected = "naive" if received == "aware" else "aware"
            ctx.add_issue(
                IssueCode.TYPE_MISMATCH,
                f"Expected {expected} datetime, received {received} datetime",
                expected=f"{expected} datetime",
                received=f"{received} datetime",
            )
            return INVALID
        if not self._run_checks(value, ctx):
            return INVALID
        return value

    def min(self, bound: date, message: str | None = None) -> DateSchema:
        _require_date("min", bound)
        return self._with_check(
            Check(
                name="min",
                code=IssueCode.TOO_SMALL,
                message=message or f"Date must be greater than or equal to {bound.isoformat()}",
                test=lambda v: _aligned(v, bound) >= bound,
                params={"minimum": bound, "inclusive": True, "type": "date"},
            )
        )

    def max(self, bound: date, message: str | None = None) -> DateSchema:
        _require_date("max", bound)
        return self._with_check(
            Check(
                name="max",
                code=IssueCode.TOO_BIG,
                message=message or f"Date must be smaller than or equal to {bound.isoformat()}",
                test=lambda v: _aligned(v, bound) <= bound,
                params={"maximum": bound, "inclusive": True, "type": "date"},
            )
        )

    @property
    def min_date(self) -> date | None:
        return self._bound("minimum", max)

    @property
    def max_date(self) -> date | None:
        return self._bound("maximum", min)


# ---------------------------------------------------------------------------
# Literal / Enum
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class LiteralSchema(Schema):
    """Accepts exactly one value, compared by type and equality."""

    value: Any

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not _same_value(value, self.value):
            ctx.add_issue(
                IssueCode.INVALID_LITERAL,
                f"Invalid literal value, expected {_display(self.value)}",
                expected=self.value,
                received=value,
            )
            return INVALID
        return value


@dataclass(frozen=True, eq=False, kw_only=True)
class EnumSchema(Schema):
    """Accepts one of a fixed, ordered tuple of values."""

    options: tuple[Any, ...]

    def __post_init__(self) -> None:
        options = tuple(self.options)
        if not options:
            msg = "enum_() requires at least one value"
            raise SchemaDefinitionError(msg)
        seen: list[Any] = []
        for option in options:
            if any(_same_value(option, prior) for prior in seen):
                msg = f"enum_() received duplicate value {option!r}"
                raise SchemaDefinitionError(msg)
            seen.append(option)
        object.__setattr__(self, "options", options)

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not any(_same_value(value, option) for option in self.options):
            expected = " | ".join(_display(o) for o in self.options)
            ctx.add_issue(
                IssueCode.INVALID_ENUM_VALUE,
                f"Invalid enum value. Expected {expected}, received {_display(value)}",
                options=list(self.options),
                received=value,
            )
            return INVALID
        return value

    def _check_members(self, method: str, values: Sequence[Any]) -> None:
        unknown = [v for v in values if not any(_same_value(v, o) for o in self.options)]
        if unknown:
            msg = f"{method}() received values not in the enum: {unknown!r}"
            raise SchemaDefinitionError(msg)

    def extract(self, *values: Any) -> EnumSchema:
        """Enum restricted to *values*."""
        self._check_members("extract", values)
        return EnumSchema(options=values)

    def exclude(self, *values: Any) -> EnumSchema:
        """Enum without *values*."""
        self._check_members("exclude", values)
        kept = tuple(o for o in self.options if not any(_same_value(o, v) for v in values))
        return EnumSchema(options=kept)


# ---------------------------------------------------------------------------
# Catch-all kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False, kw_only=True)
class AnySchema(Schema):
    """Accepts every value, including an absent one."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        return value


@dataclass(frozen=True, eq=False, kw_only=True)
class UnknownSchema(AnySchema):
    """Accepts every value; callers are expected to narrow it themselves."""


@dataclass(frozen=True, eq=False, kw_only=True)
class NeverSchema(Schema):
    """Rejects every value."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        ctx.add_type_issue("never", value)
        return INVALID


@dataclass(frozen=True, eq=False, kw_only=True)
class NullSchema(Schema):
    """Accepts only ``None``."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if value is not None:
            ctx.add_type_issue("null", value)
            return INVALID
        return value
