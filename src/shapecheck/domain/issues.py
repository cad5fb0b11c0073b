"""Issue model, issue codes, and runtime type naming.

An Issue is a single located validation fault. Paths are tuples of
``str`` (mapping keys) and ``int`` (sequence indexes) segments, rooted
at the value handed to the executor.

Python has no ``undefined``: an absent value is represented by the
:data:`MISSING` sentinel, while ``None`` always means explicit null.
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Mapping
from datetime import date
from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, Field

PathSegment = str | int


class _MissingType(Enum):
    """Single-member enum so the sentinel survives copy and pickle."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _MissingType.MISSING


class IssueCode(StrEnum):
    """Machine-checkable classification of a validation fault."""

    TYPE_MISMATCH = "type_mismatch"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LITERAL = "invalid_literal"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    CUSTOM = "custom"


class Issue(BaseModel):
    """One validation fault located within nested input.

    Attributes:
        path: Key/index segments from the root value to the fault.
        code: Issue classification.
        message: Human-readable description.
        params: Machine-readable details (bounds, expected type, ...).
    """

    model_config = {"frozen": True}

    path: tuple[PathSegment, ...] = ()
    code: IssueCode
    message: str
    params: dict[str, Any] = Field(default_factory=dict)


def get_type_name(value: Any) -> str:
    """Describe the runtime kind of *value* for type-mismatch messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "number"
    if isinstance(value, float):
        return "nan" if math.isnan(value) else "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, date):
        return "date"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, (set, frozenset)):
        return "set"
    if inspect.isawaitable(value):
        return "promise"
    if callable(value):
        return "function"
    return type(value).__name__
