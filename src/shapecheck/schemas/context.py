"""ParseContext — per-call path tracking and issue accumulation.

A fresh root context is created by each executor call, so schemas stay
free of per-call state and can be shared across threads and tasks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shapecheck.domain.issues import MISSING, Issue, IssueCode, PathSegment, get_type_name


class _InvalidType(Enum):
    INVALID = "INVALID"

    def __repr__(self) -> str:
        return "INVALID"


# Returned by ``Schema._parse`` after it has recorded at least one issue.
INVALID = _InvalidType.INVALID


@dataclass
class ParseContext:
    """Location of the value being parsed plus the shared issue list.

    Child contexts share the parent's ``issues`` list; forked contexts
    (used to try union alternatives) get their own.
    """

    path: tuple[PathSegment, ...] = ()
    issues: list[Issue] = field(default_factory=list)

    def child(self, *segments: PathSegment) -> ParseContext:
        """Context for a nested value at ``path + segments``."""
        return ParseContext(path=(*self.path, *segments), issues=self.issues)

    def fork(self) -> ParseContext:
        """Context at the same path with an isolated issue list."""
        return ParseContext(path=self.path)

    def add_issue(
        self,
        code: IssueCode,
        message: str,
        *,
        path: tuple[PathSegment, ...] = (),
        **params: Any,
    ) -> None:
        self.issues.append(
            Issue(path=(*self.path, *path), code=code, message=message, params=params)
        )

    def add_type_issue(self, expected: str, value: Any) -> None:
        """Record a type mismatch, reporting absent values as ``Required``."""
        received = get_type_name(value)
        message = "Required" if value is MISSING else f"Expected {expected}, received {received}"
        self.add_issue(IssueCode.TYPE_MISMATCH, message, expected=expected, received=received)
