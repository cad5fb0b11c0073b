"""Plain-text issue formatting.

This is the boundary between machine-checkable Issue data and
user-facing diagnostics. Output is deterministic: issues keep discovery
order and separators come from :class:`ShapecheckSettings`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from shapecheck.config.settings import get_settings

if TYPE_CHECKING:
    from shapecheck.config.settings import ShapecheckSettings
    from shapecheck.domain.issues import Issue, PathSegment


def format_path(
    path: Iterable[PathSegment],
    *,
    settings: ShapecheckSettings | None = None,
) -> str:
    """Join *path* segments, using the root label for an empty path."""
    settings = settings or get_settings()
    segments = [str(segment) for segment in path]
    if not segments:
        return settings.root_label
    return settings.path_separator.join(segments)


def format_issues(
    issues: Iterable[Issue],
    *,
    separator: str | None = None,
    settings: ShapecheckSettings | None = None,
) -> str:
    """Summarize *issues* as ``"<path>: <message>"`` pairs on one line.

    Args:
        issues: Issues in the order they should appear.
        separator: Overrides ``settings.issue_separator``.
        settings: Defaults to :func:`get_settings`.
    """
    settings = settings or get_settings()
    joiner = settings.issue_separator if separator is None else separator
    return joiner.join(
        f"{format_path(issue.path, settings=settings)}: {issue.message}" for issue in issues
    )


def flatten_issues(issues: Iterable[Issue]) -> dict[str, Any]:
    """Group issue messages by their first path segment.

    Returns:
        ``{"form_errors": [...], "field_errors": {key: [...]}}`` where
        root-level messages land in ``form_errors``.
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for issue in issues:
        if issue.path:
            field_errors.setdefault(str(issue.path[0]), []).append(issue.message)
        else:
            form_errors.append(issue.message)
    return {"form_errors": form_errors, "field_errors": field_errors}
