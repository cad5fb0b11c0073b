"""Rich Console factory and issue table rendering.

Creates Console instances that render to a StringIO buffer, preserving
a ``render_issues() -> str`` contract. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from collections.abc import Iterable
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from shapecheck.output.formatters import format_path

if TYPE_CHECKING:
    from shapecheck.config.settings import ShapecheckSettings
    from shapecheck.domain.issues import Issue

SHAPECHECK_THEME = Theme(
    {
        "sc.ok": "bold green",
        "sc.error": "bold red",
        "sc.path": "bold blue",
        "sc.code": "magenta",
        "sc.message": "default",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SHAPECHECK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_issues(
    issues: Iterable[Issue],
    *,
    title: str | None = None,
    settings: ShapecheckSettings | None = None,
    console: Console | None = None,
) -> str:
    """Render *issues* as a Path / Code / Message table.

    An empty sequence renders a single ``OK`` line instead of a table.
    """
    console = console or create_console()
    issues = list(issues)
    if not issues:
        console.print(Text.assemble(("OK", "sc.ok"), "  no issues"))
        return get_output(console).rstrip("\n")

    table = Table(title=title or f"{len(issues)} issue(s)", title_style="sc.error")
    table.add_column("Path", style="sc.path")
    table.add_column("Code", style="sc.code")
    table.add_column("Message", style="sc.message")
    for issue in issues:
        table.add_row(format_path(issue.path, settings=settings), str(issue.code), issue.message)
    console.print(table)
    return get_output(console).rstrip("\n")
