"""Display and formatting functions for fogcat CLI."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from fogcat.constants import CASE_COLUMNS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from fogcat.cases import Case


def _cell(value: Any) -> str:
    from rich.markup import escape

    if value is None:
        return ""
    return escape(str(value))


def format_table(
    headings: list[str],
    rows: list[list[Any]],
    title_column: str | None = None,
) -> str:
    """Format rows as an aligned table using Rich.

    Args:
        headings: Column headings
        rows: One list of cell values per row
        title_column: Heading of a column that should wrap instead of truncate

    Returns:
        Formatted table string (rendered by Rich)
    """
    from io import StringIO

    from rich import box
    from rich.console import Console
    from rich.table import Table

    table = Table(
        show_header=True,
        header_style="bold",
        box=box.ROUNDED,
        pad_edge=False,
        show_edge=False,
    )
    for heading in headings:
        if heading == title_column:
            table.add_column(heading, overflow="fold")
        else:
            table.add_column(heading, no_wrap=True)

    for row in rows:
        table.add_row(*(_cell(value) for value in row))

    string_io = StringIO()
    console = Console(file=string_io, force_terminal=True, width=None)
    console.print(table)

    return string_io.getvalue().rstrip()


def format_case_table(cases: list[Case]) -> str:
    """Format cases as a BugID / Status / Title / Assigned To table."""
    if not cases:
        return ""
    headings = [heading for heading, _ in CASE_COLUMNS]
    rows = [[case.get(key) for _, key in CASE_COLUMNS] for case in cases]
    return format_table(headings, rows, title_column="Title")


def format_list_table(
    items: list[dict[str, Any]],
    columns: list[tuple[str, str]],
) -> str:
    """Format list items using ``(heading, field)`` column pairs."""
    if not items:
        return ""
    headings = [heading for heading, _ in columns]
    rows = [[item.get(key) for _, key in columns] for item in items]
    return format_table(headings, rows)


def format_id_list(ids: list[str]) -> str:
    """Join case ids for a one-line summary."""
    return ", ".join(ids)


@contextmanager
def batch_progress(
    description: str,
    total: int,
    enabled: bool,
) -> Iterator[Callable[[Case], None] | None]:
    """Show a Rich progress bar for a batch operation.

    Yields the per-case callback to hand to the batch function, or None when
    progress display is disabled.
    """
    if not enabled:
        yield None
        return

    from rich.console import Console
    from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

    with Progress(
        TextColumn("{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=Console(stderr=True),
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=total)

        def advance(case: Case) -> None:
            progress.update(
                task,
                advance=1,
                description=f"{description} {case.get('ixBug', '')}",
            )

        yield advance
