"""List command for fogcat CLI."""

from __future__ import annotations

from typing import Any

import typer

from fogcat.api import FogBugzError
from fogcat.cases import list_items
from fogcat.constants import LIST_COLUMNS

from ._formatting import format_list_table
from ._helpers import get_session
from ._json_state import echo_error, echo_json, is_json_output


def _statuses_options(resolved: bool, category: str) -> dict[str, Any]:
    """Build listStatuses filters from the CLI options."""
    options: dict[str, Any] = {}
    if resolved:
        options["fResolved"] = 1
    if category:
        options["ixCategory"] = category
    return options


def register(app: typer.Typer) -> None:
    """Register list command."""

    @app.command(name="list")
    def list_cmd(
        ctx: typer.Context,
        list_type: list[str] | None = typer.Argument(  # noqa: B008
            None,
            help="What to list: " + ", ".join(LIST_COLUMNS),
            show_default=False,
        ),
        category: str = typer.Option(
            "",
            "--category",
            metavar="ID",
            help="For statuses only, filter by a category.",
            show_default=False,
        ),
        resolved: bool = typer.Option(
            False,
            "--resolved",
            help="For statuses only, only list resolved statuses.",
        ),
    ) -> None:
        """Display a list of projects, categories, people or statuses.

        Examples:
            fogcat list people                 # List all active users
            fogcat list statuses --resolved    # Statuses that resolve a case
        """
        if not list_type:
            echo_error("You should specify a list type.")
            raise typer.Exit(1)

        kind = "".join(list_type).strip().lower()
        columns = LIST_COLUMNS.get(kind)
        if columns is None:
            echo_error("This type of list is not supported yet.")
            raise typer.Exit(1)

        options = _statuses_options(resolved, category) if kind == "statuses" else {}
        session = get_session(ctx)
        try:
            items = list_items(session, kind, options)
        except FogBugzError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output():
            echo_json(items)
        elif not items:
            typer.echo(f"No {kind} were found.")
        else:
            typer.echo(format_list_table(items, columns))
