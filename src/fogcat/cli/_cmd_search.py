"""Search command for fogcat CLI."""

from __future__ import annotations

import typer

from fogcat.api import FogBugzError
from fogcat.cases import normalize_query, search_all, search_closed, search_open

from ._formatting import format_case_table
from ._helpers import get_session
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register search command."""

    @app.command()
    def search(
        ctx: typer.Context,
        query: list[str] | None = typer.Argument(  # noqa: B008
            None,
            help="Title text, a case number, or comma-separated case numbers",
            show_default=False,
        ),
        open_only: bool = typer.Option(
            False,
            "--open",
            help="Only return open cases",
        ),
        closed_only: bool = typer.Option(
            False,
            "--closed",
            help="Only return closed cases",
        ),
        mine: bool = typer.Option(
            False,
            "--mine",
            "-m",
            help="Only return cases assigned to you",
        ),
    ) -> None:
        """Search FogBugz for cases.

        Outputs a list of cases which match the provided query, or your
        current case list when no query is given.

        Examples:
            fogcat search "Test Title"     # Search for a case by title
            fogcat search 12               # Search for a case by ID
            fogcat search 12,25,556        # Search for multiple cases by ID
        """
        if open_only and closed_only:
            echo_error("--open and --closed cannot be used together")
            raise typer.Exit(2)

        session = get_session(ctx)
        q = normalize_query(query)
        finder = search_all
        if open_only:
            finder = search_open
        elif closed_only:
            finder = search_closed

        try:
            cases = finder(session, q, mine=mine)
        except FogBugzError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output():
            echo_json(cases)
        elif not cases:
            typer.echo("No cases were found that match your query.")
        else:
            typer.echo(format_case_table(cases))
