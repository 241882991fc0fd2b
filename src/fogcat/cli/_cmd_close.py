"""Close command for fogcat CLI."""

from __future__ import annotations

import typer

from fogcat.api import FogBugzError
from fogcat.batch import close_cases
from fogcat.cases import normalize_query, search_open

from ._formatting import format_id_list
from ._helpers import get_session, report_failures, require_query, run_batch
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register close command."""

    @app.command()
    def close(
        ctx: typer.Context,
        query: list[str] | None = typer.Argument(  # noqa: B008
            None,
            help="Title text, a case number, or comma-separated case numbers",
            show_default=False,
        ),
        progress: bool = typer.Option(
            False,
            "--progress",
            help="Show a progress bar (always on when the progress setting is true)",
        ),
        fail_fast: bool = typer.Option(
            False,
            "--fail-fast",
            help="Stop at the first case that fails",
        ),
    ) -> None:
        """Close all open cases that match a query and are assigned to you.

        Examples:
            fogcat close "Test Title"          # Close by title
            fogcat close 12                    # Close by ID
            fogcat close 12, 25, 556           # Close multiple by ID
        """
        q = normalize_query(query)
        require_query(q)
        session = get_session(ctx)

        try:
            cases = search_open(session, q, mine=True)
            if not cases:
                if is_json_output():
                    echo_json({"closed": [], "failed": []})
                else:
                    typer.echo("No open cases were found that match that query.")
                return
            closed = run_batch(
                session, "Closing", cases, close_cases, progress, fail_fast
            )
        except FogBugzError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output():
            echo_json(
                {
                    "closed": closed.succeeded,
                    "failed": [
                        {"id": f.case_id, "error": f.error} for f in closed.failed
                    ],
                },
            )
        else:
            typer.echo(
                "The following cases were closed: " + format_id_list(closed.succeeded),
            )

        report_failures(closed, "closing")
        if not closed.ok:
            raise typer.Exit(1)
