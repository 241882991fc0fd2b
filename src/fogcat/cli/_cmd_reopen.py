"""Reopen command for fogcat CLI."""

from __future__ import annotations

import typer

from fogcat.api import FogBugzError
from fogcat.batch import reopen_cases
from fogcat.cases import normalize_query, search_closed

from ._formatting import format_id_list
from ._helpers import get_session, report_failures, require_query, run_batch
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register reopen command."""

    @app.command()
    def reopen(
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
        """Reopen all closed cases that match a query.

        Unlike resolve and close, reopen is not limited to cases assigned to
        you: closed cases are usually assigned back to whoever opened them.

        Examples:
            fogcat reopen "Test Title"         # Reopen by title
            fogcat reopen 12                   # Reopen by ID
            fogcat reopen 12, 25, 556          # Reopen multiple by ID
        """
        q = normalize_query(query)
        require_query(q)
        session = get_session(ctx)

        try:
            cases = search_closed(session, q)
            if not cases:
                if is_json_output():
                    echo_json({"reopened": [], "failed": []})
                else:
                    typer.echo("No closed cases were found that match that query.")
                return
            reopened = run_batch(
                session, "Reopening", cases, reopen_cases, progress, fail_fast
            )
        except FogBugzError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output():
            echo_json(
                {
                    "reopened": reopened.succeeded,
                    "failed": [
                        {"id": f.case_id, "error": f.error} for f in reopened.failed
                    ],
                },
            )
        else:
            typer.echo(
                "The following cases were reopened: "
                + format_id_list(reopened.succeeded),
            )

        report_failures(reopened, "reopening")
        if not reopened.ok:
            raise typer.Exit(1)
