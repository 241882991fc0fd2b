"""Resolve command for fogcat CLI."""

from __future__ import annotations

import typer

from fogcat.api import FogBugzError
from fogcat.batch import close_cases, resolve_cases
from fogcat.cases import normalize_query, search_open

from ._formatting import format_id_list
from ._helpers import get_session, report_failures, require_query, run_batch
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register resolve command."""

    @app.command()
    def resolve(
        ctx: typer.Context,
        query: list[str] | None = typer.Argument(  # noqa: B008
            None,
            help="Title text, a case number, or comma-separated case numbers",
            show_default=False,
        ),
        close: bool = typer.Option(
            False,
            "--close",
            help="In addition to resolving the cases, close them out.",
        ),
        status: int | None = typer.Option(
            None,
            "--status",
            metavar="ID",
            help="The status with which to resolve the cases. Default is 45 (Fixed).",
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
        """Resolve all open cases that match a query and are assigned to you.

        Examples:
            fogcat resolve "Test Title"        # Resolve by title
            fogcat resolve 12                  # Resolve by ID
            fogcat resolve 12, 25, 556         # Resolve multiple by ID
            fogcat resolve 12 --close          # Resolve, then close
        """
        q = normalize_query(query)
        require_query(q)
        session = get_session(ctx)
        resolve_status = (
            status if status is not None else session.settings.resolve_status
        )

        try:
            cases = search_open(session, q, mine=True)
            if not cases:
                if is_json_output():
                    echo_json({"resolved": [], "failed": []})
                else:
                    typer.echo("No open cases were found that match that query.")
                return

            resolved = run_batch(
                session,
                "Resolving",
                cases,
                resolve_cases,
                progress,
                fail_fast,
                status=resolve_status,
            )
            closed = None
            if close:
                closed = run_batch(
                    session, "Closing", cases, close_cases, progress, fail_fast
                )
        except FogBugzError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output():
            payload = {
                "resolved": resolved.succeeded,
                "failed": [
                    {"id": f.case_id, "action": "resolve", "error": f.error}
                    for f in resolved.failed
                ],
            }
            if closed is not None:
                payload["closed"] = closed.succeeded
                payload["failed"] += [
                    {"id": f.case_id, "action": "close", "error": f.error}
                    for f in closed.failed
                ]
            echo_json(payload)
        else:
            typer.echo(
                "The following cases were resolved: "
                + format_id_list(resolved.succeeded),
            )
            if closed is not None:
                typer.echo(
                    "The following cases were closed: "
                    + format_id_list(closed.succeeded),
                )

        report_failures(resolved, "resolving")
        if closed is not None:
            report_failures(closed, "closing")
        if not resolved.ok or (closed is not None and not closed.ok):
            raise typer.Exit(1)
