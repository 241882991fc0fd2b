"""Shared infrastructure for fogcat CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import typer
from typer.core import TyperGroup

from fogcat.session import Session

from ._json_state import echo_error

if TYPE_CHECKING:
    from collections.abc import Callable

    import click

    from fogcat.batch import BatchResult


class SortedGroup(TyperGroup):
    """Typer group that lists commands in alphabetical order."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return commands sorted alphabetically."""
        return sorted(super().list_commands(ctx))


def prompt_for_setting(question: str, hide_input: bool) -> str:
    """Ask the user for a setting missing from the config file."""
    return typer.prompt(question, hide_input=hide_input).strip()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich.

    Args:
        verbose: Show DEBUG records instead of only warnings and errors
    """
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_session(ctx: typer.Context) -> Session:
    """Return the session created by the root callback."""
    session = ctx.find_root().obj
    if not isinstance(session, Session):
        msg = "No fogcat session on the command context"
        raise RuntimeError(msg)
    return session


def require_query(query: str) -> None:
    """Exit with code 1 when a mutating command got no query."""
    if not query:
        echo_error("You must provide a search query.")
        raise typer.Exit(1)


def report_failures(result: BatchResult, action: str) -> None:
    """Print one error line per failed case."""
    for failure in result.failed:
        echo_error(f"{action} case {failure.case_id}: {failure.error}")


def run_batch(
    session: Session,
    label: str,
    cases: list[dict[str, Any]],
    batch_fn: Callable[..., BatchResult],
    progress: bool,
    fail_fast: bool,
    **kwargs: Any,
) -> BatchResult:
    """Run a batch function with the optional progress bar.

    Args:
        session: Session created by the root callback
        label: Progress bar description ("Resolving", ...)
        cases: Cases to mutate
        batch_fn: resolve_cases, close_cases or reopen_cases
        progress: ``--progress`` given; the progress setting also enables it
        fail_fast: Stop at the first failed case
        **kwargs: Extra arguments for ``batch_fn`` (e.g. ``status``)
    """
    from ._formatting import batch_progress

    show = progress or session.settings.progress
    with batch_progress(label, len(cases), show) as on_progress:
        return batch_fn(
            session,
            cases,
            on_progress=on_progress,
            fail_fast=fail_fast,
            **kwargs,
        )


def get_config_option(ctx: typer.Context) -> str | None:
    """Return the ``--config`` path given to the root command, if any."""
    return ctx.find_root().params.get("config_path")
