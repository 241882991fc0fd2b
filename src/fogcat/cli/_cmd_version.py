"""Version command for fogcat CLI."""

from __future__ import annotations

import typer

from ._json_state import echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register version command."""

    @app.command()
    def version() -> None:
        """Show the fogcat version."""
        from fogcat._version import version as v

        if is_json_output():
            echo_json({"version": v})
        else:
            typer.echo(f"fogcat {v}")
