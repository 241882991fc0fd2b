"""fogcat CLI commands for FogBugz cases."""

from __future__ import annotations

import typer

from ._helpers import SortedGroup

app = typer.Typer(
    help="fogcat - manage FogBugz cases from the command line. "
    "Ideal for batch processing.",
    no_args_is_help=True,
    cls=SortedGroup,
)

# Commands that must work even when the config file has bad values
_SESSIONLESS_COMMANDS = frozenset({"config", "version"})


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON for all commands",
    ),
    config_path: str | None = typer.Option(
        None,
        "--config",
        envvar="FOGCAT_CONFIG",
        help="Path to config.toml (default: ~/.config/fogcat/config.toml)",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
) -> None:
    from fogcat.config import load_settings
    from fogcat.session import Session

    from ._helpers import configure_logging, prompt_for_setting
    from ._json_state import echo_error, set_json_flag

    set_json_flag(json_output)
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    # Tests inject a ready-made session through ``obj``
    if ctx.obj is None and ctx.invoked_subcommand not in _SESSIONLESS_COMMANDS:
        try:
            settings = load_settings(config_path)
        except ValueError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e
        ctx.obj = Session(settings, prompt=prompt_for_setting)
        ctx.call_on_close(ctx.obj.close)


from . import (  # noqa: E402
    _cmd_close,
    _cmd_config,
    _cmd_list,
    _cmd_reopen,
    _cmd_resolve,
    _cmd_search,
    _cmd_version,
)

for _mod in (
    _cmd_close,
    _cmd_config,
    _cmd_list,
    _cmd_reopen,
    _cmd_resolve,
    _cmd_search,
    _cmd_version,
):
    _mod.register(app)


def main() -> None:
    """Run the fogcat CLI application."""
    app()
