"""Configuration management commands for fogcat CLI."""

from __future__ import annotations

from typing import Any

import typer

from fogcat.config import (
    KNOWN_KEYS,
    coerce_value,
    get_config_path,
    load_config,
    save_config,
)

from ._helpers import SortedGroup, get_config_option
from ._json_state import echo_error, echo_json, is_json_output

# Sub-app for 'fogcat config' subcommands
config_app = typer.Typer(
    help="Manage fogcat configuration.",
    no_args_is_help=True,
    cls=SortedGroup,
)

# Keys whose values are masked when displayed
_SECRET_KEYS = frozenset({"password", "token"})


def _display_value(key: str, value: Any) -> Any:
    if key in _SECRET_KEYS and value:
        return "********"
    if isinstance(value, bool):
        return str(value).lower()
    return value


def register(app: typer.Typer) -> None:
    """Register config commands."""
    app.add_typer(config_app, name="config")

    @config_app.command("path")
    def config_path(ctx: typer.Context) -> None:
        """Show where the configuration file is read from."""
        path = get_config_path(get_config_option(ctx))
        if is_json_output():
            echo_json({"path": str(path), "exists": path.exists()})
        else:
            typer.echo(str(path))

    @config_app.command("set")
    def config_set(
        ctx: typer.Context,
        key: str = typer.Argument(..., help="Configuration key to set"),
        value: str = typer.Argument(..., help="Value to set"),
    ) -> None:
        """Set a configuration value."""
        try:
            coerced = coerce_value(key, value)
        except ValueError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        config_option = get_config_option(ctx)
        config = load_config(config_option)
        config[key] = coerced
        path = save_config(config, config_option)
        typer.echo(f"Set {key} = {_display_value(key, coerced)} ({path})")

    @config_app.command("unset")
    def config_unset(
        ctx: typer.Context,
        key: str = typer.Argument(..., help="Configuration key to remove"),
    ) -> None:
        """Remove a configuration value, restoring its default."""
        config_option = get_config_option(ctx)
        config = load_config(config_option)
        if key not in config:
            echo_error(f"Key '{key}' not found in config")
            raise typer.Exit(1)
        del config[key]
        save_config(config, config_option)
        typer.echo(f"Removed {key}")

    @config_app.command("get")
    def config_get(
        ctx: typer.Context,
        key: str = typer.Argument(..., help="Configuration key to read"),
    ) -> None:
        """Get a configuration value."""
        config = load_config(get_config_option(ctx))
        if key not in config:
            echo_error(f"Key '{key}' not found in config")
            raise typer.Exit(1)
        val = config[key]
        if is_json_output():
            echo_json({key: val})
        else:
            typer.echo(_display_value(key, val))

    @config_app.command("list")
    def config_list(ctx: typer.Context) -> None:
        """List all configuration values."""
        config = load_config(get_config_option(ctx))
        if is_json_output():
            echo_json({k: _display_value(k, v) for k, v in config.items()})
        elif not config:
            typer.echo("No configuration values set.")
        else:
            for k, v in sorted(config.items()):
                typer.echo(f"{k} = {_display_value(k, v)}")

    @config_app.command("keys")
    def config_keys() -> None:
        """List all available configuration keys and their descriptions."""
        if is_json_output():
            echo_json(KNOWN_KEYS)
            return

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
        table.add_column("Key", no_wrap=True)
        table.add_column("Type", no_wrap=True)
        table.add_column("Default", overflow="fold")
        table.add_column("Description", overflow="fold")
        table.add_column("Values", overflow="fold")

        for key, info in KNOWN_KEYS.items():
            table.add_row(
                key,
                info["type"],
                str(_display_value(key, info["default"])),
                info["description"],
                info.get("values", ""),
            )

        Console().print(table)
