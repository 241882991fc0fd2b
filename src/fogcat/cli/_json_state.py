"""JSON output mode for fogcat CLI."""

from __future__ import annotations

import sys
from typing import Any

import orjson
import typer

_json_mode: bool = False


def set_json_flag(value: bool) -> None:
    """Turn JSON output on or off for the rest of the invocation."""
    global _json_mode  # noqa: PLW0603
    _json_mode = value


def is_json_output() -> bool:
    """Return True when ``--json`` was given."""
    return _json_mode


def echo_json(payload: Any) -> None:
    """Write a payload to stdout as one line of JSON."""
    typer.echo(orjson.dumps(payload).decode())


def echo_error(message: str) -> None:
    """Output an error message, formatted as JSON if in JSON mode.

    In JSON mode, outputs ``{"error": "..."}`` to stderr.
    In plain mode, outputs ``Error: ...`` to stderr.
    """
    if _json_mode:
        sys.stderr.write(orjson.dumps({"error": message}).decode() + "\n")
    else:
        typer.echo(f"Error: {message}", err=True)
