"""Configuration file handling for fogcat."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from fogcat.constants import (
    CONFIG_DIRNAME,
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_COLUMNS,
    DEFAULT_RESOLVE_STATUS,
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


@dataclass
class Settings:
    """Resolved fogcat settings.

    Credentials left as ``None`` are asked for interactively by the session
    the first time they are needed.
    """

    server: str | None = None
    email: str | None = None
    password: str | None = None
    token: str | None = None
    default_columns: str = DEFAULT_COLUMNS
    progress: bool = False
    resolve_status: int = DEFAULT_RESOLVE_STATUS
    timeout: float = DEFAULT_TIMEOUT


# All known config keys: type, description and default
KNOWN_KEYS: dict[str, dict[str, Any]] = {
    "server": {
        "type": "str",
        "description": "FogBugz server address (https://example.fogbugz.com)",
        "default": "(prompt)",
    },
    "email": {
        "type": "str",
        "description": "Email used to log on",
        "default": "(prompt)",
    },
    "password": {
        "type": "str",
        "description": "Password used to log on",
        "default": "(prompt)",
    },
    "token": {
        "type": "str",
        "description": "API token, used instead of email/password",
        "default": "(none)",
    },
    "default_columns": {
        "type": "str",
        "description": "Comma-separated case columns requested on search",
        "default": DEFAULT_COLUMNS,
    },
    "progress": {
        "type": "bool",
        "description": "Show a progress bar during batch operations",
        "default": False,
        "values": "true, false (also: 1/0, yes/no, on/off)",
    },
    "resolve_status": {
        "type": "int",
        "description": "Status used by 'resolve' when --status is not given",
        "default": DEFAULT_RESOLVE_STATUS,
    },
    "timeout": {
        "type": "float",
        "description": "HTTP timeout in seconds for each API call",
        "default": DEFAULT_TIMEOUT,
    },
}


def coerce_value(key: str, value: str) -> Any:
    """Coerce a string value to the type declared for a known key.

    Raises:
        ValueError: If the key is unknown or the value does not parse
    """
    if key not in KNOWN_KEYS:
        known = ", ".join(KNOWN_KEYS)
        msg = f"Unknown config key '{key}'. Known keys: {known}"
        raise ValueError(msg)

    key_type = KNOWN_KEYS[key]["type"]
    if key_type == "bool":
        lower = value.strip().lower()
        if lower in _TRUE_VALUES:
            return True
        if lower in _FALSE_VALUES:
            return False
        msg = f"Invalid boolean value '{value}' for key '{key}'. Use true/false."
        raise ValueError(msg)
    if key_type == "int":
        try:
            return int(value)
        except ValueError:
            msg = f"Invalid integer value '{value}' for key '{key}'"
            raise ValueError(msg) from None
    if key_type == "float":
        try:
            return float(value)
        except ValueError:
            msg = f"Invalid number '{value}' for key '{key}'"
            raise ValueError(msg) from None
    return value


def get_config_path(config_path: str | Path | None = None) -> Path:
    """Get the path to the config file.

    Precedence:
    1. Explicit ``config_path`` argument (``--config``)
    2. ``FOGCAT_CONFIG`` environment variable
    3. ``$XDG_CONFIG_HOME/fogcat/config.toml`` (``~/.config`` by default)

    Args:
        config_path: Explicit path, or None to use the default lookup

    Returns:
        Path to config.toml
    """
    if config_path:
        return Path(config_path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from the TOML config file.

    Args:
        config_path: Explicit path, or None to use the default lookup

    Returns:
        Configuration dictionary, or empty dict if no config exists
    """
    path = get_config_path(config_path)
    if not path.exists():
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def save_config(config: dict[str, Any], config_path: str | Path | None = None) -> Path:
    """Save configuration to the TOML config file.

    Args:
        config: Configuration dictionary to save
        config_path: Explicit path, or None to use the default lookup

    Returns:
        Path the configuration was written to
    """
    path = get_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(config, f)
    return path


def _coerce_file_value(key: str, value: Any) -> Any:
    """Check a config file value against its declared type.

    Values of the wrong TOML type (e.g. ``progress = "false"``) are parsed
    from their string form the same way environment values are.
    """
    key_type = KNOWN_KEYS[key]["type"]
    if key_type == "bool" and isinstance(value, bool):
        return value
    if not isinstance(value, bool):
        if key_type == "int" and isinstance(value, int):
            return value
        if key_type == "float" and isinstance(value, (int, float)):
            return float(value)
        if key_type == "str" and isinstance(value, str):
            return value
    return coerce_value(key, str(value))


def _env_overrides() -> dict[str, Any]:
    """Collect ``FOGCAT_<KEY>`` overrides for known keys."""
    overrides: dict[str, Any] = {}
    for key in KNOWN_KEYS:
        raw = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is None or raw == "":
            continue
        overrides[key] = coerce_value(key, raw)
    return overrides


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build settings from defaults, the config file and the environment.

    Environment variables win over the config file, which wins over the
    built-in defaults. Unknown keys in the file are ignored.
    File values of the wrong type are coerced like environment values.

    Args:
        config_path: Explicit path, or None to use the default lookup

    Returns:
        Settings instance

    Raises:
        ValueError: If a value cannot be read as its declared type
    """
    known = {f.name for f in fields(Settings)}
    values = {
        k: _coerce_file_value(k, v)
        for k, v in load_config(config_path).items()
        if k in known
    }
    values.update(_env_overrides())
    return Settings(**values)
