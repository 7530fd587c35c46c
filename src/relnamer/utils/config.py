"""Config utility for persistent relnamer settings (naming policy, etc.).

Provides a generic resolver reading ~/.config/relnamer/config.toml and
``RELNAMER_*`` environment variables, plus a writer for single dotted keys.
Uses tomli/tomli-w for TOML parsing and writing.
"""

from pathlib import Path
from typing import TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/relnamer or $XDG_CONFIG_HOME/relnamer
CONFIG_DIR = _xdg_config_home / "relnamer"
CONFIG_FILE = CONFIG_DIR / "config.toml"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="naming.default_group" will attempt
    ``data["naming"]["default_group"]`` returning None if any level is missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "RELNAMER_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "naming.default_group" -> "RELNAMER_NAMING_DEFAULT_GROUP".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"naming.default_group"``.
        value: A TOML-serialisable value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"naming.default_group"`` or ``"foo"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        env_val: str = os.environ[env_var]
        if isinstance(default, bool):
            return cast(T, env_val.lower() in _TRUTHY)
        if isinstance(default, int):
            try:
                return cast(T, int(env_val))
            except ValueError:
                return default
        if isinstance(default, float):
            with contextlib.suppress(ValueError):
                return cast(T, float(env_val))
            return default
        if isinstance(default, (list, tuple)):
            return cast(T, _split_list(env_val))
        if default is None:
            if env_val.isdigit():
                return cast(T, int(env_val))
            with contextlib.suppress(ValueError):
                return cast(T, float(env_val))
        # Fallback: return as string type
        return cast(T, env_val)

    # 3. Config file lookup
    cfg_data = _read_config_file()
    file_val = _lookup_nested(cfg_data, key)
    if file_val is not None:
        if isinstance(default, bool):
            if isinstance(file_val, bool):
                return cast(T, file_val)
            if isinstance(file_val, str):
                return cast(T, file_val.lower() in _TRUTHY)
            return default
        if isinstance(default, int):
            if isinstance(file_val, int):
                return cast(T, file_val)
            if isinstance(file_val, str):
                with contextlib.suppress(ValueError):
                    return cast(T, int(file_val))
            return default
        if isinstance(default, float):
            if isinstance(file_val, (int, float)):
                return cast(T, float(file_val))
            if isinstance(file_val, str):
                with contextlib.suppress(ValueError):
                    return cast(T, float(file_val))
            return default
        if isinstance(default, (list, tuple)):
            if isinstance(file_val, list):
                return cast(T, [str(item) for item in file_val])
            if isinstance(file_val, str):
                return cast(T, _split_list(file_val))
            return default

        # For str / None defaults just return the config value
        return cast(T, file_val)

    # 4. Default
    return default
