"""Config utility for persistent mediainfoutils settings (default backend, etc.).

Provides functions to read and write the default backend in
~/.config/mediainfoutils/config.toml, and a generic resolver with the
precedence CLI > environment > config file > default. Uses tomli/tomli-w for
TOML parsing and writing.
"""

from pathlib import Path
from typing import Optional, TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/mediainfoutils or $XDG_CONFIG_HOME/mediainfoutils
CONFIG_DIR = _xdg_config_home / "mediainfoutils"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "MEDIAINFOUTILS_"


def get_default_backend() -> Optional[str]:
    """Read the default backend from config.toml or the environment.

    Returns:
        Optional[str]: The configured backend name, or None to try every
        backend in order.
    """
    value = resolve_setting("backend.default", default=None)
    return str(value) if value else None


def set_default_backend(name: Optional[str]) -> None:
    """Set (or clear, with None) the default backend in config.toml.

    Args:
        name (Optional[str]): The backend name to store.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    backend_section = data.setdefault("backend", {})
    if name:
        backend_section["default"] = name
    else:
        backend_section.pop("default", None)
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def get_backend_order(default: list[str]) -> list[str]:
    """Return the configured backend try-order.

    ``backend.order`` may be a TOML list or a comma-separated string (the only
    form an environment variable can carry).

    Args:
        default: Order to use when nothing is configured.
    """
    value = resolve_setting("backend.order", default=None)
    if value is None:
        return list(default)
    if isinstance(value, str):
        names = [part.strip() for part in value.split(",")]
    else:
        names = [str(part).strip() for part in value]
    return [name for name in names if name] or list(default)


# ---------------------------------------------------------------------------
# Generic configuration resolution
# ---------------------------------------------------------------------------

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="backend.default" will attempt
    ``data["backend"]["default"]`` returning None if any level is missing.
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


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "backend.default" -> "MEDIAINFOUTILS_BACKEND_DEFAULT".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: Any) -> Any:
    """Coerce *value* towards the type of *default*, keeping it when unsure."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {"1", "true", "yes", "on"}
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return int(value)
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return float(value)
        return default
    return value


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"backend.default"`` or ``"foo"``.
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
        return cast(T, _coerce(os.environ[env_var], default))

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return cast(T, _coerce(file_val, default))

    # 4. Default
    return default
