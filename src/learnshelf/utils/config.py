"""Config utility for persistent learnshelf settings (scan folders, depths).

Provides the settings store holding the default list of library roots, and a
generic resolver for scan settings, all backed by
~/.config/learnshelf/config.toml. Uses tomli/tomli-w for TOML parsing and
writing.
"""

from pathlib import Path
from typing import Any, List, TypeVar, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/learnshelf or $XDG_CONFIG_HOME/learnshelf
CONFIG_DIR = _xdg_config_home / "learnshelf"
CONFIG_FILE = CONFIG_DIR / "config.toml"

SCAN_FOLDERS_KEY = "library.scan_folders"


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _write_config_file(data: dict[str, Any]) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


# ---------------------------------------------------------------------------
# Settings store: library roots
# ---------------------------------------------------------------------------


def get_scan_folders() -> List[Path]:
    """Return the configured library roots.

    Honours ``LEARNSHELF_LIBRARY_SCAN_FOLDERS`` (entries separated by
    ``os.pathsep``) before the config file.

    Returns:
        List[Path]: Roots in the order they were configured; empty if unset.
    """
    folders = resolve_setting(SCAN_FOLDERS_KEY, default=cast(List[str], []))
    return [Path(folder) for folder in folders if folder]


def set_scan_folders(folders: List[Path]) -> None:
    """Persist *folders* as the library roots, replacing the current list.

    Args:
        folders (List[Path]): Roots to store. Duplicates are dropped, order kept.
    """
    data = _read_config_file()
    library = data.setdefault("library", {})
    unique = list(dict.fromkeys(str(folder) for folder in folders))
    library["scan_folders"] = unique
    _write_config_file(data)


def add_scan_folder(folder: Path) -> List[Path]:
    """Append *folder* to the stored roots unless it is already present.

    Returns:
        List[Path]: The stored roots after the change.
    """
    folder = folder.absolute()
    folders = _stored_scan_folders()
    if folder not in folders:
        folders.append(folder)
        set_scan_folders(folders)
    return folders


def remove_scan_folder(folder: Path) -> bool:
    """Remove *folder* from the stored roots.

    Returns:
        bool: True if the folder was stored and has been removed.
    """
    folders = _stored_scan_folders()
    remaining = [f for f in folders if f != folder and f != folder.absolute()]
    if len(remaining) == len(folders):
        return False
    set_scan_folders(remaining)
    return True


def _stored_scan_folders() -> List[Path]:
    # Mutations act on the file contents only, never on env overrides.
    stored = _lookup_nested(_read_config_file(), SCAN_FOLDERS_KEY)
    if not isinstance(stored, list):
        return []
    return [Path(str(folder)) for folder in stored if folder]


# ---------------------------------------------------------------------------
# Generic configuration resolution
# ---------------------------------------------------------------------------

T = TypeVar("T")


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="scan.tree_max_depth" will attempt
    ``data["scan"]["tree_max_depth"]`` returning None if any level is missing.
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


def _make_env_var_name(dotted_key: str, prefix: str = "LEARNSHELF_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "scan.tree_max_depth" -> "LEARNSHELF_SCAN_TREE_MAX_DEPTH".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce_env(env_val: str, default: T) -> T:
    if isinstance(default, int):
        try:
            return cast(T, int(env_val))
        except ValueError:
            return default
    if isinstance(default, list):
        return cast(T, [part for part in env_val.split(os.pathsep) if part])
    return cast(T, env_val)


def _coerce_file_value(file_val: Any, default: T) -> T:
    if isinstance(default, int):
        if isinstance(file_val, int) and not isinstance(file_val, bool):
            return cast(T, file_val)
        if isinstance(file_val, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(file_val))
        return default
    if isinstance(default, list):
        if isinstance(file_val, list):
            return cast(T, [str(item) for item in file_val])
        if isinstance(file_val, str):
            return cast(T, [file_val])
        return default
    return cast(T, file_val)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"scan.tree_max_depth"``.
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
        return _coerce_env(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce_file_value(file_val, default)

    # 4. Default
    return default
