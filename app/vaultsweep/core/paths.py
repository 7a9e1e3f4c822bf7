"""Where vaultsweep keeps its files.

User-wide files follow the XDG base directory layout:

- policy and theme: ``$XDG_CONFIG_HOME/vaultsweep/`` (``~/.config/vaultsweep/``)
- run history: ``$XDG_STATE_HOME/vaultsweep/`` (``~/.local/state/vaultsweep/``)

A vault may also carry its own policy in ``<vault>/.vaultsweep.toml``.
"""

import os
from pathlib import Path

APP_NAME = "vaultsweep"

VAULT_CONFIG_FILENAME = ".vaultsweep.toml"
CONFIG_FILENAME = "config.toml"
HISTORY_FILENAME = "history.jsonl"


def _xdg_home(env_var: str, fallback: str) -> Path:
    # Unset and empty both mean "use the default"
    value = os.environ.get(env_var, "")
    return Path(value) if value else Path.home() / fallback


def get_config_dir() -> Path:
    return _xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    return _xdg_home("XDG_STATE_HOME", ".local/state") / APP_NAME


def get_config_path() -> Path:
    """User-wide policy file."""
    return get_config_dir() / CONFIG_FILENAME


def get_vault_config_path(vault_root: Path) -> Path:
    """Policy file stored inside a vault."""
    return vault_root / VAULT_CONFIG_FILENAME


def get_history_path() -> Path:
    """JSON-lines file of recorded cleanup runs."""
    return get_state_dir() / HISTORY_FILENAME


def ensure_dir(path: Path) -> Path:
    """Create a directory (and its parents) if needed.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise RuntimeError(f"Cannot create directory {path}: Permission denied") from e
    except OSError as e:
        raise RuntimeError(f"Cannot create directory {path}: {e}") from e
    return path
