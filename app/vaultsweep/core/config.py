"""Cleanup policy loading and saving.

The policy is stored as TOML, either next to the vault
(``<vault>/.vaultsweep.toml``) or user-wide
(``~/.config/vaultsweep/config.toml``).
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from vaultsweep.core.paths import get_config_path, get_vault_config_path
from vaultsweep.models.policy import CleanupPolicy

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for policy configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when a policy file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a policy file is not valid TOML."""


def load_policy(path: Path | None = None) -> CleanupPolicy:
    """Load and validate a policy from a TOML file.

    Args:
        path: Path to the policy file. If None, uses the user-wide config path.

    Returns:
        Validated CleanupPolicy.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    # Policy may sit at top level or under a [cleanup] table
    section = data.get("cleanup", data)

    try:
        return CleanupPolicy.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def resolve_policy(vault_root: Path, explicit: Path | None = None) -> tuple[CleanupPolicy, Path | None]:
    """Find and load the policy that applies to a vault.

    Lookup order: explicit path, per-vault file, user-wide file,
    built-in defaults.

    Args:
        vault_root: Vault directory.
        explicit: Path given on the command line, if any.

    Returns:
        Tuple of (policy, path it was loaded from or None for defaults).

    Raises:
        ConfigError: If a policy file exists but cannot be loaded, or the
            explicit path does not exist.
    """
    if explicit is not None:
        return load_policy(explicit), explicit

    for candidate in (get_vault_config_path(vault_root), get_config_path()):
        if candidate.exists():
            logger.debug("Using policy from %s", candidate)
            return load_policy(candidate), candidate

    logger.debug("No policy file found, using defaults")
    return CleanupPolicy(), None


def save_policy(policy: CleanupPolicy, path: Path | None = None) -> Path:
    """Save a policy to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        policy: Policy to save.
        path: Destination. If None, uses the user-wide config path.

    Returns:
        Path where the policy was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = {"cleanup": policy_to_dict(policy)}

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def policy_to_dict(policy: CleanupPolicy) -> dict[str, Any]:
    """Convert a policy to plain TOML-serializable values."""
    return policy.model_dump(mode="json")
