"""Vault paths that are never listed or deleted.

The host keeps its own configuration, its trash and version control
data inside the vault folder. None of these are notes or attachments,
so they are hidden from cleanup entirely.
"""

import fnmatch

# Glob patterns matched against vault-relative paths.
PROTECTED_PATH_PATTERNS: list[str] = [
    # Host configuration and trash
    ".obsidian",
    ".obsidian/*",
    ".trash",
    ".trash/*",
    # Version control
    ".git",
    ".git/*",
    # Our own per-vault config
    ".vaultsweep.toml",
    # Any other hidden entry
    ".*",
    "*/.*",
]


def is_protected_path(path: str) -> bool:
    """Check if a vault-relative path must never be cleaned up.

    Args:
        path: Vault-relative path with ``/`` separators.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    path = path.strip("/")
    if not path:
        # The vault root itself
        return True

    return any(fnmatch.fnmatchcase(path, pattern) for pattern in PROTECTED_PATH_PATTERNS)
