"""Host collaborators: vault storage and metadata.

Defines the interfaces the cleanup core consumes and a disk-backed
implementation of both.
"""

from vaultsweep.vault.base import MetadataCache, ResolvedLinks, Vault
from vaultsweep.vault.index import LocalMetadataIndex, extract_link_targets, parse_document
from vaultsweep.vault.local import LocalVault
from vaultsweep.vault.protected import PROTECTED_PATH_PATTERNS, is_protected_path

__all__ = [
    "PROTECTED_PATH_PATTERNS",
    "LocalMetadataIndex",
    "LocalVault",
    "MetadataCache",
    "ResolvedLinks",
    "Vault",
    "extract_link_targets",
    "is_protected_path",
    "parse_document",
]
