"""Data models for vaultsweep.

This module exports the vault tree, canvas, metadata, candidate,
policy and history models.
"""

from vaultsweep.models.candidate import Candidate, ClassificationDecision, CleanupReason
from vaultsweep.models.canvas import (
    CanvasFileNode,
    CanvasNode,
    CanvasOtherNode,
    CanvasParseError,
    CanvasTextNode,
    parse_canvas,
)
from vaultsweep.models.history import HistoryEntry, RemovedItem
from vaultsweep.models.metadata import FRONTMATTER_SECTION, FileCache, Section
from vaultsweep.models.node import ROOT_PATH, NodeKind, VaultNode, build_tree, iter_tree
from vaultsweep.models.policy import (
    CleanupPolicy,
    DeletionDestination,
    ExcludeInclude,
)

__all__ = [
    "FRONTMATTER_SECTION",
    "ROOT_PATH",
    "CanvasFileNode",
    "CanvasNode",
    "CanvasOtherNode",
    "CanvasParseError",
    "CanvasTextNode",
    "Candidate",
    "ClassificationDecision",
    "CleanupPolicy",
    "CleanupReason",
    "DeletionDestination",
    "ExcludeInclude",
    "FileCache",
    "HistoryEntry",
    "NodeKind",
    "RemovedItem",
    "Section",
    "VaultNode",
    "build_tree",
    "iter_tree",
    "parse_canvas",
]
