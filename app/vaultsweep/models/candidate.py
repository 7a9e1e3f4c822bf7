"""Cleanup candidate models.

This module defines the outcome of classifying a vault node: whether
it should be removed, and which rule selected it.
"""

from dataclasses import dataclass
from enum import Enum

from vaultsweep.models.node import VaultNode


class CleanupReason(str, Enum):
    """Rule that selected a node for removal.

    Attributes:
        UNUSED_ATTACHMENT: Non-document file that nothing references.
        EMPTY_MARKDOWN: Markdown document with no content.
        FRONTMATTER_ONLY: Markdown document holding only ignorable frontmatter.
        EMPTY_CANVAS: Canvas document too small to hold any card.
        EMPTY_FOLDER: Empty folder or a single-child chain above one.
    """

    UNUSED_ATTACHMENT = "unused_attachment"
    EMPTY_MARKDOWN = "empty_markdown"
    FRONTMATTER_ONLY = "frontmatter_only"
    EMPTY_CANVAS = "empty_canvas"
    EMPTY_FOLDER = "empty_folder_chain"


@dataclass(frozen=True, slots=True)
class ClassificationDecision:
    """Keep/remove verdict for a single node.

    Attributes:
        remove: True if the node is a removal candidate.
        reason: Rule that selected the node (set only when remove is True).
        detail: Short note on why a node is kept, for diagnostics.
    """

    remove: bool
    reason: CleanupReason | None = None
    detail: str | None = None

    @classmethod
    def keep(cls, detail: str) -> "ClassificationDecision":
        return cls(remove=False, detail=detail)

    @classmethod
    def candidate(cls, reason: CleanupReason) -> "ClassificationDecision":
        return cls(remove=True, reason=reason)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A node selected for deletion.

    Attributes:
        node: The file or folder to delete.
        reason: Rule that selected it.
    """

    node: VaultNode
    reason: CleanupReason

    @property
    def path(self) -> str:
        return self.node.path
