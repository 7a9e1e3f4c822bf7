"""Vault tree models.

This module defines the file and folder nodes that make up a vault
tree, along with helpers for building and walking a tree from plain
path listings.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

ROOT_PATH = "/"


class NodeKind(str, Enum):
    """Kind of vault node.

    Attributes:
        FILE: A document or attachment.
        FOLDER: A folder that may hold other nodes.
    """

    FILE = "file"
    FOLDER = "folder"


@dataclass(eq=False, slots=True)
class VaultNode:
    """A file or folder in the vault tree.

    Nodes compare by identity; the path is unique within one tree.

    Attributes:
        path: Vault-relative path with ``/`` separators ("/" for the root).
        kind: Whether this node is a file or a folder.
        size_bytes: File size in bytes (None for folders).
        parent: Containing folder (None for the root).
        children: Child nodes (folders only).
    """

    path: str
    kind: NodeKind
    size_bytes: int | None = None
    parent: VaultNode | None = field(default=None, repr=False)
    children: list[VaultNode] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate node data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Trailing path segment."""
        return posixpath.basename(self.path)

    @property
    def extension(self) -> str:
        """Lower-cased extension after the last dot of the name ("" for folders)."""
        if self.kind == NodeKind.FOLDER:
            return ""
        name = self.name
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[1].lower()

    @property
    def is_folder(self) -> bool:
        return self.kind == NodeKind.FOLDER

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_PATH

    @property
    def depth(self) -> int:
        """Number of path segments (0 for the root)."""
        if self.is_root:
            return 0
        return self.path.count("/") + 1

    def add_child(self, child: VaultNode) -> VaultNode:
        """Attach a child node to this folder.

        Raises:
            ValueError: If this node is not a folder.
        """
        if not self.is_folder:
            msg = f"Cannot add children to a file: {self.path}"
            raise ValueError(msg)
        child.parent = self
        self.children.append(child)
        return child


def iter_tree(root: VaultNode) -> Iterator[VaultNode]:
    """Walk a tree depth-first, yielding each node once (root first)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def build_tree(
    files: Mapping[str, int],
    folders: Iterable[str] = (),
) -> VaultNode:
    """Build a vault tree from path listings.

    Intermediate folders implied by a path are created automatically,
    so ``folders`` only needs to list folders that may be empty.

    Args:
        files: Mapping of file path to size in bytes.
        folders: Extra folder paths to create.

    Returns:
        The root folder node.
    """
    root = VaultNode(path=ROOT_PATH, kind=NodeKind.FOLDER)
    index: dict[str, VaultNode] = {ROOT_PATH: root}

    def ensure_folder(path: str) -> VaultNode:
        path = path.strip("/")
        if not path:
            return root
        if path in index:
            return index[path]
        parent = ensure_folder(posixpath.dirname(path))
        folder = parent.add_child(VaultNode(path=path, kind=NodeKind.FOLDER))
        index[path] = folder
        return folder

    for folder_path in folders:
        ensure_folder(folder_path)

    for file_path, size in files.items():
        file_path = file_path.strip("/")
        parent = ensure_folder(posixpath.dirname(file_path))
        node = parent.add_child(VaultNode(path=file_path, kind=NodeKind.FILE, size_bytes=size))
        index[file_path] = node

    return root
