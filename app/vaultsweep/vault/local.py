"""Disk-backed vault.

Exposes a directory on disk through the Vault interface so the cleanup
core can run outside the host application.
"""

import asyncio
import errno
import logging
import shutil
import subprocess
from pathlib import Path

from vaultsweep.models.node import ROOT_PATH, NodeKind, VaultNode, iter_tree
from vaultsweep.utils.shell import TRASH_COMMANDS, find_trash_command, run_command
from vaultsweep.vault.base import Vault
from vaultsweep.vault.protected import is_protected_path

logger = logging.getLogger(__name__)

TRASH_DIR_NAME = ".trash"
TRASH_TIMEOUT_SECONDS = 30.0


class LocalVault(Vault):
    """Vault stored as a plain directory tree.

    Hidden and protected entries (host configuration, the vault trash,
    version control) are not part of the tree. The tree is loaded on
    first use; call ``refresh`` to pick up changes.

    Args:
        root: Vault directory.
    """

    def __init__(self, root: Path) -> None:
        self._root = root.expanduser().resolve()
        self._tree: VaultNode | None = None

    @property
    def root(self) -> Path:
        """Absolute vault directory."""
        return self._root

    @property
    def tree(self) -> VaultNode:
        """Root folder node, loaded lazily."""
        if self._tree is None:
            self._tree = self.refresh()
        return self._tree

    def refresh(self) -> VaultNode:
        """Reload the tree from disk.

        Raises:
            NotADirectoryError: If the vault root is not a directory.
        """
        if not self._root.is_dir():
            msg = f"Vault is not a directory: {self._root}"
            raise NotADirectoryError(msg)

        root = VaultNode(path=ROOT_PATH, kind=NodeKind.FOLDER)
        self._load_children(root, self._root)
        self._tree = root
        return root

    def _load_children(self, folder: VaultNode, directory: Path) -> None:
        try:
            entries = sorted(directory.iterdir())
        except PermissionError:
            logger.warning("Permission denied reading folder: %s", directory)
            return

        for entry in entries:
            relative = entry.relative_to(self._root).as_posix()
            if is_protected_path(relative):
                continue

            try:
                if entry.is_dir() and not entry.is_symlink():
                    child = folder.add_child(VaultNode(path=relative, kind=NodeKind.FOLDER))
                    self._load_children(child, entry)
                else:
                    size = entry.lstat().st_size
                    folder.add_child(
                        VaultNode(path=relative, kind=NodeKind.FILE, size_bytes=size)
                    )
            except OSError:
                logger.warning("Cannot stat vault entry: %s", entry)

    def get_files(self) -> list[VaultNode]:
        return [node for node in iter_tree(self.tree) if not node.is_folder]

    def get_all_loaded_files(self) -> list[VaultNode]:
        return list(iter_tree(self.tree))

    def absolute_path(self, node: VaultNode) -> Path:
        """Map a node to its location on disk."""
        if node.is_root:
            return self._root
        return self._root / node.path

    async def read(self, node: VaultNode) -> str:
        path = self.absolute_path(node)
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def delete(self, node: VaultNode) -> None:
        await asyncio.to_thread(self._delete_sync, node)

    async def trash(self, node: VaultNode, *, system: bool) -> None:
        if system:
            await asyncio.to_thread(self._trash_system_sync, node)
        else:
            await asyncio.to_thread(self._trash_local_sync, node)

    def _delete_sync(self, node: VaultNode) -> None:
        path = self.absolute_path(node)
        if node.is_folder:
            # rmdir refuses non-empty folders
            path.rmdir()
        else:
            path.unlink()

    def _trash_system_sync(self, node: VaultNode) -> None:
        path = self.absolute_path(node)
        self._require_movable(node, path)
        command = find_trash_command()
        if command is None:
            tools = ", ".join(c[0] for c in TRASH_COMMANDS)
            raise OSError(f"System trash unavailable: no trash tool found ({tools})")
        try:
            result = run_command([*command, str(path)], timeout=TRASH_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired as e:
            raise OSError(f"{command[0]} timed out after {e.timeout} seconds for {path}") from e
        except subprocess.SubprocessError as e:
            raise OSError(f"{command[0]} failed for {path}: {e}") from e
        if not result.success:
            raise OSError(result.stderr.strip() or f"{command[0]} failed for {path}")

    def _trash_local_sync(self, node: VaultNode) -> None:
        path = self.absolute_path(node)
        self._require_movable(node, path)

        trash_dir = self._root / TRASH_DIR_NAME
        trash_dir.mkdir(exist_ok=True)
        target = _unique_target(trash_dir, path.name)
        shutil.move(str(path), str(target))
        logger.debug("Moved %s to %s", path, target)

    @staticmethod
    def _require_movable(node: VaultNode, path: Path) -> None:
        if not path.exists() and not path.is_symlink():
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        if node.is_folder and any(path.iterdir()):
            raise OSError(errno.ENOTEMPTY, "Directory not empty", str(path))


def _unique_target(directory: Path, name: str) -> Path:
    """Pick a free name in ``directory``, appending " 1", " 2", ... if needed."""
    target = directory / name
    if not target.exists():
        return target

    stem, dot, suffix = name.rpartition(".")
    if not dot or not stem:
        stem, suffix = name, ""
    else:
        suffix = "." + suffix

    counter = 1
    while True:
        target = directory / f"{stem} {counter}{suffix}"
        if not target.exists():
            return target
        counter += 1
