"""Empty folder collapsing."""

from collections.abc import Collection, Iterable

from vaultsweep.models.node import VaultNode


def remaining_children(folder: VaultNode, removed: Collection[str] = ()) -> list[VaultNode]:
    """Children of ``folder`` whose paths are not in ``removed``."""
    return [child for child in folder.children if child.path not in removed]


def collapse_empty_folders(
    folders: Iterable[VaultNode],
    removed: Collection[str] = (),
) -> list[VaultNode]:
    """Find empty folders and the single-child chains above them.

    Every non-root folder without children is a seed. From each seed the
    walk moves up while the parent has exactly one child, is not the
    root and has a parent of its own. The root and folders with two or
    more children end the walk and are not added.

    Children listed in ``removed`` (files deleted earlier in the same
    run) do not count, so a folder holding nothing but such files is
    a seed too.

    Args:
        folders: Folder nodes with live ``children`` lists. Files are ignored.
        removed: Paths that will be gone before folders are deleted.

    Returns:
        Folders to remove, each once, seeds before their ancestors.
    """
    collapsed: list[VaultNode] = []
    seen: set[str] = set()

    for folder in folders:
        if not folder.is_folder or folder.is_root or remaining_children(folder, removed):
            continue

        node: VaultNode | None = folder
        while node is not None and node.path not in seen:
            seen.add(node.path)
            collapsed.append(node)

            parent = node.parent
            if (
                parent is None
                or parent.is_root
                or parent.parent is None
                or len(remaining_children(parent, removed)) != 1
            ):
                break
            node = parent

    return collapsed
