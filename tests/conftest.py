"""Pytest configuration and shared fixtures.

Provides an in-memory vault and metadata cache so the cleanup core can
be exercised without touching the disk.
"""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest
from vaultsweep.models.metadata import FRONTMATTER_SECTION, FileCache, Section
from vaultsweep.models.node import VaultNode, build_tree, iter_tree
from vaultsweep.vault.base import MetadataCache, Vault


class FakeVault(Vault):
    """Vault backed by an in-memory tree."""

    def __init__(
        self,
        files: Mapping[str, int],
        folders: Iterable[str] = (),
        contents: Mapping[str, str] | None = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.root = build_tree(files, folders)
        self.contents = dict(contents or {})
        self.failing = set(failing)
        self.deleted: list[str] = []
        self.trashed: list[tuple[str, bool]] = []
        self.reads: list[str] = []

    def get_files(self) -> list[VaultNode]:
        return [node for node in iter_tree(self.root) if not node.is_folder]

    def get_all_loaded_files(self) -> list[VaultNode]:
        return list(iter_tree(self.root))

    def node(self, path: str) -> VaultNode:
        for node in iter_tree(self.root):
            if node.path == path:
                return node
        raise KeyError(path)

    async def read(self, node: VaultNode) -> str:
        self.reads.append(node.path)
        if node.path not in self.contents:
            raise FileNotFoundError(node.path)
        return self.contents[node.path]

    async def delete(self, node: VaultNode) -> None:
        if node.path in self.failing:
            raise PermissionError(f"Permission denied: {node.path}")
        self.deleted.append(node.path)

    async def trash(self, node: VaultNode, *, system: bool) -> None:
        if node.path in self.failing:
            raise PermissionError(f"Permission denied: {node.path}")
        self.trashed.append((node.path, system))


class FakeMetadataCache(MetadataCache):
    """Metadata cache with fixed links and document structures."""

    def __init__(
        self,
        links: Mapping[str, Mapping[str, int]] | None = None,
        documents: Mapping[str, FileCache] | None = None,
    ) -> None:
        self._links = dict(links or {})
        self._documents = dict(documents or {})

    @property
    def resolved_links(self) -> Mapping[str, Mapping[str, int]]:
        return self._links

    def get_file_cache(self, path: str) -> FileCache | None:
        return self._documents.get(path)


def document(*section_types: str, frontmatter: dict[str, object] | None = None) -> FileCache:
    """Build a FileCache with one section per type."""
    sections = tuple(
        Section(type=section_type, start_line=i, end_line=i)
        for i, section_type in enumerate(section_types)
    )
    return FileCache(sections=sections, frontmatter=frontmatter)


def frontmatter_only(**keys: object) -> FileCache:
    """Build a FileCache holding a single frontmatter section."""
    return document(FRONTMATTER_SECTION, frontmatter=dict(keys))


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories at a temporary location."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(base / "state"))
    return base


@pytest.fixture
def make_vault() -> Callable[..., FakeVault]:
    """Factory for in-memory vaults."""
    return FakeVault


@pytest.fixture
def make_cache() -> Callable[..., FakeMetadataCache]:
    """Factory for in-memory metadata caches."""
    return FakeMetadataCache


@pytest.fixture
def make_document() -> Callable[..., FileCache]:
    """Factory for document structures (see ``document``)."""
    return document


@pytest.fixture
def make_frontmatter_only() -> Callable[..., FileCache]:
    """Factory for frontmatter-only document structures."""
    return frontmatter_only


@pytest.fixture
def disk_vault(tmp_path: Path) -> Path:
    """A small vault on disk.

    Layout:
        note.md          embeds image.png
        image.png        referenced
        orphan.png       unreferenced
        empty.md         empty document
        board.canvas     file card pointing at diagram.png
        diagram.png      referenced from the canvas
        A/B/C/           empty folder chain
        A/x.md           keeps A alive
        .obsidian/app.json  host configuration
    """
    root = tmp_path / "vault"
    root.mkdir()
    (root / "note.md").write_text("# Note\n\n![[image.png]]\n", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG" + b"\x00" * 5000)
    (root / "orphan.png").write_bytes(b"\x89PNG" + b"\x00" * 5000)
    (root / "empty.md").write_text("", encoding="utf-8")
    (root / "board.canvas").write_text(
        '{"nodes":[{"id":"n1","type":"file","file":"diagram.png",'
        '"x":0,"y":0,"width":400,"height":400}],"edges":[]}',
        encoding="utf-8",
    )
    (root / "diagram.png").write_bytes(b"\x89PNG" + b"\x00" * 100)
    (root / "A" / "B" / "C").mkdir(parents=True)
    (root / "A" / "x.md").write_text("Some text\n", encoding="utf-8")
    (root / ".obsidian").mkdir()
    (root / ".obsidian" / "app.json").write_text("{}", encoding="utf-8")
    return root
