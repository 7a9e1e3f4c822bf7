"""Unit tests for reference extraction."""

import logging

import pytest
from vaultsweep.cleanup.references import (
    CanvasDocument,
    ReferenceSet,
    build_reference_set,
    extract_references,
    read_canvas,
    references_from_canvas,
    references_from_links,
    references_from_text,
)
from vaultsweep.models.canvas import CanvasFileNode, CanvasOtherNode, CanvasTextNode


class TestReferencesFromLinks:
    """Tests for references_from_links."""

    def test_splits_documents_and_attachments(self) -> None:
        """Markdown targets go to documents, everything else to attachments."""
        attachments, documents = references_from_links(
            {
                "a.md": {"img.png": 2, "b.md": 1},
                "b.md": {"doc.pdf": 1},
            }
        )
        assert attachments == {"img.png", "doc.pdf"}
        assert documents == {"b.md"}

    def test_empty_graph(self) -> None:
        """No links means no references."""
        assert references_from_links({}) == (set(), set())


class TestReferencesFromText:
    """Tests for references_from_text."""

    def test_embed(self) -> None:
        """![[x]] contributes x."""
        assert references_from_text("![[pic.png]]") == {"pic.png"}

    def test_plain_link(self) -> None:
        """[[x]] contributes x.md and x."""
        assert references_from_text("[[Note]]") == {"Note.md", "Note"}

    def test_plain_link_with_extension(self) -> None:
        """[[x.md]] is not doubled."""
        assert references_from_text("[[Note.md]]") == {"Note.md"}

    def test_alias_and_subpath(self) -> None:
        """Aliases and headings are stripped."""
        assert references_from_text("![[pic.png|200]] [[Note#Heading|text]]") == {
            "pic.png",
            "Note.md",
            "Note",
        }

    def test_no_links(self) -> None:
        """Plain text contributes nothing."""
        assert references_from_text("just words [not a link]") == set()


class TestReferencesFromCanvas:
    """Tests for references_from_canvas."""

    def test_file_and_text_nodes(self) -> None:
        """File cards and text card links both count."""
        nodes = [
            CanvasFileNode(id="1", file="diagram.png"),
            CanvasTextNode(id="2", text="see ![[chart.svg]]"),
            CanvasOtherNode(id="3", type="group"),
        ]
        assert references_from_canvas(nodes) == {"diagram.png", "chart.svg"}

    def test_markdown_file_cards_skipped(self) -> None:
        """File cards pointing at documents are not attachment references."""
        assert references_from_canvas([CanvasFileNode(id="1", file="Note.md")]) == set()


class TestBuildReferenceSet:
    """Tests for build_reference_set."""

    def test_union_of_sources(self) -> None:
        """Links and canvases are merged."""
        canvas = CanvasDocument(
            path="board.canvas",
            nodes=(CanvasFileNode(id="1", file="diagram.png"),),
        )
        refs = build_reference_set({"a.md": {"img.png": 1, "b.md": 1}}, [canvas])
        assert refs.paths == frozenset({"img.png", "diagram.png"})
        assert refs.linked_documents == frozenset({"b.md"})
        assert "diagram.png" in refs
        assert "b.md" not in refs
        assert len(refs) == 2

    def test_resolver_adds_vault_paths(self, make_cache) -> None:
        """Canvas link text is resolved through the cache when possible."""

        class ResolvingCache(make_cache):
            def resolve_link(self, linktext: str, source_path: str = "") -> str | None:
                return {"pic.png": "assets/pic.png"}.get(linktext)

        canvas = CanvasDocument(
            path="board.canvas",
            nodes=(CanvasTextNode(id="1", text="![[pic.png]] ![[other.png]]"),),
        )
        refs = build_reference_set({}, [canvas], ResolvingCache())
        assert refs.paths == frozenset({"pic.png", "assets/pic.png", "other.png"})

    def test_empty(self) -> None:
        """No sources give an empty set."""
        assert build_reference_set({}, []) == ReferenceSet()


class TestReadCanvas:
    """Tests for read_canvas."""

    async def test_parses_nodes(self, make_vault) -> None:
        """A valid canvas yields its typed nodes."""
        vault = make_vault(
            {"board.canvas": 90},
            contents={"board.canvas": '{"nodes":[{"id":"a","type":"file","file":"x.png"}]}'},
        )
        canvas = await read_canvas(vault, vault.node("board.canvas"))
        assert canvas.nodes == (CanvasFileNode(id="a", file="x.png"),)

    async def test_malformed_canvas_is_skipped(
        self, make_vault, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Invalid JSON contributes nothing and logs a warning."""
        vault = make_vault({"board.canvas": 90}, contents={"board.canvas": "{nodes: ["})
        with caplog.at_level(logging.WARNING, logger="vaultsweep.cleanup.references"):
            canvas = await read_canvas(vault, vault.node("board.canvas"))
        assert canvas.nodes == ()
        assert "malformed canvas" in caplog.text

    async def test_unreadable_canvas_is_skipped(self, make_vault) -> None:
        """A read error contributes nothing."""
        vault = make_vault({"board.canvas": 90})
        canvas = await read_canvas(vault, vault.node("board.canvas"))
        assert canvas.nodes == ()


class TestExtractReferences:
    """Tests for extract_references."""

    async def test_reads_only_non_empty_canvases(self, make_vault, make_cache) -> None:
        """Zero-byte canvases and other files are not read."""
        vault = make_vault(
            {"board.canvas": 90, "blank.canvas": 0, "note.md": 10},
            contents={"board.canvas": '{"nodes":[{"id":"a","type":"file","file":"d.png"}]}'},
        )
        refs = await extract_references(vault, make_cache({"note.md": {"img.png": 1}}))

        assert vault.reads == ["board.canvas"]
        assert refs.paths == frozenset({"img.png", "d.png"})
