"""Unit tests for CandidateClassifier."""

import pytest
from vaultsweep.cleanup.classifier import (
    CANVAS_EMPTY_THRESHOLD_BYTES,
    CandidateClassifier,
    build_extension_pattern,
)
from vaultsweep.cleanup.references import ReferenceSet
from vaultsweep.models.candidate import CleanupReason
from vaultsweep.models.metadata import FRONTMATTER_SECTION, FileCache, Section
from vaultsweep.models.policy import CleanupPolicy

NO_REFERENCES = ReferenceSet()


def _decide(vault, path, cache, policy=None, references=NO_REFERENCES):
    classifier = CandidateClassifier(policy or CleanupPolicy())
    return classifier.decide(vault.node(path), references, cache)


class TestBuildExtensionPattern:
    """Tests for build_extension_pattern."""

    def test_wildcard_matches_anything(self) -> None:
        """* matches every extension, including none."""
        pattern = build_extension_pattern(["png", "*"])
        assert pattern.fullmatch("xyz")
        assert pattern.fullmatch("")

    def test_list_is_full_match(self) -> None:
        """Listed extensions match whole and case-insensitively."""
        pattern = build_extension_pattern(["png", "jpg"])
        assert pattern.fullmatch("PNG")
        assert pattern.fullmatch("md")
        assert not pattern.fullmatch("pngx")
        assert not pattern.fullmatch("pdf")


class TestExtensionFilter:
    """Tests for the extension rule."""

    def test_allow_list(self, make_vault, make_cache) -> None:
        """Only listed extensions can become candidates."""
        vault = make_vault({"a.png": 10, "b.pdf": 10})
        policy = CleanupPolicy(attachment_extensions=["png"])
        assert _decide(vault, "a.png", make_cache(), policy).remove is True
        assert _decide(vault, "b.pdf", make_cache(), policy).remove is False

    def test_deny_list(self, make_vault, make_cache) -> None:
        """Listed extensions are protected when the list is a deny-list."""
        vault = make_vault({"a.png": 10, "b.pdf": 10})
        policy = CleanupPolicy(attachment_extensions=["png"], attachments_exclude_include=False)
        assert _decide(vault, "a.png", make_cache(), policy).remove is False
        assert _decide(vault, "b.pdf", make_cache(), policy).remove is True

    def test_markdown_always_passes(self, make_vault, make_cache) -> None:
        """Documents are classified even when the list excludes md."""
        vault = make_vault({"empty.md": 0})
        for policy in (
            CleanupPolicy(attachment_extensions=["png"]),
            CleanupPolicy(attachment_extensions=["md"], attachments_exclude_include=False),
        ):
            decision = _decide(vault, "empty.md", make_cache(), policy)
            assert decision.reason == CleanupReason.EMPTY_MARKDOWN


class TestReferenceRule:
    """Tests for the reference rule."""

    def test_referenced_file_kept(self, make_vault, make_cache) -> None:
        """A referenced attachment is never a candidate."""
        vault = make_vault({"image.png": 5000})
        refs = ReferenceSet(paths=frozenset({"image.png"}))
        assert _decide(vault, "image.png", make_cache(), references=refs).remove is False

    def test_reference_wins_over_empty_canvas(self, make_vault, make_cache) -> None:
        """Even an empty canvas is kept when referenced."""
        vault = make_vault({"tiny.canvas": 10})
        refs = ReferenceSet(paths=frozenset({"tiny.canvas"}))
        assert _decide(vault, "tiny.canvas", make_cache(), references=refs).remove is False

    def test_unreferenced_attachment(self, make_vault, make_cache) -> None:
        """Unreferenced attachments are candidates."""
        vault = make_vault({"orphan.png": 5000})
        decision = _decide(vault, "orphan.png", make_cache())
        assert decision.remove is True
        assert decision.reason == CleanupReason.UNUSED_ATTACHMENT


class TestCanvasRule:
    """Tests for the canvas size rule."""

    @pytest.mark.parametrize(
        ("size", "removed"),
        [
            (0, True),
            (CANVAS_EMPTY_THRESHOLD_BYTES - 1, True),
            (CANVAS_EMPTY_THRESHOLD_BYTES, False),
            (500, False),
        ],
    )
    def test_threshold(self, make_vault, make_cache, size: int, removed: bool) -> None:
        """Canvases below 50 bytes are empty."""
        vault = make_vault({"board.canvas": size})
        decision = _decide(vault, "board.canvas", make_cache())
        assert decision.remove is removed
        if removed:
            assert decision.reason == CleanupReason.EMPTY_CANVAS

    def test_unknown_size_kept(self, make_vault, make_cache) -> None:
        """A canvas without size information is kept."""
        vault = make_vault({"board.canvas": 0})
        vault.node("board.canvas").size_bytes = None
        assert _decide(vault, "board.canvas", make_cache()).remove is False


class TestMarkdownRule:
    """Tests for the markdown rules."""

    def test_zero_size_always_candidate(self, make_vault, make_cache, make_document) -> None:
        """A 0-byte document is empty whatever the cache says."""
        vault = make_vault({"empty.md": 0})
        cache = make_cache(documents={"empty.md": make_document("paragraph")})
        policy = CleanupPolicy(ignored_frontmatter=[])
        decision = _decide(vault, "empty.md", cache, policy)
        assert decision.reason == CleanupReason.EMPTY_MARKDOWN

    def test_whitespace_document(self, make_vault, make_cache, make_document) -> None:
        """A non-empty file with no sections is empty."""
        vault = make_vault({"blank.md": 4})
        cache = make_cache(documents={"blank.md": make_document()})
        assert _decide(vault, "blank.md", cache).reason == CleanupReason.EMPTY_MARKDOWN

    def test_missing_cache_entry(self, make_vault, make_cache) -> None:
        """A document the cache does not know is treated as empty."""
        vault = make_vault({"new.md": 4})
        assert _decide(vault, "new.md", make_cache()).reason == CleanupReason.EMPTY_MARKDOWN

    def test_unreadable_document_kept(self, make_vault, make_cache) -> None:
        """A document that could not be read is never treated as empty."""
        vault = make_vault({"latin.md": 31})
        cache = make_cache(documents={"latin.md": FileCache.unreadable("invalid utf-8")})
        decision = _decide(vault, "latin.md", cache)
        assert decision.remove is False
        assert "invalid utf-8" in decision.detail

    def test_broken_frontmatter_kept(self, make_vault, make_cache) -> None:
        """Frontmatter that failed to parse does not count as ignorable."""
        vault = make_vault({"n.md": 60})
        broken = FileCache(
            sections=(Section(type=FRONTMATTER_SECTION, start_line=0, end_line=3),),
            parse_error="Invalid frontmatter YAML",
        )
        cache = make_cache(documents={"n.md": broken})
        policy = CleanupPolicy(ignored_frontmatter=["tags"])
        assert _decide(vault, "n.md", cache, policy).remove is False

    def test_document_with_content_kept(self, make_vault, make_cache, make_document) -> None:
        """A document with content sections is kept."""
        vault = make_vault({"note.md": 40})
        cache = make_cache(documents={"note.md": make_document("heading", "paragraph")})
        assert _decide(vault, "note.md", cache).remove is False

    def test_frontmatter_plus_content_kept(self, make_vault, make_cache, make_document) -> None:
        """Frontmatter followed by content is kept even with ignorable keys."""
        vault = make_vault({"note.md": 40})
        cache = make_cache(
            documents={"note.md": make_document("yaml", "paragraph", frontmatter={"tags": []})}
        )
        policy = CleanupPolicy(ignored_frontmatter=["tags"])
        assert _decide(vault, "note.md", cache, policy).remove is False

    def test_frontmatter_only_ignored_keys(
        self, make_vault, make_cache, make_frontmatter_only
    ) -> None:
        """Frontmatter made only of ignored keys is removable."""
        vault = make_vault({"stub.md": 30})
        cache = make_cache(documents={"stub.md": make_frontmatter_only(tags=[], aliases=[])})
        policy = CleanupPolicy(ignored_frontmatter=["tags", "aliases", "cssclass"])
        decision = _decide(vault, "stub.md", cache, policy)
        assert decision.reason == CleanupReason.FRONTMATTER_ONLY

    def test_frontmatter_only_other_keys(
        self, make_vault, make_cache, make_frontmatter_only
    ) -> None:
        """A non-ignored key keeps the document."""
        vault = make_vault({"stub.md": 30})
        cache = make_cache(documents={"stub.md": make_frontmatter_only(tags=[], title="x")})
        policy = CleanupPolicy(ignored_frontmatter=["tags"])
        assert _decide(vault, "stub.md", cache, policy).remove is False

    def test_frontmatter_only_without_ignored_list(
        self, make_vault, make_cache, make_frontmatter_only
    ) -> None:
        """With nothing ignored, frontmatter counts as content."""
        vault = make_vault({"stub.md": 30})
        cache = make_cache(documents={"stub.md": make_frontmatter_only(tags=[])})
        assert _decide(vault, "stub.md", cache, CleanupPolicy()).remove is False

    def test_linked_document_kept(self, make_vault, make_cache) -> None:
        """An empty document that others link to is kept."""
        vault = make_vault({"todo.md": 0})
        refs = ReferenceSet(linked_documents=frozenset({"todo.md"}))
        assert _decide(vault, "todo.md", make_cache(), references=refs).remove is False


class TestClassify:
    """Tests for CandidateClassifier.classify."""

    def test_returns_candidates_in_order(self, make_vault, make_cache, make_document) -> None:
        """Only candidates are returned, in input order, folders skipped."""
        vault = make_vault(
            {"b.png": 10, "a.png": 10, "note.md": 20, "Sub/c.png": 10},
            folders=["Empty"],
        )
        cache = make_cache(documents={"note.md": make_document("paragraph")})
        refs = ReferenceSet(paths=frozenset({"a.png"}))

        candidates = CandidateClassifier(CleanupPolicy()).classify(
            vault.get_all_loaded_files(), refs, cache
        )

        assert [c.path for c in candidates] == ["b.png", "Sub/c.png"]
        assert all(c.reason == CleanupReason.UNUSED_ATTACHMENT for c in candidates)
