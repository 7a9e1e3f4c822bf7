"""Unit tests for the path filter."""

from vaultsweep.cleanup.filters import PathFilter, compile_prefix_pattern, merge_candidates
from vaultsweep.models.candidate import Candidate, CleanupReason
from vaultsweep.models.node import NodeKind, VaultNode
from vaultsweep.models.policy import ExcludeInclude


def _candidate(path: str, reason: CleanupReason = CleanupReason.UNUSED_ATTACHMENT) -> Candidate:
    return Candidate(node=VaultNode(path=path, kind=NodeKind.FILE, size_bytes=1), reason=reason)


class TestCompilePrefixPattern:
    """Tests for compile_prefix_pattern."""

    def test_no_patterns(self) -> None:
        """Blank patterns compile to None."""
        assert compile_prefix_pattern([]) is None
        assert compile_prefix_pattern(["", "  "]) is None

    def test_prefix_match(self) -> None:
        """Patterns match from the start of the path."""
        pattern = compile_prefix_pattern(["Archive"])
        assert pattern is not None
        assert pattern.match("Archive/old.png")
        assert not pattern.match("Notes/Archive/old.png")

    def test_glob(self) -> None:
        """Glob wildcards are supported."""
        pattern = compile_prefix_pattern(["*/drafts"])
        assert pattern is not None
        assert pattern.match("Projects/drafts/a.png")
        assert not pattern.match("drafts/a.png")


class TestPathFilter:
    """Tests for PathFilter."""

    def test_exclude_mode(self) -> None:
        """Matching candidates are dropped in exclude mode."""
        path_filter = PathFilter(["Archive"], ExcludeInclude.EXCLUDE)
        result = path_filter.apply([_candidate("Archive/old.png"), _candidate("new.png")])
        assert [c.path for c in result] == ["new.png"]

    def test_include_mode(self) -> None:
        """Only matching candidates survive in include mode."""
        path_filter = PathFilter(["Inbox", "Temp"], ExcludeInclude.INCLUDE)
        result = path_filter.apply(
            [_candidate("Inbox/a.png"), _candidate("Notes/b.png"), _candidate("Temp/c.pdf")]
        )
        assert [c.path for c in result] == ["Inbox/a.png", "Temp/c.pdf"]

    def test_empty_list_allows_everything(self) -> None:
        """No patterns means no filtering in either mode."""
        candidates = [_candidate("a.png"), _candidate("Sub/b.png")]
        for mode in ExcludeInclude:
            assert PathFilter([], mode).apply(candidates) == candidates

    def test_leading_slash_ignored(self) -> None:
        """Patterns and paths are compared without a leading slash."""
        assert PathFilter(["/Archive"]).matches("Archive/x.png")


class TestMergeCandidates:
    """Tests for merge_candidates."""

    def test_first_wins(self) -> None:
        """A path already present keeps its first reason."""
        first = _candidate("x.md", CleanupReason.EMPTY_MARKDOWN)
        second = _candidate("x.md", CleanupReason.UNUSED_ATTACHMENT)
        other = _candidate("y.png")
        assert merge_candidates([first, other], [second]) == [first, other]
