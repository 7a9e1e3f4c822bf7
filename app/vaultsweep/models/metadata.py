"""Structured content cache models.

Mirrors what the host exposes for a parsed markdown document: its
ordered content sections and its frontmatter map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FRONTMATTER_SECTION = "yaml"


@dataclass(frozen=True, slots=True)
class Section:
    """A top-level block of a markdown document.

    Attributes:
        type: Block type ("yaml", "heading", "paragraph", "code", ...).
        start_line: Zero-based first line of the block.
        end_line: Zero-based last line of the block (inclusive).
    """

    type: str
    start_line: int
    end_line: int


@dataclass(frozen=True, slots=True)
class FileCache:
    """Parsed structure of one markdown document.

    Attributes:
        sections: Top-level blocks in document order.
        frontmatter: Parsed frontmatter mapping, None if the document has none.
        parse_error: Why the document or its frontmatter could not be
            read, None if parsing succeeded. Such documents are never
            treated as empty.
    """

    sections: tuple[Section, ...] = ()
    frontmatter: dict[str, Any] | None = field(default=None)
    parse_error: str | None = None

    @classmethod
    def unreadable(cls, reason: str) -> FileCache:
        """Placeholder for a document whose content could not be read."""
        return cls(parse_error=reason)

    @property
    def is_frontmatter_only(self) -> bool:
        """True if the only section is a frontmatter block."""
        return len(self.sections) == 1 and self.sections[0].type == FRONTMATTER_SECTION

    @property
    def frontmatter_keys(self) -> list[str]:
        """Sorted frontmatter keys (empty when there is no frontmatter)."""
        if not self.frontmatter:
            return []
        return sorted(str(key) for key in self.frontmatter)
