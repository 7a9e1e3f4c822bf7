"""Link index and document structure for a disk-backed vault.

Parses every markdown document once to build what the host application
would normally provide: the resolved link graph and, per document, its
top-level sections and frontmatter.
"""

import logging
import posixpath
import re
from collections import Counter
from typing import Any
from urllib.parse import unquote

import yaml

from vaultsweep.models.metadata import FRONTMATTER_SECTION, FileCache, Section
from vaultsweep.vault.base import MetadataCache, ResolvedLinks
from vaultsweep.vault.local import LocalVault

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = "md"

# [[target]], ![[target]], [[target|alias]], [[target#heading]]
WIKILINK_PATTERN = re.compile(r"!?\[\[([^\[\]\n]+?)\]\]")
# [text](target), ![alt](<target with spaces> "title")
MARKDOWN_LINK_PATTERN = re.compile(r"!?\[[^\]\n]*\]\(\s*(?:<([^>\n]+)>|([^)\s]+))[^)\n]*\)")
URL_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

_FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")
_HEADING_PATTERN = re.compile(r"^#{1,6}(\s|$)")
_LIST_PATTERN = re.compile(r"^\s*([-*+]|\d+[.)])\s")
_THEMATIC_BREAK_PATTERN = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")


def strip_link_text(linktext: str) -> str:
    """Drop alias (``|``) and subpath (``#``/``^``) parts from link text."""
    target = linktext.split("|", 1)[0]
    target = target.split("#", 1)[0]
    target = target.split("^", 1)[0]
    return target.strip()


def extract_link_targets(text: str) -> list[str]:
    """Return raw link targets from wikilinks and markdown links.

    External URLs are skipped. Markdown link targets are URL-decoded.
    """
    targets: list[str] = []
    for match in WIKILINK_PATTERN.finditer(text):
        target = strip_link_text(match.group(1))
        if target:
            targets.append(target)

    for match in MARKDOWN_LINK_PATTERN.finditer(text):
        raw = match.group(1) or match.group(2) or ""
        if URL_SCHEME_PATTERN.match(raw):
            continue
        target = strip_link_text(unquote(raw))
        if target:
            targets.append(target)

    return targets


def parse_document(text: str) -> FileCache:
    """Split a markdown document into top-level sections.

    A leading ``---`` block is the frontmatter section; its YAML is
    parsed into the frontmatter map. Frontmatter that is not a YAML
    mapping leaves the map unset and is reported in ``parse_error``.
    Blank-only documents have no sections.
    """
    lines = text.splitlines()
    sections: list[Section] = []
    frontmatter: dict[str, Any] | None = None
    parse_error: str | None = None
    i = 0

    if lines and lines[0].strip() == "---":
        end = next(
            (j for j in range(1, len(lines)) if lines[j].strip() in ("---", "...")),
            None,
        )
        if end is not None:
            sections.append(Section(type=FRONTMATTER_SECTION, start_line=0, end_line=end))
            try:
                frontmatter = _load_frontmatter("\n".join(lines[1:end]))
            except ValueError as e:
                parse_error = str(e)
            i = end + 1

    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        start = i
        fence = _FENCE_PATTERN.match(line)
        if fence:
            marker = fence.group(1)
            i += 1
            while i < len(lines) and not lines[i].strip().startswith(marker):
                i += 1
            sections.append(Section(type="code", start_line=start, end_line=min(i, len(lines) - 1)))
            i += 1
            continue

        if _HEADING_PATTERN.match(line):
            sections.append(Section(type="heading", start_line=start, end_line=start))
            i += 1
            continue

        if _THEMATIC_BREAK_PATTERN.match(line):
            sections.append(Section(type="thematicBreak", start_line=start, end_line=start))
            i += 1
            continue

        block_type = _block_type(line)
        i += 1
        while i < len(lines) and lines[i].strip():
            if _FENCE_PATTERN.match(lines[i]) or _HEADING_PATTERN.match(lines[i]):
                break
            i += 1
        sections.append(Section(type=block_type, start_line=start, end_line=i - 1))

    return FileCache(sections=tuple(sections), frontmatter=frontmatter, parse_error=parse_error)


def _block_type(line: str) -> str:
    stripped = line.lstrip()
    if _LIST_PATTERN.match(line):
        return "list"
    if stripped.startswith(">"):
        return "blockquote"
    if stripped.startswith("|"):
        return "table"
    return "paragraph"


def _load_frontmatter(raw: str) -> dict[str, Any]:
    """Parse a frontmatter block.

    Raises:
        ValueError: If the block is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid frontmatter YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Frontmatter is a {type(data).__name__}, not a mapping")
    return data


class LocalMetadataIndex(MetadataCache):
    """Metadata cache built by parsing a LocalVault's markdown documents.

    The index is built on first access and reflects the vault at that
    moment.

    Args:
        vault: Vault to index.
    """

    def __init__(self, vault: LocalVault) -> None:
        self._vault = vault
        self._files: dict[str, FileCache] | None = None
        self._links: dict[str, dict[str, int]] | None = None
        self._paths: list[str] = []
        self._known: set[str] = set()

    @property
    def resolved_links(self) -> ResolvedLinks:
        self._ensure_built()
        assert self._links is not None
        return self._links

    def get_file_cache(self, path: str) -> FileCache | None:
        self._ensure_built()
        assert self._files is not None
        return self._files.get(path)

    def resolve_link(self, linktext: str, source_path: str = "") -> str | None:
        """Resolve link text the way the host does.

        Tries, in order: a path relative to the source document, the
        exact vault path, then any file whose path ends with the link
        text (shortest path wins). Each step also tries the markdown
        extension appended.
        """
        self._ensure_built()
        target = strip_link_text(linktext).lstrip("/")
        if not target:
            return None

        variants = [target]
        if not target.lower().endswith("." + MARKDOWN_EXTENSION):
            variants.append(f"{target}.{MARKDOWN_EXTENSION}")

        source_dir = posixpath.dirname(source_path)
        if source_dir:
            for variant in variants:
                relative = posixpath.normpath(posixpath.join(source_dir, variant))
                if relative in self._known:
                    return relative

        for variant in variants:
            normalized = posixpath.normpath(variant)
            if normalized in self._known:
                return normalized

        for variant in variants:
            suffix = "/" + variant
            matches = sorted(
                (path for path in self._paths if path.endswith(suffix)),
                key=lambda path: (len(path), path),
            )
            if matches:
                return matches[0]

        return None

    def _ensure_built(self) -> None:
        if self._files is None:
            self.build()

    def build(self) -> None:
        """Parse every markdown document and resolve its links."""
        files = self._vault.get_files()
        self._paths = [node.path for node in files]
        self._known = set(self._paths)
        self._files = {}
        self._links = {}

        documents = [node for node in files if node.extension == MARKDOWN_EXTENSION]
        texts: dict[str, str] = {}
        for node in documents:
            try:
                data = self._vault.absolute_path(node).read_bytes()
            except OSError as e:
                logger.warning("Cannot read document %s, keeping it: %s", node.path, e)
                self._files[node.path] = FileCache.unreadable(str(e))
                continue
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning("Document %s is not UTF-8, keeping it: %s", node.path, e)
                self._files[node.path] = FileCache.unreadable(str(e))
                # Its links still protect their targets
                texts[node.path] = data.decode("utf-8", errors="replace")
                continue
            texts[node.path] = text
            self._files[node.path] = parse_document(text)

        for source, text in texts.items():
            counts: Counter[str] = Counter()
            for raw in extract_link_targets(text):
                resolved = self.resolve_link(raw, source)
                if resolved is not None:
                    counts[resolved] += 1
            self._links[source] = dict(counts)

        logger.debug(
            "Indexed %d documents, %d links",
            len(self._files),
            sum(sum(targets.values()) for targets in self._links.values()),
        )
