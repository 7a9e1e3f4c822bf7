"""Reference extraction.

Builds the set of vault paths that are in use for one cleanup run. Two
independent sources feed it: the host's resolved link graph, and the
cards of canvas documents, which the link graph does not cover.
"""

import asyncio
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from vaultsweep.models.canvas import (
    CanvasFileNode,
    CanvasNode,
    CanvasParseError,
    CanvasTextNode,
    parse_canvas,
)
from vaultsweep.models.node import VaultNode
from vaultsweep.vault.base import MetadataCache, ResolvedLinks, Vault

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = "md"
CANVAS_EXTENSION = "canvas"

# Captures the "!" embed marker and the bracketed target separately.
CANVAS_LINK_PATTERN = re.compile(r"(!?)\[\[([^\[\]\n]+?)\]\]")


def is_markdown_path(path: str) -> bool:
    """Check whether a path names a markdown document (case-insensitive)."""
    return path.lower().endswith("." + MARKDOWN_EXTENSION)


def _link_target(raw: str) -> str:
    """Link text without alias or subpath."""
    return raw.split("|", 1)[0].split("#", 1)[0].strip()


@dataclass(frozen=True, slots=True)
class ReferenceSet:
    """Paths in use for one cleanup run.

    Attributes:
        paths: Non-document targets of links plus every canvas reference.
        linked_documents: Markdown documents that other documents link to.
    """

    paths: frozenset[str] = field(default_factory=frozenset)
    linked_documents: frozenset[str] = field(default_factory=frozenset)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)


@dataclass(frozen=True, slots=True)
class CanvasDocument:
    """Parsed canvas with the path it was read from."""

    path: str
    nodes: tuple[CanvasNode, ...]


def references_from_links(resolved_links: ResolvedLinks) -> tuple[set[str], set[str]]:
    """Flatten the link graph.

    Returns:
        Tuple of (non-markdown targets, markdown targets).
    """
    attachments: set[str] = set()
    documents: set[str] = set()
    for targets in resolved_links.values():
        for target in targets:
            if is_markdown_path(target):
                documents.add(target)
            else:
                attachments.add(target)
    return attachments, documents


def references_from_text(text: str) -> set[str]:
    """Collect references from ``[[link]]`` markup in canvas card text.

    An embed (``![[x]]``) points at an attachment and contributes ``x``.
    A plain link (``[[x]]``) points at a document and contributes
    ``x.md``; the bare ``x`` is kept too so a plain link to an
    attachment still protects it.
    """
    found: set[str] = set()
    for match in CANVAS_LINK_PATTERN.finditer(text):
        embed, raw = match.groups()
        target = _link_target(raw)
        if not target:
            continue
        if embed:
            found.add(target)
            continue
        found.add(target if is_markdown_path(target) else f"{target}.{MARKDOWN_EXTENSION}")
        found.add(target)
    return found


def references_from_canvas(nodes: Iterable[CanvasNode]) -> set[str]:
    """Collect references from one canvas document's cards."""
    found: set[str] = set()
    for node in nodes:
        if isinstance(node, CanvasFileNode):
            if not is_markdown_path(node.file):
                found.add(node.file)
        elif isinstance(node, CanvasTextNode):
            found.update(references_from_text(node.text))
    return found


def build_reference_set(
    resolved_links: ResolvedLinks,
    canvases: Iterable[CanvasDocument],
    cache: MetadataCache | None = None,
) -> ReferenceSet:
    """Union the link graph and canvas references into one ReferenceSet.

    Args:
        resolved_links: Host link graph (source -> {target: count}).
        canvases: Parsed canvas documents.
        cache: Optional host resolver; when given, canvas link text is
            also resolved to the vault path the host would open.

    Returns:
        De-duplicated ReferenceSet.
    """
    paths, documents = references_from_links(resolved_links)

    for canvas in canvases:
        found = references_from_canvas(canvas.nodes)
        paths.update(found)
        if cache is None:
            continue
        for node in canvas.nodes:
            if not isinstance(node, CanvasTextNode):
                continue
            for match in CANVAS_LINK_PATTERN.finditer(node.text):
                resolved = cache.resolve_link(_link_target(match.group(2)), canvas.path)
                if resolved is not None:
                    paths.add(resolved)

    return ReferenceSet(paths=frozenset(paths), linked_documents=frozenset(documents))


async def read_canvas(vault: Vault, node: VaultNode) -> CanvasDocument:
    """Read and parse one canvas document.

    Unreadable or malformed canvases are logged and contribute no cards.
    """
    try:
        content = await vault.read(node)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read canvas %s: %s", node.path, e)
        return CanvasDocument(path=node.path, nodes=())

    if not content.strip():
        return CanvasDocument(path=node.path, nodes=())

    try:
        nodes = parse_canvas(content)
    except CanvasParseError as e:
        logger.warning("Skipping malformed canvas %s: %s", node.path, e)
        return CanvasDocument(path=node.path, nodes=())

    return CanvasDocument(path=node.path, nodes=tuple(nodes))


async def extract_references(vault: Vault, cache: MetadataCache) -> ReferenceSet:
    """Build the ReferenceSet for a vault.

    Canvas documents with a non-zero size are read concurrently.

    Args:
        vault: Vault to read canvases from.
        cache: Host metadata providing the link graph.

    Returns:
        ReferenceSet for this run.
    """
    canvas_nodes = [
        node
        for node in vault.get_files()
        if node.extension == CANVAS_EXTENSION and node.size_bytes
    ]
    canvases = await asyncio.gather(*(read_canvas(vault, node) for node in canvas_nodes))

    references = build_reference_set(cache.resolved_links, canvases, cache)
    logger.debug(
        "Found %d referenced paths (%d canvases read)", len(references), len(canvases)
    )
    return references
