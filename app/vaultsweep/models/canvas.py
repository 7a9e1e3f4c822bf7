"""Canvas document models.

A canvas is a JSON document whose ``nodes`` list describes cards on a
board. Only file cards and text cards can point at other files, so
every other card type is kept as an opaque node.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class CanvasParseError(ValueError):
    """Raised when canvas content is not a JSON object."""


@dataclass(frozen=True, slots=True)
class CanvasFileNode:
    """Card embedding a vault file.

    Attributes:
        id: Card identifier.
        file: Vault-relative path of the embedded file.
    """

    id: str
    file: str


@dataclass(frozen=True, slots=True)
class CanvasTextNode:
    """Card holding markdown text, which may contain ``[[link]]`` markup.

    Attributes:
        id: Card identifier.
        text: Raw markdown text of the card.
    """

    id: str
    text: str


@dataclass(frozen=True, slots=True)
class CanvasOtherNode:
    """Any other card type (group, link, ...).

    Attributes:
        id: Card identifier.
        type: Card type as written in the document.
    """

    id: str
    type: str


CanvasNode = CanvasFileNode | CanvasTextNode | CanvasOtherNode


def parse_canvas_node(raw: object) -> CanvasNode | None:
    """Validate a single raw card.

    Args:
        raw: Decoded JSON value from the ``nodes`` list.

    Returns:
        The typed card, or None if the card does not have the fields
        its type requires.
    """
    if not isinstance(raw, dict):
        return None

    node_id = raw.get("id")
    node_type = raw.get("type")
    if not isinstance(node_id, str) or not isinstance(node_type, str):
        return None

    if node_type == "file":
        target = raw.get("file")
        if not isinstance(target, str) or not target:
            return None
        return CanvasFileNode(id=node_id, file=target)

    if node_type == "text":
        text = raw.get("text")
        if not isinstance(text, str):
            return None
        return CanvasTextNode(id=node_id, text=text)

    return CanvasOtherNode(id=node_id, type=node_type)


def parse_canvas(content: str) -> list[CanvasNode]:
    """Parse canvas content into typed cards.

    Cards that fail validation are skipped. A document without a
    ``nodes`` list has no cards.

    Args:
        content: Raw canvas document text.

    Returns:
        List of valid cards in document order.

    Raises:
        CanvasParseError: If the content is not a JSON object.
    """
    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as e:
        raise CanvasParseError(f"Invalid canvas JSON: {e}") from e

    if not isinstance(data, dict):
        raise CanvasParseError("Canvas content must be a JSON object")

    raw_nodes = data.get("nodes", [])
    if not isinstance(raw_nodes, list):
        logger.debug("Canvas 'nodes' is not a list, ignoring it")
        return []

    nodes: list[CanvasNode] = []
    for raw in raw_nodes:
        node = parse_canvas_node(raw)
        if node is None:
            logger.debug("Skipping malformed canvas node: %r", raw)
            continue
        nodes.append(node)
    return nodes
