"""Recorded cleanup runs.

A run that removed anything is stored as one JSON object per line, so
past deletions can be looked up after the fact (for instance to find a
file in the trash again).
"""

from __future__ import annotations

import json
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from vaultsweep.models.policy import DeletionDestination


def _new_run_id() -> str:
    return secrets.token_hex(6)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


@dataclass(frozen=True, slots=True)
class RemovedItem:
    """A path removed by a run and the rule that selected it."""

    path: str
    reason: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Removed item path cannot be empty")


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One recorded cleanup run.

    Attributes:
        vault: Absolute vault directory.
        destination: Where removed entries went.
        removed: Paths removed, in deletion order.
        failed: Paths that could not be removed.
        id: Random 12-character hex identifier.
        timestamp: ISO 8601 UTC time the run was recorded.
        metadata: Free-form context such as the invoking command.
    """

    vault: str
    destination: DeletionDestination
    removed: tuple[RemovedItem, ...]
    failed: tuple[str, ...] = ()
    id: str = field(default_factory=_new_run_id)
    timestamp: str = field(default_factory=_utc_now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.removed:
            raise ValueError("History entry must record at least one removed path")
        if not self.id or not self.timestamp:
            raise ValueError("History entry needs an id and a timestamp")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "vault": self.vault,
            "destination": self.destination.value,
            "removed": [
                {"path": item.path, "reason": item.reason} for item in self.removed
            ],
            "failed": list(self.failed),
            "metadata": self.metadata,
        }

    def to_json_line(self) -> str:
        """Single-line JSON (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Parse a line written by ``to_json_line``.

        Raises:
            json.JSONDecodeError: If the line is not JSON.
            KeyError: If a required field is missing.
            ValueError: If a field holds an invalid value.
        """
        data = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError("History line is not a JSON object")
        return cls(
            vault=data["vault"],
            destination=DeletionDestination(data["destination"]),
            removed=tuple(
                RemovedItem(path=item["path"], reason=item.get("reason"))
                for item in data["removed"]
            ),
            failed=tuple(data.get("failed", ())),
            id=data["id"],
            timestamp=data["timestamp"],
            metadata=data.get("metadata", {}),
        )
