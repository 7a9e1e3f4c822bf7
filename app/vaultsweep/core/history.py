"""Run history storage.

Each recorded cleanup run is one JSON object per line in
~/.local/state/vaultsweep/history.jsonl. The file is only ever
appended to.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from vaultsweep.core.paths import ensure_dir, get_history_path
from vaultsweep.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryStore:
    """Append-only log of cleanup runs.

    Args:
        path: History file (defaults to the XDG state location).
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else get_history_path()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, entry: HistoryEntry) -> None:
        """Record a run.

        Raises:
            RuntimeError: If the history directory cannot be created.
            OSError: If the file cannot be written.
        """
        ensure_dir(self._path.parent)
        with self._path.open(mode="a", encoding="utf-8") as f:
            f.write(entry.to_json_line() + "\n")

    def __iter__(self) -> Iterator[HistoryEntry]:
        """Yield recorded runs oldest first, skipping corrupt lines."""
        if not self._path.exists():
            return
        with self._path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield HistoryEntry.from_json_line(line)
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)

    def recent(self, limit: int | None = None) -> list[HistoryEntry]:
        """Recorded runs, newest first.

        Args:
            limit: Maximum number of runs to return (None for all).
        """
        entries = list(self)
        entries.reverse()
        return entries if limit is None else entries[:limit]
