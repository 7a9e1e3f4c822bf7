"""Path filtering for the final deletion set."""

import fnmatch
import re
from collections.abc import Iterable

from vaultsweep.models.candidate import Candidate
from vaultsweep.models.policy import ExcludeInclude


def compile_prefix_pattern(patterns: Iterable[str]) -> re.Pattern[str] | None:
    """Compile folder patterns into one match anchored at path start.

    Each pattern matches any path that starts with it. Glob wildcards
    (``*``, ``?``, ``[...]``) are honoured.

    Returns:
        Compiled pattern, or None if there are no patterns.
    """
    parts = [fnmatch.translate(p.strip().lstrip("/") + "*") for p in patterns if p.strip()]
    if not parts:
        return None
    return re.compile("|".join(f"(?:{part})" for part in parts))


class PathFilter:
    """Applies the excluded folder policy to candidates.

    Args:
        excluded_folders: Folder prefixes or glob patterns.
        exclude_include: EXCLUDE drops matching candidates, INCLUDE keeps
            only matching ones.
    """

    def __init__(
        self,
        excluded_folders: Iterable[str],
        exclude_include: ExcludeInclude = ExcludeInclude.EXCLUDE,
    ) -> None:
        self._pattern = compile_prefix_pattern(excluded_folders)
        self._exclude_include = exclude_include

    def matches(self, path: str) -> bool:
        """Check whether a path starts with one of the folder patterns.

        Args:
            path: Vault-relative path; a leading slash is ignored.

        Returns:
            True on a match, False when nothing matches or there are no patterns.
        """
        if self._pattern is None:
            return False
        return self._pattern.match(path.lstrip("/")) is not None

    def allows(self, path: str) -> bool:
        """Check whether a candidate path survives the filter."""
        if self._pattern is None:
            return True
        if self._exclude_include == ExcludeInclude.EXCLUDE:
            return not self.matches(path)
        return self.matches(path)

    def apply(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        """Filter candidates, keeping input order."""
        return [c for c in candidates if self.allows(c.path)]


def merge_candidates(*groups: Iterable[Candidate]) -> list[Candidate]:
    """Union candidate groups, keeping the first candidate per path."""
    merged: dict[str, Candidate] = {}
    for group in groups:
        for candidate in group:
            merged.setdefault(candidate.path, candidate)
    return list(merged.values())
