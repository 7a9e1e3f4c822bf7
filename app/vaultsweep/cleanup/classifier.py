"""Candidate classification.

Decides, file by file, whether a file may be removed. A file is kept
as soon as any rule says so; it becomes a candidate only when every
rule lets it through. Whenever the evidence is ambiguous the file is
kept.
"""

import logging
import re
from collections.abc import Iterable

from vaultsweep.cleanup.references import (
    CANVAS_EXTENSION,
    MARKDOWN_EXTENSION,
    ReferenceSet,
)
from vaultsweep.models.candidate import Candidate, ClassificationDecision, CleanupReason
from vaultsweep.models.node import VaultNode
from vaultsweep.models.policy import WILDCARD_EXTENSION, CleanupPolicy
from vaultsweep.vault.base import MetadataCache

logger = logging.getLogger(__name__)

# An empty canvas is 28 bytes or less; a canvas with a single card
# needs roughly 80.
CANVAS_EMPTY_THRESHOLD_BYTES = 50


def build_extension_pattern(extensions: Iterable[str]) -> re.Pattern[str]:
    """Compile the attachment extension list into a full-match pattern.

    The markdown extension is always part of the pattern. A ``*`` entry
    matches every extension.
    """
    extensions = list(extensions)
    if WILDCARD_EXTENSION in extensions:
        return re.compile(r".*")
    alternatives = [MARKDOWN_EXTENSION, *(e for e in extensions if e != MARKDOWN_EXTENSION)]
    return re.compile("|".join(re.escape(e) for e in alternatives), re.IGNORECASE)


class CandidateClassifier:
    """Applies the file rules of a CleanupPolicy.

    Rules, in order:

    1. Extension: with an allow-list the extension must match, with a
       deny-list it must not. Markdown always passes.
    2. Canvas: only canvases smaller than CANVAS_EMPTY_THRESHOLD_BYTES
       may go.
    3. Markdown: only documents with no sections, or whose single
       section is frontmatter made up entirely of ignored keys, may go.
       Documents other documents link to are kept, and so are documents
       whose content or frontmatter could not be parsed.
    4. References: a referenced file is always kept.

    Args:
        policy: Cleanup policy to apply.
    """

    def __init__(self, policy: CleanupPolicy) -> None:
        self._policy = policy
        self._extension_pattern = build_extension_pattern(policy.attachment_extensions)
        self._ignored_frontmatter = sorted(set(policy.ignored_frontmatter))

    def passes_extension_filter(self, file: VaultNode) -> bool:
        """Check rule 1 for a file."""
        extension = file.extension
        if extension == MARKDOWN_EXTENSION:
            return True
        matched = self._extension_pattern.fullmatch(extension) is not None
        if self._policy.attachments_exclude_include:
            return matched
        return not matched

    def decide(
        self,
        file: VaultNode,
        references: ReferenceSet,
        cache: MetadataCache,
    ) -> ClassificationDecision:
        """Classify a single file.

        Args:
            file: File node to classify.
            references: Paths in use for this run.
            cache: Host metadata with document sections and frontmatter.

        Returns:
            ClassificationDecision for the file.
        """
        if file.path in references:
            return ClassificationDecision.keep("referenced")

        if not self.passes_extension_filter(file):
            return ClassificationDecision.keep("extension not covered by policy")

        if file.extension == CANVAS_EXTENSION:
            size = file.size_bytes
            if size is None or size >= CANVAS_EMPTY_THRESHOLD_BYTES:
                return ClassificationDecision.keep("canvas has content")
            return ClassificationDecision.candidate(CleanupReason.EMPTY_CANVAS)

        if file.extension == MARKDOWN_EXTENSION:
            return self._decide_markdown(file, references, cache)

        return ClassificationDecision.candidate(CleanupReason.UNUSED_ATTACHMENT)

    def _decide_markdown(
        self,
        file: VaultNode,
        references: ReferenceSet,
        cache: MetadataCache,
    ) -> ClassificationDecision:
        if file.path in references.linked_documents:
            return ClassificationDecision.keep("linked from another document")

        if file.size_bytes == 0:
            return ClassificationDecision.candidate(CleanupReason.EMPTY_MARKDOWN)

        file_cache = cache.get_file_cache(file.path)
        if file_cache is not None and file_cache.parse_error is not None:
            return ClassificationDecision.keep(f"unparsed document: {file_cache.parse_error}")

        if file_cache is None or not file_cache.sections:
            return ClassificationDecision.candidate(CleanupReason.EMPTY_MARKDOWN)

        if not file_cache.is_frontmatter_only:
            return ClassificationDecision.keep("document has content")

        if not self._ignored_frontmatter:
            return ClassificationDecision.keep("frontmatter is content")

        keys = file_cache.frontmatter_keys
        if set(keys) <= set(self._ignored_frontmatter):
            return ClassificationDecision.candidate(CleanupReason.FRONTMATTER_ONLY)

        return ClassificationDecision.keep("frontmatter has non-ignored keys")

    def classify(
        self,
        files: Iterable[VaultNode],
        references: ReferenceSet,
        cache: MetadataCache,
    ) -> list[Candidate]:
        """Classify files and return the removal candidates, in input order.

        Folders in ``files`` are ignored.
        """
        candidates: list[Candidate] = []
        for file in files:
            if file.is_folder:
                continue
            decision = self.decide(file, references, cache)
            if decision.remove and decision.reason is not None:
                candidates.append(Candidate(node=file, reason=decision.reason))
            else:
                logger.debug("Keeping %s: %s", file.path, decision.detail)
        return candidates
