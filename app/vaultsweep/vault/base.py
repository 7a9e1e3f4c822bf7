"""Abstract interfaces for the host collaborators.

The cleanup core never touches storage directly. It reads the tree and
file contents through a Vault, and link and section data through a
MetadataCache, so any host can drive it.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from vaultsweep.models.metadata import FileCache
from vaultsweep.models.node import VaultNode

ResolvedLinks = Mapping[str, Mapping[str, int]]


class Vault(ABC):
    """Hierarchical store of documents and attachments.

    Example:
        >>> vault = LocalVault(Path("~/notes").expanduser())
        >>> for node in vault.get_files():
        ...     print(node.path, node.size_bytes)
    """

    @abstractmethod
    def get_files(self) -> list[VaultNode]:
        """Return every file in the vault."""

    @abstractmethod
    def get_all_loaded_files(self) -> list[VaultNode]:
        """Return every file and folder in the vault, root included."""

    @abstractmethod
    async def read(self, node: VaultNode) -> str:
        """Read a file's text content.

        Raises:
            OSError: If the file cannot be read.
        """

    @abstractmethod
    async def delete(self, node: VaultNode) -> None:
        """Erase a file or an empty folder permanently.

        Raises:
            OSError: If the entry cannot be deleted.
        """

    @abstractmethod
    async def trash(self, node: VaultNode, *, system: bool) -> None:
        """Move a file or an empty folder to a trash.

        Args:
            node: Entry to move.
            system: True for the operating system trash, False for the
                vault's own trash folder.

        Raises:
            OSError: If the entry cannot be moved.
        """


class MetadataCache(ABC):
    """Link index and parsed document structure provided by the host."""

    @property
    @abstractmethod
    def resolved_links(self) -> ResolvedLinks:
        """Mapping of source document path to {target path: link count}."""

    @abstractmethod
    def get_file_cache(self, path: str) -> FileCache | None:
        """Return the parsed structure of a markdown document.

        Returns:
            The cached structure, or None if the document was never parsed.
        """

    def resolve_link(self, linktext: str, source_path: str = "") -> str | None:
        """Resolve link text to a vault path.

        Hosts without a resolver return None, in which case only the
        literal link text is used.
        """
        _ = linktext, source_path
        return None
