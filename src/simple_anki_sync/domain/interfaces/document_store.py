"""Interface for the host document store (an Obsidian vault)."""

from abc import ABC, abstractmethod
from pathlib import Path


class IDocumentStore(ABC):
    """Document store operations consumed by the sync engine.

    Documents are identified by vault-relative POSIX paths (``"Math/Algebra.md"``).
    Assets are identified by the absolute Path they resolve to.
    """

    @abstractmethod
    async def read_text(self, document: str) -> str:
        """Read a document's raw text."""

    @abstractmethod
    async def write_text(self, document: str, text: str) -> None:
        """Replace a document's raw text."""

    @abstractmethod
    async def list_all_documents(self) -> list[str]:
        """List every Markdown document in the store, sorted."""

    @abstractmethod
    async def resolve_asset_reference(self, reference: str, from_document: str) -> Path | None:
        """Resolve an embed reference (``![[ref]]``) as seen from a document.

        Returns:
            The asset's handle, or None when nothing matches
        """

    @abstractmethod
    async def read_binary(self, asset: Path) -> bytes:
        """Read an asset's bytes."""

    @abstractmethod
    def display_name(self, asset: Path) -> str:
        """File name to use for an asset inside Anki."""

    @abstractmethod
    def document_link(self, document: str) -> str:
        """URL that opens the document in the host application."""
