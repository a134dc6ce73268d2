"""Filesystem-backed document store for an Obsidian vault."""

import asyncio
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from ..domain.interfaces.document_store import IDocumentStore
from ..error_codes import ErrorCode
from ..exceptions import VaultError
from ..utils.io import atomic_write_text, read_text
from ..utils.logging import get_logger

logger = get_logger(__name__)

MARKDOWN_SUFFIX = ".md"

# encodeURIComponent also leaves these unescaped
URI_COMPONENT_SAFE = "!*'()"


class VaultDocumentStore(IDocumentStore):
    """Read and write documents inside a vault folder.

    Documents are addressed by vault-relative POSIX paths. Blocking file I/O
    runs in a worker thread so the event loop stays responsive.
    """

    def __init__(
        self,
        vault_path: Path,
        vault_name: str | None = None,
        excluded_dirs: list[str] | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            vault_path: Root folder of the vault
            vault_name: Name used in obsidian:// links (defaults to the folder name)
            excluded_dirs: Top-level or nested folder names never listed
        """
        self.vault_path = Path(vault_path).resolve()
        self.vault_name = vault_name or self.vault_path.name
        self.excluded_dirs = set(excluded_dirs or [])

    def _absolute(self, document: str | PurePosixPath | Path) -> Path:
        """Map a vault-relative path to an absolute one inside the vault."""
        candidate = (self.vault_path / str(document)).resolve()
        if not candidate.is_relative_to(self.vault_path):
            raise VaultError(
                f"Path escapes the vault: {document}",
                error_code=ErrorCode.VLT_PATH_OUTSIDE.value,
                context={"document": str(document), "vault": str(self.vault_path)},
            )
        return candidate

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.vault_path).as_posix()

    def _is_excluded(self, path: Path) -> bool:
        parts = path.relative_to(self.vault_path).parts[:-1]
        return any(part in self.excluded_dirs for part in parts)

    async def read_text(self, document: str) -> str:
        path = self._absolute(document)
        try:
            return await asyncio.to_thread(read_text, path)
        except (OSError, UnicodeDecodeError) as e:
            raise VaultError(
                f"Cannot read document: {document}",
                suggestion="Check that the file exists and is UTF-8 encoded",
                error_code=ErrorCode.VLT_READ_FAILED.value,
                context={"document": document, "error": str(e)},
            ) from e

    async def write_text(self, document: str, text: str) -> None:
        path = self._absolute(document)
        try:
            await asyncio.to_thread(atomic_write_text, path, text)
        except OSError as e:
            raise VaultError(
                f"Cannot write document: {document}",
                error_code=ErrorCode.VLT_WRITE_FAILED.value,
                context={"document": document, "error": str(e)},
            ) from e
        logger.debug("document_written", document=document, chars=len(text))

    def _scan_documents(self) -> list[str]:
        documents = [
            self._relative(path)
            for path in self.vault_path.rglob(f"*{MARKDOWN_SUFFIX}")
            if path.is_file() and not self._is_excluded(path)
        ]
        return sorted(documents)

    async def list_all_documents(self) -> list[str]:
        documents = await asyncio.to_thread(self._scan_documents)
        logger.debug(
            "vault_documents_listed", vault=str(self.vault_path), count=len(documents)
        )
        return documents

    def _find_by_name(self, name: str) -> Path | None:
        matches = [
            path
            for path in self.vault_path.rglob(name)
            if path.is_file() and not self._is_excluded(path)
        ]
        if not matches:
            return None
        # Obsidian prefers the shortest path when several files share a name
        return min(
            matches, key=lambda p: (len(p.relative_to(self.vault_path).parts), str(p))
        )

    def _resolve(self, reference: str, from_document: str) -> Path | None:
        reference = reference.strip()
        if not reference:
            return None

        document_dir = PurePosixPath(from_document).parent
        for candidate in (PurePosixPath(reference), document_dir / reference):
            try:
                path = self._absolute(candidate)
            except VaultError:
                logger.debug("asset_reference_outside_vault", reference=reference)
                continue
            if path.is_file():
                return path

        name = PurePosixPath(reference).name
        if not name or any(ch in name for ch in "*?["):
            return None
        return self._find_by_name(name)

    async def resolve_asset_reference(
        self, reference: str, from_document: str
    ) -> Path | None:
        return await asyncio.to_thread(self._resolve, reference, from_document)

    async def read_binary(self, asset: Path) -> bytes:
        path = self._absolute(asset)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise VaultError(
                f"Cannot read asset: {asset}",
                error_code=ErrorCode.VLT_READ_FAILED.value,
                context={"asset": str(asset), "error": str(e)},
            ) from e

    def display_name(self, asset: Path) -> str:
        return Path(asset).name

    def document_link(self, document: str) -> str:
        """Build the obsidian:// URL that opens a document."""
        vault = quote(self.vault_name, safe=URI_COMPONENT_SAFE)
        file = quote(document, safe=URI_COMPONENT_SAFE)
        return f"obsidian://open?vault={vault}&file={file}"
