"""In-memory implementation of IDocumentStore and INotifier for testing."""

from pathlib import Path, PurePosixPath
from urllib.parse import quote

from simple_anki_sync.domain.interfaces.document_store import IDocumentStore
from simple_anki_sync.domain.interfaces.notifier import INotifier, NoticeLevel
from simple_anki_sync.error_codes import ErrorCode
from simple_anki_sync.exceptions import VaultError


class MemoryDocumentStore(IDocumentStore):
    """Documents and assets kept in dicts keyed by vault-relative path."""

    def __init__(
        self,
        documents: dict[str, str] | None = None,
        assets: dict[str, bytes] | None = None,
        vault_name: str = "Vault",
    ):
        self.documents: dict[str, str] = dict(documents or {})
        self.assets: dict[str, bytes] = dict(assets or {})
        self.vault_name = vault_name
        self.writes: list[tuple[str, str]] = []
        self.read_failures: set[str] = set()

    async def read_text(self, document: str) -> str:
        if document in self.read_failures or document not in self.documents:
            raise VaultError(
                f"Cannot read document: {document}",
                error_code=ErrorCode.VLT_READ_FAILED.value,
            )
        return self.documents[document]

    async def write_text(self, document: str, text: str) -> None:
        self.writes.append((document, text))
        self.documents[document] = text

    async def list_all_documents(self) -> list[str]:
        return sorted(self.documents)

    async def resolve_asset_reference(
        self, reference: str, from_document: str
    ) -> Path | None:
        folder = PurePosixPath(from_document).parent
        for candidate in (PurePosixPath(reference), folder / reference):
            if candidate.as_posix() in self.assets:
                return Path(candidate.as_posix())

        name = PurePosixPath(reference).name
        matches = [key for key in self.assets if PurePosixPath(key).name == name]
        if not matches:
            return None
        return Path(min(matches, key=lambda key: (key.count("/"), key)))

    async def read_binary(self, asset: Path) -> bytes:
        return self.assets[asset.as_posix()]

    def display_name(self, asset: Path) -> str:
        return asset.name

    def document_link(self, document: str) -> str:
        return (
            f"obsidian://open?vault={quote(self.vault_name, safe='')}"
            f"&file={quote(document, safe='')}"
        )


class RecordingNotifier(INotifier):
    """Collect notices instead of showing them."""

    def __init__(self) -> None:
        self.notices: list[tuple[NoticeLevel, str]] = []

    def notify(self, message: str, *, level: NoticeLevel = "info") -> None:
        self.notices.append((level, message))

    def messages(self, level: NoticeLevel | None = None) -> list[str]:
        return [msg for lvl, msg in self.notices if level is None or lvl == level]
