"""Synchronization engine for table flashcards in an Obsidian vault."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from ..config import Config
from ..domain.interfaces.anki_store import IAnkiStore
from ..domain.interfaces.document_store import IDocumentStore
from ..domain.interfaces.notifier import INotifier, NullNotifier
from ..error_codes import ErrorCode
from ..exceptions import AnkiError, SyncError
from ..obsidian.parser import find_note_ids, parse_document
from ..utils.logging import get_logger
from .reconciler import Reconciler, ReconcileSettings

logger = get_logger(__name__)

SKIPPED_ANKI_UNAVAILABLE = "anki_unavailable"
SKIPPED_NO_DECK = "no_deck"

ANKI_UNAVAILABLE_NOTICE = (
    "AnkiConnect is not available. "
    "Please make sure Anki is running and AnkiConnect is installed."
)


@dataclass
class DocumentSyncResult:
    """Outcome of syncing one document."""

    path: str
    deck_name: str | None = None
    kept_ids: list[int] = field(default_factory=list)
    referenced_ids: list[int] = field(default_factory=list)
    deleted_ids: list[int] = field(default_factory=list)
    skipped_reason: str | None = None
    text_changed: bool = False
    created: int = 0
    updated: int = 0
    moved: int = 0
    failed: int = 0

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


@dataclass
class VaultSyncResult:
    """Outcome of a whole-vault pass."""

    documents: list[DocumentSyncResult] = field(default_factory=list)
    failed_documents: list[str] = field(default_factory=list)
    unreferenced_ids: list[int] = field(default_factory=list)
    pruned_ids: list[int] = field(default_factory=list)
    aborted: bool = False

    @property
    def synced(self) -> int:
        return sum(1 for doc in self.documents if not doc.skipped)

    @property
    def referenced_ids(self) -> set[int]:
        return {note_id for doc in self.documents for note_id in doc.referenced_ids}


def _display_name(document: str) -> str:
    return PurePosixPath(document).stem


class SyncEngine:
    """Orchestrate synchronization between vault documents and Anki."""

    def __init__(
        self,
        anki_store: IAnkiStore,
        document_store: IDocumentStore,
        notifier: INotifier | None = None,
        config: Config | None = None,
        reconciler: Reconciler | None = None,
    ):
        """
        Initialize sync engine.

        Args:
            anki_store: Remote note store
            document_store: Vault the documents are read from and written to
            notifier: Receives short user-facing notices
            config: Service configuration (field names, tag, back-link)
            reconciler: Pre-built reconciler, mainly for tests
        """
        self.anki = anki_store
        self.documents = document_store
        self.notifier = notifier or NullNotifier()
        settings = (
            ReconcileSettings.from_config(config) if config else ReconcileSettings()
        )
        self.reconciler = reconciler or Reconciler(
            anki_store, document_store, settings=settings, notifier=self.notifier
        )

    async def _ensure_deck(self, deck_name: str, document: str) -> None:
        try:
            decks = await self.anki.list_decks()
            if deck_name not in decks:
                await self.anki.ensure_deck(deck_name)
                logger.info("deck_created", deck=deck_name)
        except AnkiError as e:
            raise SyncError(
                f"Cannot prepare deck {deck_name}",
                suggestion="Check that the deck name is valid in Anki",
                error_code=ErrorCode.ANK_DECK_FAILED.value,
                context={"document": document, "deck": deck_name, "error": str(e)},
            ) from e

    async def _sync_available(self, document: str, silent: bool) -> DocumentSyncResult:
        name = _display_name(document)
        if not silent:
            self.notifier.notify(f"Syncing {name}…")
        logger.info("document_sync_started", document=document)

        text = await self.documents.read_text(document)
        parsed = parse_document(text, document)

        if parsed.deck_name is None:
            logger.info("document_skipped_no_deck", document=document)
            if not silent:
                self.notifier.notify(
                    f"No #anki/deck tag found in {name}. Skipping.", level="warning"
                )
            return DocumentSyncResult(
                path=document,
                referenced_ids=list(dict.fromkeys(parsed.known_ids)),
                skipped_reason=SKIPPED_NO_DECK,
            )

        await self._ensure_deck(parsed.deck_name, document)

        result = await self.reconciler.reconcile(
            parsed, text, parsed.deck_name, document
        )

        text_changed = result.text != text
        if text_changed:
            await self.documents.write_text(document, result.text)

        logger.info(
            "document_sync_completed",
            document=document,
            deck=parsed.deck_name,
            created=result.created,
            updated=result.updated,
            moved=result.moved,
            deleted=len(result.deleted_ids),
            failed=result.failed,
        )
        if not silent:
            self.notifier.notify(f"{name} synced.")

        return DocumentSyncResult(
            path=document,
            deck_name=parsed.deck_name,
            kept_ids=result.kept_ids,
            referenced_ids=list(dict.fromkeys(find_note_ids(result.text))),
            deleted_ids=result.deleted_ids,
            text_changed=text_changed,
            created=result.created,
            updated=result.updated,
            moved=result.moved,
            failed=result.failed,
        )

    async def sync_document(
        self, document: str, *, silent: bool = False
    ) -> DocumentSyncResult:
        """Sync one document with Anki.

        Nothing is sent to Anki, and the document is left untouched, when
        AnkiConnect does not answer or the document has no ``#anki/`` tag.

        Args:
            document: Vault-relative document path
            silent: Suppress start, skip and completion notices

        Returns:
            Per-document counters and ids

        Raises:
            VaultError: If the document cannot be read or written
            SyncError: If the target deck cannot be listed or created
        """
        if not await self.anki.probe_available():
            logger.warning("anki_unavailable", document=document)
            self.notifier.notify(ANKI_UNAVAILABLE_NOTICE, level="error")
            return DocumentSyncResult(
                path=document, skipped_reason=SKIPPED_ANKI_UNAVAILABLE
            )
        return await self._sync_available(document, silent)

    async def _find_unreferenced(self, result: VaultSyncResult) -> list[int]:
        try:
            managed = await self.anki.find_managed_record_ids()
        except AnkiError as e:
            logger.error("managed_notes_lookup_failed", error=str(e))
            return []
        referenced = result.referenced_ids
        return [note_id for note_id in managed if note_id not in referenced]

    async def _prune(self, note_ids: list[int]) -> list[int]:
        try:
            await self.anki.delete_records(note_ids)
        except AnkiError as e:
            logger.error(
                "managed_notes_prune_failed",
                count=len(note_ids),
                error=str(e),
                error_code=ErrorCode.ANK_DELETE_FAILED.value,
            )
            self.notifier.notify("Failed to prune unreferenced notes", level="error")
            return []
        logger.info("managed_notes_pruned", count=len(note_ids), note_ids=note_ids)
        return note_ids

    async def sync_vault(self, *, prune_orphans: bool = False) -> VaultSyncResult:
        """Sync every document in the vault, one at a time.

        A failure in one document is reported and the pass moves on. Managed
        notes that no document references are reported, and deleted only when
        ``prune_orphans`` is set and every document synced cleanly.
        """
        result = VaultSyncResult()

        if not await self.anki.probe_available():
            logger.warning("vault_sync_aborted", reason=SKIPPED_ANKI_UNAVAILABLE)
            self.notifier.notify(ANKI_UNAVAILABLE_NOTICE, level="error")
            result.aborted = True
            return result

        documents = await self.documents.list_all_documents()
        logger.info("vault_sync_started", documents=len(documents))
        self.notifier.notify("Starting vault sync. This may take a while…")

        for document in documents:
            try:
                doc_result = await self.sync_document(document, silent=True)
            except Exception as e:
                logger.exception(
                    "document_sync_failed", document=document, error=str(e)
                )
                name = _display_name(document)
                self.notifier.notify(
                    f"Error syncing {name}. See the log for details.",
                    level="error",
                )
                result.failed_documents.append(document)
                continue

            result.documents.append(doc_result)
            if doc_result.skipped_reason == SKIPPED_ANKI_UNAVAILABLE:
                result.failed_documents.append(document)

        result.unreferenced_ids = await self._find_unreferenced(result)
        if result.unreferenced_ids:
            logger.info(
                "managed_notes_unreferenced",
                count=len(result.unreferenced_ids),
                note_ids=result.unreferenced_ids,
            )
            if prune_orphans and not result.failed_documents:
                result.pruned_ids = await self._prune(result.unreferenced_ids)
            elif prune_orphans:
                logger.warning(
                    "managed_notes_prune_skipped",
                    reason="some documents failed to sync",
                    failed=len(result.failed_documents),
                )

        logger.info(
            "vault_sync_completed",
            synced=result.synced,
            failed=len(result.failed_documents),
            pruned=len(result.pruned_ids),
        )
        self.notifier.notify("Vault sync complete.")
        return result
