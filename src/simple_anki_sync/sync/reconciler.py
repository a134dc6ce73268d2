"""Reconcile a document's flashcards with the notes in Anki.

Per record, in document order, the reconciler creates or updates the note,
fixes its deck, and collects the annotation edits to make. After the last
record, annotated ids that no record kept are deleted from Anki and their
annotation lines are removed. All edits are addressed against the original
line list and applied in one pass at the end (see ``text_edits``).
"""

from dataclasses import dataclass, field, replace

from ..config import DEFAULT_MANAGED_TAG, Config
from ..domain.entities.flashcard import (
    EditKind,
    FlashcardRecord,
    ParsedDocument,
    TextEdit,
)
from ..domain.interfaces.anki_store import IAnkiStore
from ..domain.interfaces.document_store import IDocumentStore
from ..domain.interfaces.notifier import INotifier, NullNotifier
from ..error_codes import ErrorCode
from ..exceptions import AnkiError, VaultError
from ..obsidian.content_transformer import ContentTransformer
from ..obsidian.parser import format_note_id
from ..utils.logging import get_logger
from .media import MediaUploader
from .text_edits import apply_edits

logger = get_logger(__name__)

BACKLINK_STYLE = "text-decoration:none;color:grey;font-size:0.8em;"


def build_backlink(url: str, label: str = "Obsidian Note") -> str:
    """HTML appended to the back field that opens the source document."""
    return f'<br><small><a href="{url}" style="{BACKLINK_STYLE}">{label}</a></small>'


@dataclass(frozen=True)
class ReconcileSettings:
    """Reconciler options taken from the service configuration."""

    managed_tag: str = DEFAULT_MANAGED_TAG
    front_field: str = "Front"
    back_field: str = "Back"
    include_backlink: bool = True
    backlink_label: str = "Obsidian Note"

    @classmethod
    def from_config(cls, config: Config) -> "ReconcileSettings":
        return cls(
            managed_tag=config.managed_tag,
            front_field=config.front_field,
            back_field=config.back_field,
            include_backlink=config.include_backlink,
            backlink_label=config.backlink_label,
        )


@dataclass(frozen=True)
class ReconcileState:
    """Accumulator threaded through ``process_record``.

    ``line_offset`` is the net number of annotation lines added so far. It is
    informational only: edits always carry original line indices.
    """

    kept_ids: tuple[int, ...] = ()
    edits: tuple[TextEdit, ...] = ()
    line_offset: int = 0
    created: int = 0
    updated: int = 0
    moved: int = 0
    failed: int = 0

    def keep(self, note_id: int) -> "ReconcileState":
        return replace(self, kept_ids=(*self.kept_ids, note_id))


@dataclass
class ReconcileResult:
    """Outcome of reconciling one document."""

    text: str
    kept_ids: list[int] = field(default_factory=list)
    deleted_ids: list[int] = field(default_factory=list)
    created: int = 0
    updated: int = 0
    moved: int = 0
    failed: int = 0
    line_offset: int = 0


@dataclass(frozen=True)
class _Fields:
    front: str
    back: str


class Reconciler:
    """Drive Anki and the annotation edits for one document at a time."""

    def __init__(
        self,
        anki_store: IAnkiStore,
        document_store: IDocumentStore,
        transformer: ContentTransformer | None = None,
        uploader: MediaUploader | None = None,
        settings: ReconcileSettings | None = None,
        notifier: INotifier | None = None,
    ):
        """
        Initialize reconciler.

        Args:
            anki_store: Remote note store
            document_store: Store the documents live in (for asset lookup and links)
            transformer: Field text rewriter (built from document_store if omitted)
            uploader: Asset uploader (built from anki_store if omitted)
            settings: Field names, management tag and back-link options
            notifier: Receives per-record failure notices
        """
        self.anki = anki_store
        self.documents = document_store
        self.notifier = notifier or NullNotifier()
        self.transformer = transformer or ContentTransformer(document_store)
        self.uploader = uploader or MediaUploader(anki_store, self.notifier)
        self.settings = settings or ReconcileSettings()

    async def _prepare_fields(self, record: FlashcardRecord, document: str) -> _Fields:
        """Transform both sides, upload their assets and add the back-link."""
        front = await self.transformer.transform(record.front, document)
        back = await self.transformer.transform(record.back, document)
        await self.uploader.upload_all([*front.uploads, *back.uploads])

        back_html = back.content
        if self.settings.include_backlink:
            back_html += build_backlink(
                self.documents.document_link(document), self.settings.backlink_label
            )
        return _Fields(front=front.content, back=back_html)

    async def _refresh_existing(
        self,
        note_id: int,
        fields: _Fields,
        deck_name: str,
        document: str,
        state: ReconcileState,
    ) -> ReconcileState:
        """Bring an annotated note in line with the document.

        Only differences are written, so an unchanged note costs no mutation.
        """
        infos = await self.anki.get_records_info([note_id])
        info = infos[0] if infos else None
        if info is None:
            logger.warning(
                "remote_note_missing",
                document=document,
                note_id=note_id,
                error_code=ErrorCode.ANK_UPDATE_FAILED.value,
            )
            self.notifier.notify(
                f"Anki note {note_id} from {document} no longer exists", level="warning"
            )
            return replace(state, failed=state.failed + 1)

        remote_front = info.fields.get(self.settings.front_field)
        remote_back = info.fields.get(self.settings.back_field)
        if remote_front != fields.front or remote_back != fields.back:
            await self.anki.update_record_fields(note_id, fields.front, fields.back)
            logger.info("note_updated", document=document, note_id=note_id)
            state = replace(state, updated=state.updated + 1)

        if self.settings.managed_tag not in info.tags:
            await self.anki.ensure_management_tag(note_id)
            logger.debug("management_tag_added", note_id=note_id)

        decks = await self.anki.get_record_decks([note_id])
        current_deck = decks[0] if decks else None
        if current_deck is not None and current_deck != deck_name:
            await self.anki.move_to_deck([note_id], deck_name)
            logger.info(
                "note_moved",
                document=document,
                note_id=note_id,
                from_deck=current_deck,
                deck=deck_name,
            )
            state = replace(state, moved=state.moved + 1)
        return state

    async def process_record(
        self,
        record: FlashcardRecord,
        deck_name: str,
        document: str,
        state: ReconcileState,
    ) -> ReconcileState:
        """Reconcile one record and return the advanced accumulator.

        An annotated record keeps its id even when Anki refuses a change, so a
        transient failure never leads to its deletion. A record whose create
        fails gets no annotation and keeps nothing.
        """
        if record.remote_id is not None:
            note_id = record.remote_id
            kept = state.keep(note_id)
            try:
                fields = await self._prepare_fields(record, document)
                return await self._refresh_existing(
                    note_id, fields, deck_name, document, kept
                )
            except (AnkiError, VaultError) as e:
                logger.error(
                    "note_update_failed",
                    document=document,
                    note_id=note_id,
                    source_id=record.source_id,
                    error=str(e),
                    error_code=ErrorCode.ANK_UPDATE_FAILED.value,
                )
                self.notifier.notify(
                    f"Failed to update note {note_id} from {document}", level="error"
                )
                return replace(kept, failed=kept.failed + 1)

        try:
            fields = await self._prepare_fields(record, document)
            note_id = await self.anki.create_record(
                deck_name, fields.front, fields.back, [self.settings.managed_tag]
            )
        except (AnkiError, VaultError) as e:
            logger.error(
                "note_create_failed",
                document=document,
                source_id=record.source_id,
                deck=deck_name,
                error=str(e),
                error_code=ErrorCode.ANK_CREATE_FAILED.value,
            )
            self.notifier.notify(
                f"Failed to create a note from {document}", level="error"
            )
            return replace(state, failed=state.failed + 1)

        logger.info("note_created", document=document, note_id=note_id, deck=deck_name)
        edit = TextEdit(
            index=record.end_line + 1,
            kind=EditKind.INSERT,
            text=format_note_id(note_id),
        )
        return replace(
            state.keep(note_id),
            edits=(*state.edits, edit),
            line_offset=state.line_offset + 1,
            created=state.created + 1,
        )

    async def _sweep_orphans(
        self,
        orphans: list[int],
        lines: list[str],
        last_end_line: int,
        document: str,
        state: ReconcileState,
    ) -> tuple[ReconcileState, list[int]]:
        """Delete orphaned notes and schedule removal of their annotations."""
        try:
            await self.anki.delete_records(orphans)
        except AnkiError as e:
            logger.error(
                "note_delete_failed",
                document=document,
                note_ids=orphans,
                error=str(e),
                error_code=ErrorCode.ANK_DELETE_FAILED.value,
            )
            self.notifier.notify(
                f"Failed to delete {len(orphans)} note(s) from Anki", level="error"
            )
            return replace(state, failed=state.failed + 1), []

        logger.info("notes_deleted", document=document, note_ids=orphans)

        claimed: set[int] = set()
        edits = list(state.edits)
        offset = state.line_offset
        for note_id in orphans:
            annotation = format_note_id(note_id)
            index = next(
                (
                    i
                    for i, line in enumerate(lines)
                    if i not in claimed and line.strip() == annotation
                ),
                None,
            )
            if index is None:
                continue
            claimed.add(index)
            edits.append(TextEdit(index=index, kind=EditKind.REMOVE))
            if index < last_end_line:
                offset -= 1

        return replace(state, edits=tuple(edits), line_offset=offset), orphans

    async def reconcile(
        self,
        parsed: ParsedDocument,
        text: str,
        deck_name: str,
        document: str,
    ) -> ReconcileResult:
        """Reconcile every record of a parsed document.

        Args:
            parsed: Parse result for ``text``
            text: The document text the parse came from
            deck_name: Target deck for every record
            document: Document handle used for asset lookup and back-links

        Returns:
            Kept and deleted ids, counters, and the rewritten text
        """
        state = ReconcileState()
        for record in parsed.records:
            state = await self.process_record(record, deck_name, document, state)

        kept = set(state.kept_ids)
        orphans = [
            note_id
            for note_id in dict.fromkeys(parsed.known_ids)
            if note_id not in kept
        ]

        lines = text.split("\n")
        deleted: list[int] = []
        if orphans:
            last_end_line = parsed.records[-1].end_line if parsed.records else -1
            state, deleted = await self._sweep_orphans(
                orphans, lines, last_end_line, document, state
            )

        new_text = "\n".join(apply_edits(lines, state.edits)) if state.edits else text

        return ReconcileResult(
            text=new_text,
            kept_ids=list(dict.fromkeys(state.kept_ids)),
            deleted_ids=deleted,
            created=state.created,
            updated=state.updated,
            moved=state.moved,
            failed=state.failed,
            line_offset=state.line_offset,
        )
