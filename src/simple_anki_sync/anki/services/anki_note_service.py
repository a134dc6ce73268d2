"""Service for Anki note operations."""

from typing import Any, cast

from simple_anki_sync.anki.services.anki_http_client import AnkiHttpClient
from simple_anki_sync.domain.entities.flashcard import RemoteRecord
from simple_anki_sync.error_codes import ErrorCode
from simple_anki_sync.exceptions import AnkiRejectedError
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiNoteService:
    """Service for Anki note operations.

    Handles note creation, field updates, lookup and deletion.
    """

    def __init__(self, http_client: AnkiHttpClient):
        """
        Initialize note service.

        Args:
            http_client: HTTP client for AnkiConnect communication
        """
        self._http_client = http_client
        logger.debug("anki_note_service_initialized")

    async def find_notes(self, query: str) -> list[int]:
        """Find notes matching a query."""
        result = await self._http_client.invoke("findNotes", {"query": query})
        return [int(note_id) for note_id in result or []]

    async def notes_info(self, note_ids: list[int]) -> list[RemoteRecord | None]:
        """Get detailed information about notes.

        AnkiConnect answers ``{}`` for ids that no longer exist; those map to None.
        """
        if not note_ids:
            return []
        raw = cast(
            "list[dict[str, Any]]",
            await self._http_client.invoke("notesInfo", {"notes": note_ids}),
        )
        return [RemoteRecord.from_notes_info(info) if info else None for info in raw]

    def _build_note_payload(
        self,
        deck_name: str,
        model_name: str,
        fields: dict[str, str],
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Build note payload for addNote."""
        note_payload: dict[str, Any] = {
            "deckName": deck_name,
            "modelName": model_name,
            "fields": fields,
            "options": {"allowDuplicate": False},
        }
        clean_tags = [t for t in tags or [] if t]
        if clean_tags:
            note_payload["tags"] = clean_tags
        return note_payload

    async def add_note(
        self,
        deck_name: str,
        model_name: str,
        fields: dict[str, str],
        tags: list[str] | None = None,
    ) -> int:
        """
        Add a new note.

        Returns:
            Note ID

        Raises:
            AnkiRejectedError: If AnkiConnect does not return a note id
        """
        payload = self._build_note_payload(deck_name, model_name, fields, tags)
        result = await self._http_client.invoke("addNote", {"note": payload})
        if not isinstance(result, int) or isinstance(result, bool):
            msg = f"AnkiConnect did not return a valid note ID: {result!r}"
            raise AnkiRejectedError(
                msg,
                error_code=ErrorCode.ANK_CREATE_FAILED.value,
                context={"deck": deck_name},
            )

        logger.info("note_added", note_id=result, deck=deck_name, note_type=model_name)
        return result

    async def update_note_fields(self, note_id: int, fields: dict[str, str]) -> None:
        """Update note fields."""
        await self._http_client.invoke(
            "updateNoteFields", {"note": {"id": note_id, "fields": fields}}
        )
        logger.info("note_updated", note_id=note_id)

    async def delete_notes(self, note_ids: list[int]) -> None:
        """Delete notes."""
        if not note_ids:
            return
        await self._http_client.invoke("deleteNotes", {"notes": note_ids})
        logger.info("notes_deleted", count=len(note_ids), note_ids=note_ids)
