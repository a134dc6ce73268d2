"""AnkiConnect services, one per API area."""

from .anki_deck_service import AnkiDeckService
from .anki_http_client import AnkiHttpClient
from .anki_media_service import AnkiMediaService
from .anki_note_service import AnkiNoteService
from .anki_tag_service import AnkiTagService

__all__ = [
    "AnkiDeckService",
    "AnkiHttpClient",
    "AnkiMediaService",
    "AnkiNoteService",
    "AnkiTagService",
]
