"""Service for Anki tag operations."""

from simple_anki_sync.anki.services.anki_http_client import AnkiHttpClient
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiTagService:
    """Service for Anki tag operations."""

    def __init__(self, http_client: AnkiHttpClient):
        """
        Initialize tag service.

        Args:
            http_client: HTTP client for AnkiConnect communication
        """
        self._http_client = http_client
        logger.debug("anki_tag_service_initialized")

    async def add_tags(self, note_ids: list[int], tags: str) -> None:
        """
        Add tags to notes.

        Args:
            note_ids: List of note IDs
            tags: Space-separated tags to add
        """
        if not note_ids:
            return
        await self._http_client.invoke("addTags", {"notes": note_ids, "tags": tags})
        logger.info("tags_added", note_ids=note_ids, tags=tags)
