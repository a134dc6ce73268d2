"""Service for Anki media operations."""

from simple_anki_sync.anki.services.anki_http_client import AnkiHttpClient
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiMediaService:
    """Service for Anki media operations.

    Stores files in Anki's media collection.
    """

    def __init__(self, http_client: AnkiHttpClient):
        """
        Initialize media service.

        Args:
            http_client: HTTP client for AnkiConnect communication
        """
        self._http_client = http_client
        logger.debug("anki_media_service_initialized")

    async def store_media_file(self, filename: str, data: str) -> str:
        """Store a base64-encoded media file.

        Returns:
            The filename as stored in Anki (falls back to the requested name)
        """
        result = await self._http_client.invoke(
            "storeMediaFile", {"filename": filename, "data": data}
        )
        stored = result if isinstance(result, str) else filename
        logger.debug("media_stored", filename=filename, stored_as=stored)
        return stored
