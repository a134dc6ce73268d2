"""Service for Anki deck operations."""

from typing import Any, cast

from simple_anki_sync.anki.services.anki_http_client import AnkiHttpClient
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiDeckService:
    """Service for Anki deck operations.

    Lists and creates decks, and moves cards between them.
    """

    def __init__(self, http_client: AnkiHttpClient):
        """
        Initialize deck service.

        Args:
            http_client: HTTP client for AnkiConnect communication
        """
        self._http_client = http_client
        logger.debug("anki_deck_service_initialized")

    async def get_deck_names(self) -> list[str]:
        """Get list of available deck names."""
        return cast("list[str]", await self._http_client.invoke("deckNames"))

    async def create_deck(self, deck_name: str) -> int:
        """Create a deck. AnkiConnect returns the existing id if it already exists."""
        deck_id = cast(
            "int", await self._http_client.invoke("createDeck", {"deck": deck_name})
        )
        logger.info("deck_created", deck=deck_name, deck_id=deck_id)
        return deck_id

    async def change_deck(self, card_ids: list[int], deck_name: str) -> None:
        """Move cards into a deck."""
        if not card_ids:
            return
        await self._http_client.invoke("changeDeck", {"cards": card_ids, "deck": deck_name})
        logger.info("cards_moved", deck=deck_name, count=len(card_ids))

    async def cards_info(self, card_ids: list[int]) -> list[dict[str, Any]]:
        """Get detailed information about cards."""
        if not card_ids:
            return []
        return cast(
            "list[dict[str, Any]]",
            await self._http_client.invoke("cardsInfo", {"cards": card_ids}),
        )
