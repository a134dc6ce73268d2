"""AnkiConnect client implementing the remote store port."""

from types import TracebackType
from typing import Literal

from simple_anki_sync.anki.services import (
    AnkiDeckService,
    AnkiHttpClient,
    AnkiMediaService,
    AnkiNoteService,
    AnkiTagService,
)
from simple_anki_sync.config import DEFAULT_MANAGED_TAG, Config
from simple_anki_sync.domain.entities.flashcard import RemoteRecord
from simple_anki_sync.domain.interfaces.anki_store import IAnkiStore
from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


class AnkiClient(IAnkiStore):
    """Client for AnkiConnect HTTP API.

    Thin facade over the per-area services. Every note it creates carries
    ``managed_tag`` so that ``find_managed_record_ids`` returns exactly the
    notes this tool owns.
    """

    def __init__(
        self,
        http_client: AnkiHttpClient,
        model_name: str = "Basic",
        front_field: str = "Front",
        back_field: str = "Back",
        managed_tag: str = DEFAULT_MANAGED_TAG,
    ):
        """
        Initialize client.

        Args:
            http_client: HTTP client for AnkiConnect communication
            model_name: Two-field note type used for new notes
            front_field: Name of the front field in that note type
            back_field: Name of the back field in that note type
            managed_tag: Tag marking notes owned by this tool
        """
        self._http_client = http_client
        self._notes = AnkiNoteService(http_client)
        self._decks = AnkiDeckService(http_client)
        self._media = AnkiMediaService(http_client)
        self._tags = AnkiTagService(http_client)
        self.model_name = model_name
        self.front_field = front_field
        self.back_field = back_field
        self.managed_tag = managed_tag

    @classmethod
    def from_config(cls, config: Config) -> "AnkiClient":
        """Build a client from service configuration."""
        http_client = AnkiHttpClient(config.anki_connect_url, timeout=config.anki_timeout)
        logger.debug(
            "anki_client_initialized",
            url=config.anki_connect_url,
            note_type=config.anki_note_type,
        )
        return cls(
            http_client,
            model_name=config.anki_note_type,
            front_field=config.front_field,
            back_field=config.back_field,
            managed_tag=config.managed_tag,
        )

    async def probe_available(self) -> bool:
        """Check if AnkiConnect is accessible."""
        return await self._http_client.check_connection()

    async def list_decks(self) -> list[str]:
        return await self._decks.get_deck_names()

    async def ensure_deck(self, name: str) -> None:
        await self._decks.create_deck(name)

    async def create_record(
        self, deck: str, front: str, back: str, tags: list[str]
    ) -> int:
        all_tags = [*tags, self.managed_tag] if self.managed_tag not in tags else list(tags)
        return await self._notes.add_note(
            deck,
            self.model_name,
            {self.front_field: front, self.back_field: back},
            all_tags,
        )

    async def update_record_fields(self, note_id: int, front: str, back: str) -> None:
        await self._notes.update_note_fields(
            note_id, {self.front_field: front, self.back_field: back}
        )

    async def ensure_management_tag(self, note_id: int) -> None:
        await self._tags.add_tags([note_id], self.managed_tag)

    async def delete_records(self, note_ids: list[int]) -> None:
        await self._notes.delete_notes(note_ids)

    async def find_managed_record_ids(self) -> list[int]:
        return await self._notes.find_notes(f"tag:{self.managed_tag}")

    async def get_records_info(self, note_ids: list[int]) -> list[RemoteRecord | None]:
        return await self._notes.notes_info(note_ids)

    async def get_record_decks(self, note_ids: list[int]) -> list[str | None]:
        """Get the deck of each note's first card."""
        infos = await self._notes.notes_info(note_ids)
        first_cards = [info.card_ids[0] for info in infos if info and info.card_ids]
        cards = await self._decks.cards_info(first_cards)
        deck_by_card = {
            card.get("cardId"): card.get("deckName") for card in cards if card
        }

        decks: list[str | None] = []
        for info in infos:
            if info is None or not info.card_ids:
                decks.append(None)
            else:
                decks.append(deck_by_card.get(info.card_ids[0]))
        return decks

    async def move_to_deck(self, note_ids: list[int], deck: str) -> None:
        """Move every card of the given notes into a deck."""
        infos = await self._notes.notes_info(note_ids)
        card_ids = [card_id for info in infos if info for card_id in info.card_ids]
        await self._decks.change_deck(card_ids, deck)

    async def upload_asset(self, name: str, payload: str) -> str:
        return await self._media.store_media_file(name, payload)

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "AnkiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        """Async context manager exit with cleanup."""
        await self.aclose()
        return False
