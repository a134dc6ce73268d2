"""Interface for the remote flashcard store (Anki)."""

from abc import ABC, abstractmethod

from ..entities.flashcard import RemoteRecord


class IAnkiStore(ABC):
    """Remote store operations consumed by the sync engine.

    Every operation is a coroutine. Failures raise AnkiError subclasses:
    AnkiConnectError when Anki is unreachable, AnkiRejectedError when Anki
    refuses the action. Notes created or updated through this interface
    carry the management tag, so find_managed_record_ids() is authoritative
    for ownership.
    """

    @abstractmethod
    async def probe_available(self) -> bool:
        """Check that Anki answers. Never raises.

        Returns:
            True if the store is reachable and usable
        """

    @abstractmethod
    async def list_decks(self) -> list[str]:
        """Get all deck names."""

    @abstractmethod
    async def ensure_deck(self, name: str) -> None:
        """Create a deck if it does not exist yet."""

    @abstractmethod
    async def create_record(
        self, deck: str, front: str, back: str, tags: list[str]
    ) -> int:
        """Create a two-field note.

        Args:
            deck: Target deck (``::`` separated)
            front: Front field HTML
            back: Back field HTML
            tags: Tags to attach (the management tag is always added)

        Returns:
            The new note id
        """

    @abstractmethod
    async def update_record_fields(self, note_id: int, front: str, back: str) -> None:
        """Replace the front and back fields of a note."""

    @abstractmethod
    async def ensure_management_tag(self, note_id: int) -> None:
        """Add the management tag to a note."""

    @abstractmethod
    async def delete_records(self, note_ids: list[int]) -> None:
        """Delete notes in one batch."""

    @abstractmethod
    async def find_managed_record_ids(self) -> list[int]:
        """Get ids of every note carrying the management tag."""

    @abstractmethod
    async def get_records_info(self, note_ids: list[int]) -> list[RemoteRecord | None]:
        """Get field, tag and card information for notes.

        Returns:
            One entry per requested id, None where the note no longer exists
        """

    @abstractmethod
    async def get_record_decks(self, note_ids: list[int]) -> list[str | None]:
        """Get the deck each note's cards currently live in.

        Returns:
            One deck name per requested id, None where it cannot be determined
        """

    @abstractmethod
    async def move_to_deck(self, note_ids: list[int], deck: str) -> None:
        """Move all cards of the given notes into a deck."""

    @abstractmethod
    async def upload_asset(self, name: str, payload: str) -> str:
        """Store a media file.

        Args:
            name: Target file name in Anki's media folder
            payload: Base64-encoded file content

        Returns:
            The file name as stored by Anki
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Release network resources."""
