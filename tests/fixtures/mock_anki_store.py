"""In-memory implementation of IAnkiStore for testing."""

from typing import Any

from simple_anki_sync.config import DEFAULT_MANAGED_TAG
from simple_anki_sync.domain.entities.flashcard import RemoteRecord
from simple_anki_sync.domain.interfaces.anki_store import IAnkiStore

MUTATING_CALLS = {
    "ensure_deck",
    "create_record",
    "update_record_fields",
    "ensure_management_tag",
    "delete_records",
    "move_to_deck",
}


class MockAnkiStore(IAnkiStore):
    """Mock implementation of the Anki store for testing.

    Keeps notes in a dict, records every call in ``calls`` as
    ``(method, args)`` and raises whatever is registered in ``failures``
    for a method name.
    """

    def __init__(
        self,
        decks: list[str] | None = None,
        available: bool = True,
        managed_tag: str = DEFAULT_MANAGED_TAG,
    ):
        self.available = available
        self.managed_tag = managed_tag
        self.decks: list[str] = list(decks or ["Default"])
        self.notes: dict[int, dict[str, Any]] = {}
        self.media: dict[str, str] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, Exception] = {}
        self.closed = False
        self._next_id = 1700000000000

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise self.failures[method]

    def add_note(
        self,
        deck: str,
        front: str,
        back: str,
        tags: list[str] | None = None,
        note_id: int | None = None,
    ) -> int:
        """Seed a note directly (no call is recorded)."""
        if note_id is None:
            note_id = self._next_id
            self._next_id += 1
        self.notes[note_id] = {
            "deck": deck,
            "front": front,
            "back": back,
            "tags": list(tags if tags is not None else [self.managed_tag]),
        }
        return note_id

    def calls_to(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    def mutations(self) -> list[tuple[str, tuple[Any, ...]]]:
        return [(name, args) for name, args in self.calls if name in MUTATING_CALLS]

    async def probe_available(self) -> bool:
        self.calls.append(("probe_available", ()))
        return self.available

    async def list_decks(self) -> list[str]:
        self._record("list_decks")
        return list(self.decks)

    async def ensure_deck(self, name: str) -> None:
        self._record("ensure_deck", name)
        if name not in self.decks:
            self.decks.append(name)

    async def create_record(
        self, deck: str, front: str, back: str, tags: list[str]
    ) -> int:
        self._record("create_record", deck, front, back, list(tags))
        all_tags = list(tags)
        if self.managed_tag not in all_tags:
            all_tags.append(self.managed_tag)
        return self.add_note(deck, front, back, all_tags)

    async def update_record_fields(self, note_id: int, front: str, back: str) -> None:
        self._record("update_record_fields", note_id, front, back)
        self.notes[note_id]["front"] = front
        self.notes[note_id]["back"] = back

    async def ensure_management_tag(self, note_id: int) -> None:
        self._record("ensure_management_tag", note_id)
        tags = self.notes[note_id]["tags"]
        if self.managed_tag not in tags:
            tags.append(self.managed_tag)

    async def delete_records(self, note_ids: list[int]) -> None:
        self._record("delete_records", list(note_ids))
        for note_id in note_ids:
            self.notes.pop(note_id, None)

    async def find_managed_record_ids(self) -> list[int]:
        self._record("find_managed_record_ids")
        return [
            note_id
            for note_id, note in self.notes.items()
            if self.managed_tag in note["tags"]
        ]

    async def get_records_info(self, note_ids: list[int]) -> list[RemoteRecord | None]:
        self._record("get_records_info", list(note_ids))
        infos: list[RemoteRecord | None] = []
        for note_id in note_ids:
            note = self.notes.get(note_id)
            if note is None:
                infos.append(None)
                continue
            infos.append(
                RemoteRecord.model_validate(
                    {
                        "noteId": note_id,
                        "modelName": "Basic",
                        "fields": {"Front": note["front"], "Back": note["back"]},
                        "tags": list(note["tags"]),
                        "cards": [note_id + 1],
                    }
                )
            )
        return infos

    async def get_record_decks(self, note_ids: list[int]) -> list[str | None]:
        self._record("get_record_decks", list(note_ids))
        return [
            self.notes[note_id]["deck"] if note_id in self.notes else None
            for note_id in note_ids
        ]

    async def move_to_deck(self, note_ids: list[int], deck: str) -> None:
        self._record("move_to_deck", list(note_ids), deck)
        for note_id in note_ids:
            self.notes[note_id]["deck"] = deck

    async def upload_asset(self, name: str, payload: str) -> str:
        self._record("upload_asset", name, payload)
        self.media[name] = payload
        return name

    async def aclose(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "MockAnkiStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        await self.aclose()
        return False
