"""Domain entities for table flashcards and their remote counterparts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class FlashcardRecord:
    """A single-column table (front row, back row) found in a document.

    Derived from document text on every pass and never persisted.
    ``remote_id`` is set iff an identifier annotation directly follows the
    data row; ``end_line`` then points at the annotation line.
    """

    source_id: str
    front: str
    back: str
    remote_id: int | None
    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.end_line < self.start_line + 2:
            msg = f"Flashcard {self.source_id} spans fewer than three lines"
            raise ValueError(msg)


@dataclass(frozen=True)
class ParsedDocument:
    """Result of parsing one document."""

    records: list[FlashcardRecord]
    deck_name: str | None
    known_ids: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class AssetUpload:
    """An embedded asset to store in Anki before the note is submitted."""

    target_file_name: str
    payload: str  # base64


@dataclass(frozen=True)
class TransformedText:
    """Field text after asset and markup rewriting, with its pending uploads."""

    content: str
    uploads: list[AssetUpload] = field(default_factory=list)


class EditKind(str, Enum):
    """Kind of line edit applied to a document."""

    INSERT = "insert"
    REMOVE = "remove"


@dataclass(frozen=True)
class TextEdit:
    """A line edit addressed against the original, unmodified line list."""

    index: int
    kind: EditKind
    text: str = ""


class RemoteRecord(BaseModel):
    """A note as reported by AnkiConnect's notesInfo."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    note_id: int = Field(alias="noteId", description="Anki note id")
    model_name: str = Field(default="", alias="modelName", description="Note type")
    fields: dict[str, str] = Field(default_factory=dict, description="Field values")
    tags: list[str] = Field(default_factory=list, description="Note tags")
    card_ids: list[int] = Field(default_factory=list, alias="cards", description="Card ids")

    @classmethod
    def from_notes_info(cls, info: dict[str, Any]) -> RemoteRecord:
        """Build from a notesInfo entry, flattening ``{"value": ..., "order": ...}`` fields."""
        raw_fields = info.get("fields") or {}
        fields = {
            name: value.get("value", "") if isinstance(value, dict) else str(value)
            for name, value in raw_fields.items()
        }
        return cls.model_validate({**info, "fields": fields})
