"""Domain entities package."""

from .flashcard import (
    AssetUpload,
    EditKind,
    FlashcardRecord,
    ParsedDocument,
    RemoteRecord,
    TextEdit,
    TransformedText,
)

__all__ = [
    "AssetUpload",
    "EditKind",
    "FlashcardRecord",
    "ParsedDocument",
    "RemoteRecord",
    "TextEdit",
    "TransformedText",
]
