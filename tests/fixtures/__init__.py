"""Test fixtures package."""

from .memory_document_store import MemoryDocumentStore, RecordingNotifier
from .mock_anki_store import MUTATING_CALLS, MockAnkiStore

__all__ = [
    "MUTATING_CALLS",
    "MemoryDocumentStore",
    "MockAnkiStore",
    "RecordingNotifier",
]
