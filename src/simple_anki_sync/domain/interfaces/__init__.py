"""Domain interfaces package."""

from .anki_http_client import IAnkiHttpClient
from .anki_store import IAnkiStore
from .document_store import IDocumentStore
from .notifier import INotifier, NoticeLevel, NullNotifier

__all__ = [
    "IAnkiHttpClient",
    "IAnkiStore",
    "IDocumentStore",
    "INotifier",
    "NoticeLevel",
    "NullNotifier",
]
