"""Synchronization: reconciliation of documents with Anki."""

from .engine import DocumentSyncResult, SyncEngine, VaultSyncResult
from .media import MediaUploader
from .reconciler import (
    ReconcileResult,
    ReconcileSettings,
    ReconcileState,
    Reconciler,
    build_backlink,
)
from .text_edits import apply_edits

__all__ = [
    "DocumentSyncResult",
    "MediaUploader",
    "ReconcileResult",
    "ReconcileSettings",
    "ReconcileState",
    "Reconciler",
    "SyncEngine",
    "VaultSyncResult",
    "apply_edits",
    "build_backlink",
]
