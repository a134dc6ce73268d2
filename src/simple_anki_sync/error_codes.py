"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    ANK - Anki errors (connection, rejection, create/update/delete/move)
    VLT - Vault errors (read, write, path)
    CFG - Configuration errors

Usage:
    from simple_anki_sync.error_codes import ErrorCode

    logger.error(
        "note_create_failed",
        error_code=ErrorCode.ANK_CREATE_FAILED.value,
        source_id=record.source_id,
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # Anki Errors (ANK-xxx-xxx)
    # =========================================================================
    ANK_CONNECTION_FAILED = "ANK-CONN-001"
    """AnkiConnect is unreachable or the probe failed."""

    ANK_HTTP_ERROR = "ANK-CONN-002"
    """AnkiConnect answered with a non-2xx HTTP status."""

    ANK_MALFORMED_RESPONSE = "ANK-CONN-003"
    """AnkiConnect returned something other than a result/error envelope."""

    ANK_REJECTED = "ANK-REJECT-001"
    """AnkiConnect returned an error for the requested action."""

    ANK_CREATE_FAILED = "ANK-CREATE-001"
    """A note could not be created."""

    ANK_UPDATE_FAILED = "ANK-UPDATE-001"
    """A note's fields, tags or deck could not be updated."""

    ANK_DELETE_FAILED = "ANK-DELETE-001"
    """Orphaned notes could not be deleted."""

    ANK_MEDIA_FAILED = "ANK-MEDIA-001"
    """An asset could not be stored in Anki's media collection."""

    ANK_DECK_FAILED = "ANK-DECK-001"
    """A deck could not be listed or created."""

    # =========================================================================
    # Vault Errors (VLT-xxx-xxx)
    # =========================================================================
    VLT_READ_FAILED = "VLT-READ-001"
    """A document or asset could not be read."""

    VLT_WRITE_FAILED = "VLT-WRITE-001"
    """A document could not be written back."""

    VLT_PATH_OUTSIDE = "VLT-PATH-001"
    """A document path resolves outside the vault root."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration failed validation."""

    CFG_PARSE_FAILED = "CFG-PARSE-001"
    """Configuration file could not be parsed."""


__all__ = ["ErrorCode"]
