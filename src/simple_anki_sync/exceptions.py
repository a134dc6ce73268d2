"""Centralized exception hierarchy for simple-anki-sync.

All custom exceptions inherit from SimpleAnkiSyncError, so callers can catch
every sync-related failure with a single except clause.

Exception Hierarchy:
    SimpleAnkiSyncError (base)
     ConfigurationError - Configuration loading/validation errors
     VaultError - Document store (vault) read/write errors
     SyncError - Synchronization pass errors
     AnkiError - Anki-related errors
        AnkiConnectError - AnkiConnect unreachable or transport failure
        AnkiRejectedError - AnkiConnect answered with an error

Usage Examples:
    try:
        await engine.sync_document(doc)
    except AnkiConnectError as e:
        logger.error("anki_unreachable", error=str(e))

    raise AnkiRejectedError(
        "addNote failed",
        error_code=ErrorCode.ANK_CREATE_FAILED.value,
        context={"deck": "Math::Algebra"},
    )
"""

from typing import Any


class SimpleAnkiSyncError(Exception):
    """Base exception for all sync-related errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., file paths, note ids)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "ANK-CONN-001")
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(SimpleAnkiSyncError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is missing or malformed
    - Vault path is missing or not a directory
    - Configuration values fail validation
    """


# Vault Errors


class VaultError(SimpleAnkiSyncError):
    """Document store errors.

    Raised when:
    - A document cannot be read or written
    - A document path escapes the vault root
    """


# Sync Errors


class SyncError(SimpleAnkiSyncError):
    """Synchronization pass errors."""


# Anki Errors


class AnkiError(SimpleAnkiSyncError):
    """Base class for Anki-related errors."""


class AnkiConnectError(AnkiError):
    """AnkiConnect communication errors.

    Raised when:
    - Cannot connect to AnkiConnect
    - Anki is not running
    - AnkiConnect returns a non-2xx status or a malformed envelope
    """


class AnkiRejectedError(AnkiError):
    """AnkiConnect accepted the request but refused the action.

    Raised when:
    - The response envelope carries an ``error`` value
    - The result has an unexpected shape (e.g. addNote without an id)
    """


__all__ = [
    "AnkiConnectError",
    "AnkiError",
    "AnkiRejectedError",
    "ConfigurationError",
    "SimpleAnkiSyncError",
    "SyncError",
    "VaultError",
]
