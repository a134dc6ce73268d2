"""Logging configuration using structlog for structured JSON logging."""

import logging
import sys
from collections.abc import MutableMapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

# Standard library logging levels mapping
_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Events shown on the terminal without --verbose, plus all ERROR/CRITICAL
USER_FACING_EVENTS: set[str] = {
    "document_sync_started",
    "document_sync_completed",
    "document_skipped_no_deck",
    "vault_sync_started",
    "vault_sync_completed",
    "vault_sync_aborted",
    "managed_notes_unreferenced",
    "managed_notes_pruned",
    "anki_connection_warning",
    "config_warning",
}


def _get_level_no(level_name: str) -> int:
    """Get numeric log level from name."""
    return _LOG_LEVELS.get(level_name.upper(), logging.INFO)


class UserFacingConsoleFilter(logging.Filter):
    """Logging filter that only passes user-facing events to console.

    Allows:
    - Events in USER_FACING_EVENTS
    - All ERROR and CRITICAL level messages
    - Everything when verbose mode is enabled
    """

    def __init__(self, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if self.verbose:
            return True

        if record.levelno >= logging.ERROR:
            return True

        # structlog hands the event dict to the formatter as record.msg
        event = record.msg.get("event") if isinstance(record.msg, dict) else None
        if event is None:
            event = record.getMessage()
        return isinstance(event, str) and event in USER_FACING_EVENTS


class UserFriendlyConsoleRenderer:
    """Renders user-facing logs in a clean, readable format for terminal output.

    Falls back to the standard console renderer for anything it does not
    know how to phrase.
    """

    def __init__(self) -> None:
        self._fallback = ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        event = event_dict.get("event", "")
        level = str(event_dict.get("level", "info")).upper()

        if event == "document_sync_started":
            return f"Syncing {event_dict.get('document', '')}"

        elif event == "document_sync_completed":
            return (
                f"Synced {event_dict.get('document', '')}: "
                f"{event_dict.get('created', 0)} created, "
                f"{event_dict.get('updated', 0)} updated, "
                f"{event_dict.get('moved', 0)} moved, "
                f"{event_dict.get('deleted', 0)} deleted"
            )

        elif event == "document_skipped_no_deck":
            return f"No #anki/ tag in {event_dict.get('document', '')}, skipped"

        elif event == "vault_sync_started":
            return f"Starting vault sync: {event_dict.get('documents', 0)} documents"

        elif event == "vault_sync_completed":
            failed = event_dict.get("failed", 0)
            summary = f"Vault sync complete: {event_dict.get('synced', 0)} documents synced"
            if failed:
                summary += f" | {failed} failed"
            return summary

        elif event == "vault_sync_aborted":
            return f"Vault sync aborted: {event_dict.get('reason', 'unknown reason')}"

        elif event == "managed_notes_unreferenced":
            return (
                f"{event_dict.get('count', 0)} managed Anki notes are not "
                "referenced by any document"
            )

        elif event == "managed_notes_pruned":
            return f"Deleted {event_dict.get('count', 0)} unreferenced Anki notes"

        elif level == "ERROR":
            error = event_dict.get("error", event)
            return f"ERROR: {error}"

        elif level == "WARNING" and event in USER_FACING_EVENTS:
            return f"WARNING: {event}"

        return str(self._fallback(logger, method_name, event_dict))


# Global state for handlers
_structlog_ready = False
_handlers: list[logging.Handler] = []


def _pre_chain() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _setup_structlog() -> None:
    """Route structlog through standard library logging."""
    global _structlog_ready

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _structlog_ready = True


def configure_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    log_file: Path | None = None,
    verbose: bool = False,
) -> None:
    """Configure structlog logging with console and optional file output.

    Args:
        log_level: Minimum console log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for rotating JSON log files (None disables files)
        log_file: Specific log file path (overrides log_dir)
        verbose: If True, show all log messages on terminal
    """
    _setup_structlog()

    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    level = _get_level_no(log_level)

    # Console handler - human-readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.addFilter(UserFacingConsoleFilter(verbose=verbose))
    renderer: Any = (
        ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)
        if verbose
        else UserFriendlyConsoleRenderer()
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_pre_chain(),
        )
    )
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    log_path: Path | None = None
    if log_file:
        log_path = log_file
    elif log_dir:
        log_path = log_dir / "simple-anki-sync.log"

    if log_path is not None:
        log_path.parent.mkdir(exist_ok=True, parents=True)
        file_formatter = structlog.stdlib.ProcessorFormatter(
            processor=JSONRenderer(),
            foreign_pre_chain=_pre_chain(),
        )

        # Size-based rotation: 10MB per file, 5 backups
        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

        error_handler = RotatingFileHandler(
            filename=str(log_path.parent / "errors.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        root_logger.addHandler(error_handler)
        _handlers.append(error_handler)

    get_logger("simple_anki_sync.utils.logging").debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_path) if log_path else None,
        verbose=verbose,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the given name
    """
    if not _structlog_ready:
        # Handlers are installed by configure_logging()
        _setup_structlog()

    return structlog.get_logger(name)
