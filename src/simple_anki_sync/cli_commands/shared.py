"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from simple_anki_sync.config import Config, load_config, set_config
from simple_anki_sync.domain.interfaces.notifier import INotifier, NoticeLevel
from simple_anki_sync.exceptions import ConfigurationError
from simple_anki_sync.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

# Config and logger are loaded once per process
_config: Config | None = None
_logger: Any | None = None

_NOTICE_STYLES: dict[str, str] = {
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
}


class ConsoleNotifier(INotifier):
    """Print notices to the shared rich console."""

    def __init__(self, target: Console | None = None) -> None:
        self.console = target or console

    def notify(self, message: str, *, level: NoticeLevel = "info") -> None:
        style = _NOTICE_STYLES.get(level, "cyan")
        self.console.print(f"[{style}]{escape(message)}[/{style}]")


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str = "INFO",
    verbose: bool = False,
    validate: bool = True,
) -> tuple[Config, Any]:
    """Load configuration and logger (dependency injection helper).

    Args:
        config_path: Optional path to config file
        log_level: Logging level
        verbose: Show all log messages on terminal (for debugging)
        validate: Check that the vault folder exists

    Returns:
        Tuple of (Config, Logger)
    """
    global _config, _logger

    if _config is None:
        try:
            _config = load_config(config_path, validate=validate)
        except ConfigurationError as e:
            console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)
        set_config(_config)

        configure_logging(
            log_level or _config.log_level,
            log_dir=_config.log_dir,
            verbose=verbose,
        )
        _logger = get_logger("cli")

    return _config, _logger


def reset_cli_state() -> None:
    """Forget the cached config and logger (for tests)."""
    global _config, _logger
    _config = None
    _logger = None
