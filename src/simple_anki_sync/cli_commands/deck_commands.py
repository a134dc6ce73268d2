"""Deck-related CLI commands."""

from __future__ import annotations

import typer

from .anki_handler import run_list_decks
from .core_commands import ConfigOption, LogLevelOption, VerboseOption
from .shared import get_config_and_logger


def register(app: typer.Typer) -> None:
    """Register deck-related commands on the given Typer app."""

    @app.command(name="decks")
    def list_decks(
        config_path: ConfigOption = None,
        log_level: LogLevelOption = "INFO",
        verbose: VerboseOption = False,
    ) -> None:
        """List deck names available via AnkiConnect."""
        config, logger = get_config_and_logger(
            config_path, log_level, verbose, validate=False
        )
        run_list_decks(config=config, logger=logger)
