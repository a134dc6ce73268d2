"""Core CLI commands: sync, sync-vault, check, scan."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .check_handler import run_check
from .scan_handler import run_scan
from .shared import get_config_and_logger
from .sync_handler import run_sync_document, run_sync_vault

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config.yaml", exists=True),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show all log messages on the terminal"),
]


def register(app: typer.Typer) -> None:
    """Register core commands on the given Typer app."""

    @app.command()
    def sync(
        file: Annotated[
            Path,
            typer.Argument(help="Document to sync (a path inside the vault)"),
        ],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = "INFO",
        verbose: VerboseOption = False,
    ) -> None:
        """Sync the flashcard tables of one document with Anki."""
        config, logger = get_config_and_logger(config_path, log_level, verbose)
        run_sync_document(config, logger, file)

    @app.command(name="sync-vault")
    def sync_vault(
        prune_orphans: Annotated[
            bool,
            typer.Option(
                "--prune-orphans",
                help="Delete managed Anki notes that no document references",
            ),
        ] = False,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = "INFO",
        verbose: VerboseOption = False,
    ) -> None:
        """Sync every document in the vault with Anki."""
        config, logger = get_config_and_logger(config_path, log_level, verbose)
        run_sync_vault(config, logger, prune_orphans)

    @app.command()
    def check(
        skip_anki: Annotated[
            bool,
            typer.Option("--skip-anki", help="Skip AnkiConnect connectivity check"),
        ] = False,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = "INFO",
        verbose: VerboseOption = False,
    ) -> None:
        """Check configuration and AnkiConnect connectivity."""
        config, logger = get_config_and_logger(
            config_path, log_level, verbose, validate=False
        )
        run_check(config, logger, skip_anki=skip_anki)

    @app.command()
    def scan(
        file: Annotated[
            Path,
            typer.Argument(help="Markdown file to inspect", exists=True, dir_okay=False),
        ],
        config_path: ConfigOption = None,
        log_level: LogLevelOption = "INFO",
        verbose: VerboseOption = False,
    ) -> None:
        """Show what a document would sync, without contacting Anki."""
        _config, logger = get_config_and_logger(
            config_path, log_level, verbose, validate=False
        )
        run_scan(logger, file)
