"""Anki-related command implementation logic."""

import asyncio
from typing import Any

import typer
from rich.markup import escape

from simple_anki_sync.anki.client import AnkiClient
from simple_anki_sync.config import Config
from simple_anki_sync.exceptions import AnkiError

from .shared import console


async def _list_decks(config: Config) -> list[str]:
    async with AnkiClient.from_config(config) as anki:
        return await anki.list_decks()


def run_list_decks(config: Config, logger: Any) -> None:
    """Execute the list-decks operation.

    Args:
        config: Configuration object
        logger: Logger instance

    Raises:
        typer.Exit: On list-decks failure
    """
    logger.info("list_decks_started")

    try:
        decks = sorted(asyncio.run(_list_decks(config)))
    except AnkiError as e:
        logger.error("list_decks_failed", error=str(e))
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if not decks:
        console.print("[yellow]No decks available.[/yellow]")
    else:
        console.print("\n[bold]Decks:[/bold]")
        for deck in decks:
            console.print(f"  [cyan]• {escape(deck)}[/cyan]")

    logger.info("list_decks_completed", count=len(decks))
