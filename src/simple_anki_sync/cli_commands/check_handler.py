"""Check command implementation logic."""

import asyncio
from typing import Any

import typer
from rich.table import Table

from simple_anki_sync.anki.client import AnkiClient
from simple_anki_sync.config import Config
from simple_anki_sync.exceptions import ConfigurationError

from .shared import console


async def _probe(config: Config) -> bool:
    async with AnkiClient.from_config(config) as anki:
        return await anki.probe_available()


def run_check(config: Config, logger: Any, skip_anki: bool = False) -> None:
    """Validate configuration and AnkiConnect reachability.

    Raises:
        typer.Exit: When any check fails
    """
    logger.info("check_started")
    console.print("\n[bold cyan]Running checks...[/bold cyan]\n")

    results: list[tuple[str, bool, str, str | None]] = []

    try:
        config.validate_config()
        results.append(("Vault", True, str(config.vault_path), None))
    except ConfigurationError as e:
        results.append(("Vault", False, e.message, e.suggestion))

    if not skip_anki:
        if asyncio.run(_probe(config)):
            results.append(("AnkiConnect", True, config.anki_connect_url, None))
        else:
            results.append(
                (
                    "AnkiConnect",
                    False,
                    f"No answer from {config.anki_connect_url}",
                    "Start Anki and install the AnkiConnect add-on",
                )
            )

    table = Table(title="Check Summary", show_header=True, header_style="bold magenta")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for name, passed, details, _ in results:
        status = "[green]PASS[/green]" if passed else "[red]FAIL[/red]"
        table.add_row(name, status, details)
    console.print(table)

    failed = [r for r in results if not r[1]]
    for name, _, _, suggestion in failed:
        if suggestion:
            console.print(f"  [dim]TIP ({name}): {suggestion}[/dim]")

    if failed:
        logger.error("check_failed", failed=len(failed))
        raise typer.Exit(code=1)

    console.print("\n[bold green]All checks passed.[/bold green]")
    logger.info("check_completed")
