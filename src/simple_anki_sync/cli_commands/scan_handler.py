"""Scan command implementation logic (parse only, no Anki calls)."""

from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from simple_anki_sync.exceptions import VaultError
from simple_anki_sync.obsidian.parser import parse_document
from simple_anki_sync.utils.io import read_text

from .shared import console

PREVIEW_WIDTH = 60


def _preview(text: str) -> str:
    if len(text) > PREVIEW_WIDTH:
        text = text[: PREVIEW_WIDTH - 1] + "…"
    return escape(text)


def run_scan(logger: Any, file: Path) -> None:
    """Show the flashcards and deck found in a document.

    Raises:
        typer.Exit: If the file cannot be read
    """
    try:
        text = read_text(file)
    except (OSError, UnicodeDecodeError) as e:
        error = VaultError(f"Cannot read {file}", context={"error": str(e)})
        logger.error("scan_failed", file=str(file), error=str(e))
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(error))}")
        raise typer.Exit(code=1)

    parsed = parse_document(text, file.as_posix())

    if parsed.deck_name:
        deck = escape(parsed.deck_name)
    else:
        deck = "[yellow](none, document would be skipped)[/yellow]"
    console.print(f"\n[bold]Deck:[/bold] {deck}")

    table = Table(title=f"Flashcards in {escape(file.name)}", show_header=True)
    table.add_column("Lines", style="dim")
    table.add_column("Front", style="cyan")
    table.add_column("Back")
    table.add_column("Note ID", style="green")
    for record in parsed.records:
        table.add_row(
            f"{record.start_line + 1}-{record.end_line + 1}",
            _preview(record.front),
            _preview(record.back),
            str(record.remote_id) if record.remote_id is not None else "new",
        )
    console.print(table)

    bound = {r.remote_id for r in parsed.records if r.remote_id is not None}
    orphans = [note_id for note_id in parsed.known_ids if note_id not in bound]
    if orphans:
        console.print(
            f"[yellow]Orphaned annotations (would be deleted): "
            f"{', '.join(str(i) for i in orphans)}[/yellow]"
        )
    logger.info(
        "scan_completed",
        file=str(file),
        records=len(parsed.records),
        orphans=len(orphans),
    )
