"""Sync command implementation logic."""

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from ..anki.client import AnkiClient
from ..config import Config
from ..exceptions import SimpleAnkiSyncError
from ..obsidian.vault import VaultDocumentStore
from ..sync.engine import DocumentSyncResult, SyncEngine, VaultSyncResult
from .shared import ConsoleNotifier, console


def _document_store(config: Config) -> VaultDocumentStore:
    return VaultDocumentStore(
        config.vault_path,
        vault_name=config.effective_vault_name,
        excluded_dirs=config.excluded_dirs,
    )


def to_vault_document(config: Config, file: Path) -> str:
    """Turn a path given on the command line into a vault-relative document.

    An existing file must live inside the vault; anything else is taken to
    be vault-relative already.

    Raises:
        typer.BadParameter: If the file exists outside the vault
    """
    candidate = file.expanduser()
    if candidate.exists():
        resolved = candidate.resolve()
        if not resolved.is_relative_to(config.vault_path):
            msg = f"{file} is not inside the vault {config.vault_path}"
            raise typer.BadParameter(msg)
        return resolved.relative_to(config.vault_path).as_posix()
    return file.as_posix()


async def _sync_document(config: Config, document: str) -> DocumentSyncResult:
    async with AnkiClient.from_config(config) as anki:
        engine = SyncEngine(anki, _document_store(config), ConsoleNotifier(), config)
        return await engine.sync_document(document)


async def _sync_vault(config: Config, prune_orphans: bool) -> VaultSyncResult:
    async with AnkiClient.from_config(config) as anki:
        engine = SyncEngine(anki, _document_store(config), ConsoleNotifier(), config)
        return await engine.sync_vault(prune_orphans=prune_orphans)


def _print_document_result(result: DocumentSyncResult) -> None:
    if result.skipped:
        console.print(
            f"[yellow]Skipped {escape(result.path)}: {result.skipped_reason}[/yellow]"
        )
        return
    console.print(
        f"[green]{escape(result.path)}[/green] -> "
        f"[cyan]{escape(result.deck_name or '')}[/cyan]: "
        f"{result.created} created, {result.updated} updated, "
        f"{result.moved} moved, {len(result.deleted_ids)} deleted"
    )
    if result.failed:
        console.print(f"[red]{result.failed} operation(s) failed, see log[/red]")


def run_sync_document(config: Config, logger: Any, file: Path) -> None:
    """Execute a single-document sync.

    Raises:
        typer.Exit: On sync failure
    """
    document = to_vault_document(config, file)
    logger.debug("sync_command_started", document=document)

    try:
        result = asyncio.run(_sync_document(config, document))
    except SimpleAnkiSyncError as e:
        logger.error("sync_command_failed", document=document, error=str(e))
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    _print_document_result(result)
    if result.skipped_reason == "anki_unavailable" or result.failed:
        raise typer.Exit(code=1)


def run_sync_vault(config: Config, logger: Any, prune_orphans: bool) -> None:
    """Execute a whole-vault sync.

    Raises:
        typer.Exit: When the pass was aborted or any document failed
    """
    logger.debug("sync_vault_command_started", prune_orphans=prune_orphans)

    try:
        result = asyncio.run(_sync_vault(config, prune_orphans))
    except SimpleAnkiSyncError as e:
        logger.error("sync_vault_command_failed", error=str(e))
        console.print(f"\n[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if result.aborted:
        raise typer.Exit(code=1)

    table = Table(title="Vault Sync", show_header=True, header_style="bold magenta")
    table.add_column("Document", style="cyan")
    table.add_column("Deck")
    table.add_column("Created", justify="right")
    table.add_column("Updated", justify="right")
    table.add_column("Moved", justify="right")
    table.add_column("Deleted", justify="right")
    for doc in result.documents:
        if doc.skipped:
            continue
        table.add_row(
            escape(doc.path),
            escape(doc.deck_name or ""),
            str(doc.created),
            str(doc.updated),
            str(doc.moved),
            str(len(doc.deleted_ids)),
        )
    console.print(table)

    if result.unreferenced_ids and not result.pruned_ids:
        console.print(
            f"[yellow]{len(result.unreferenced_ids)} managed note(s) are not "
            "referenced by any document.[/yellow]"
        )
        if not prune_orphans:
            console.print("[dim]TIP: run with --prune-orphans to delete them[/dim]")
    if result.pruned_ids:
        console.print(
            f"[green]Deleted {len(result.pruned_ids)} unreferenced note(s)[/green]"
        )

    if result.failed_documents:
        console.print(
            f"[bold red]{len(result.failed_documents)} document(s) failed[/bold red]"
        )
        raise typer.Exit(code=1)
