"""Pytest configuration and fixtures for the test suite."""

from pathlib import Path

import pytest

from simple_anki_sync.cli_commands import shared
from simple_anki_sync.config import reset_config
from simple_anki_sync.sync.engine import SyncEngine
from tests.fixtures import MemoryDocumentStore, MockAnkiStore, RecordingNotifier


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Drop cached config between tests."""
    reset_config()
    shared.reset_cli_state()
    yield
    reset_config()
    shared.reset_cli_state()


@pytest.fixture
def anki_store():
    """Provide an in-memory Anki store with a Default deck."""
    return MockAnkiStore()


@pytest.fixture
def document_store():
    """Provide an empty in-memory document store."""
    return MemoryDocumentStore()


@pytest.fixture
def notifier():
    """Provide a notifier that records notices."""
    return RecordingNotifier()


@pytest.fixture
def engine(anki_store, document_store, notifier):
    """Provide a sync engine wired to the in-memory stores."""
    return SyncEngine(anki_store, document_store, notifier)


@pytest.fixture
def sample_document():
    """Provide a document with a deck tag and one new flashcard."""
    return "#anki/Test\n\n| Q |\n| --- |\n| A |\n"


@pytest.fixture
def temp_vault_dir(tmp_path) -> Path:
    """Provide a temporary directory structure mimicking an Obsidian vault."""
    vault_dir = tmp_path / "vault"
    vault_dir.mkdir()

    (vault_dir / "Math").mkdir()
    (vault_dir / "Math" / "Algebra.md").write_text(
        "#anki/Math/Algebra\n\n| What is 2 + 2? |\n| --- |\n| 4 |\n",
        encoding="utf-8",
    )
    (vault_dir / "Inbox.md").write_text("Just notes, no cards.\n", encoding="utf-8")

    (vault_dir / "attachments").mkdir()
    (vault_dir / "attachments" / "diagram.png").write_bytes(b"\x89PNG fake")

    (vault_dir / ".obsidian").mkdir()
    (vault_dir / ".obsidian" / "workspace.md").write_text("ignored", encoding="utf-8")

    return vault_dir
