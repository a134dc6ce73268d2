"""CLI command tests."""

from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from simple_anki_sync.cli import app
from tests.fixtures import MockAnkiStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _patch_logging(monkeypatch):
    monkeypatch.setattr(
        "simple_anki_sync.cli_commands.shared.configure_logging",
        lambda *args, **kwargs: None,
    )
    monkeypatch.setattr(
        "simple_anki_sync.cli_commands.shared.get_logger", lambda name: MagicMock()
    )


@pytest.fixture
def config_file(tmp_path, temp_vault_dir, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VAULT_PATH", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(f"vault_path: {temp_vault_dir}\n", encoding="utf-8")
    return path


@pytest.fixture
def fake_anki(monkeypatch):
    """Route every AnkiClient.from_config to one in-memory store."""
    store = MockAnkiStore()

    class FakeClient:
        @classmethod
        def from_config(cls, config):
            return store

    monkeypatch.setattr(
        "simple_anki_sync.cli_commands.sync_handler.AnkiClient", FakeClient
    )
    monkeypatch.setattr(
        "simple_anki_sync.cli_commands.check_handler.AnkiClient", FakeClient
    )
    return store


def test_help_lists_commands(runner) -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("sync", "sync-vault", "check", "scan", "decks"):
        assert command in result.stdout


class TestScan:
    def test_scan_shows_deck_and_cards(self, runner, tmp_path) -> None:
        doc = tmp_path / "cards.md"
        doc.write_text(
            "#anki/Biology/Cells\n\n| Cell? |\n| --- |\n| Unit of life |\n"
            "<!--ANKI_NOTE_ID:42-->\n\n<!--ANKI_NOTE_ID:7-->\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["scan", str(doc)])

        assert result.exit_code == 0
        assert "Biology::Cells" in result.stdout
        assert "Cell?" in result.stdout
        assert "42" in result.stdout
        assert "Orphaned annotations (would be deleted): 7" in result.stdout

    def test_scan_without_deck(self, runner, tmp_path) -> None:
        doc = tmp_path / "plain.md"
        doc.write_text("| Q |\n| --- |\n| A |\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(doc)])

        assert result.exit_code == 0
        assert "document would be skipped" in result.stdout

    def test_scan_missing_file(self, runner, tmp_path) -> None:
        result = runner.invoke(app, ["scan", str(tmp_path / "missing.md")])

        assert result.exit_code != 0


class TestCheck:
    def test_check_fails_without_vault(self, runner, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VAULT_PATH", str(tmp_path / "nowhere"))

        result = runner.invoke(app, ["check", "--skip-anki"])

        assert result.exit_code == 1
        assert "FAIL" in result.stdout

    def test_check_passes(self, runner, config_file, fake_anki) -> None:
        result = runner.invoke(app, ["check", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "All checks passed." in result.stdout

    def test_check_reports_unreachable_anki(
        self, runner, config_file, fake_anki
    ) -> None:
        fake_anki.available = False

        result = runner.invoke(app, ["check", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "AnkiConnect" in result.stdout


class TestSync:
    def test_sync_document_writes_annotation(
        self, runner, config_file, fake_anki, temp_vault_dir
    ) -> None:
        doc = temp_vault_dir / "Math" / "Algebra.md"

        result = runner.invoke(app, ["sync", str(doc), "--config", str(config_file)])

        assert result.exit_code == 0, result.stdout
        (note_id,) = fake_anki.notes
        assert fake_anki.notes[note_id]["deck"] == "Math::Algebra"
        assert f"<!--ANKI_NOTE_ID:{note_id}-->" in doc.read_text(encoding="utf-8")
        assert fake_anki.closed

    def test_sync_rejects_file_outside_vault(
        self, runner, config_file, fake_anki, tmp_path
    ) -> None:
        outside = tmp_path / "outside.md"
        outside.write_text("#anki/X\n", encoding="utf-8")

        result = runner.invoke(
            app, ["sync", str(outside), "--config", str(config_file)]
        )

        assert result.exit_code != 0
        assert fake_anki.calls == []

    def test_sync_exits_when_anki_unavailable(
        self, runner, config_file, fake_anki
    ) -> None:
        fake_anki.available = False

        result = runner.invoke(
            app, ["sync", "Math/Algebra.md", "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "AnkiConnect is not available" in result.stdout

    def test_sync_vault_reports_unreferenced(
        self, runner, config_file, fake_anki
    ) -> None:
        fake_anki.add_note("Old", "x", "y")

        result = runner.invoke(app, ["sync-vault", "--config", str(config_file)])

        assert result.exit_code == 0, result.stdout
        assert "1 managed note(s) are not" in result.stdout
        assert "--prune-orphans" in result.stdout

    def test_sync_vault_requires_vault_path(
        self, runner, tmp_path, fake_anki, monkeypatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("VAULT_PATH", raising=False)
        monkeypatch.delenv("SIMPLE_ANKI_SYNC_CONFIG", raising=False)
        doc = tmp_path / "Here.md"
        original = "#anki/Here\n\n| Q |\n| --- |\n| A |\n"
        doc.write_text(original, encoding="utf-8")

        result = runner.invoke(app, ["sync-vault"])

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout
        assert doc.read_text(encoding="utf-8") == original
        assert fake_anki.calls == []

    def test_sync_vault_prunes(
        self, runner, config_file, fake_anki
    ) -> None:
        stray = fake_anki.add_note("Old", "x", "y")

        result = runner.invoke(
            app, ["sync-vault", "--prune-orphans", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.stdout
        assert stray not in fake_anki.notes
        assert "Deleted 1 unreferenced note(s)" in result.stdout


def test_decks_lists_deck_names(runner, config_file, monkeypatch) -> None:
    store = MockAnkiStore(decks=["Default", "Math::Algebra"])

    class FakeClient:
        @classmethod
        def from_config(cls, config):
            return store

    monkeypatch.setattr(
        "simple_anki_sync.cli_commands.anki_handler.AnkiClient", FakeClient
    )

    result = runner.invoke(app, ["decks", "--config", str(config_file)])

    assert result.exit_code == 0, result.stdout
    assert "Math::Algebra" in result.stdout
