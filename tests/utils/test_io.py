import pytest

from simple_anki_sync.utils.io import atomic_write, atomic_write_text, read_text


def test_atomic_write_creates_file(tmp_path):
    """Test that atomic_write creates a file with correct content."""
    target_file = tmp_path / "note.md"

    with atomic_write(target_file) as f:
        f.write("| Q |\n| --- |\n| A |\n")

    assert target_file.read_text(encoding="utf-8") == "| Q |\n| --- |\n| A |\n"


def test_atomic_write_overwrites_file(tmp_path):
    target_file = tmp_path / "note.md"
    target_file.write_text("Old content", encoding="utf-8")

    with atomic_write(target_file) as f:
        f.write("New content")

    assert target_file.read_text(encoding="utf-8") == "New content"


def test_atomic_write_creates_parent_dirs(tmp_path):
    target_file = tmp_path / "Math" / "Algebra" / "note.md"

    with atomic_write(target_file) as f:
        f.write("x")

    assert target_file.read_text(encoding="utf-8") == "x"


def test_atomic_write_failure_cleanup(tmp_path):
    """Test that temp file is cleaned up on failure and target is unchanged."""
    target_file = tmp_path / "note.md"
    target_file.write_text("Original content", encoding="utf-8")

    with pytest.raises(RuntimeError):
        with atomic_write(target_file) as f:
            f.write("New content")
            raise RuntimeError("Simulated failure")

    assert target_file.read_text(encoding="utf-8") == "Original content"
    assert list(tmp_path.glob(".tmp_*")) == []


def test_atomic_write_atomicity(tmp_path):
    """The target only appears once the context manager exits."""
    target_file = tmp_path / "note.md"

    with atomic_write(target_file) as f:
        f.write("Final content")
        f.flush()
        assert not target_file.exists()

    assert target_file.read_text(encoding="utf-8") == "Final content"


def test_atomic_write_binary_mode(tmp_path):
    target_file = tmp_path / "image.png"

    with atomic_write(target_file, mode="wb") as f:
        f.write(b"\x89PNG")

    assert target_file.read_bytes() == b"\x89PNG"


def test_text_round_trip_keeps_crlf(tmp_path):
    target_file = tmp_path / "windows.md"
    text = "#anki/Deck\r\n| Q |\r\n| --- |\r\n| A |\r\n"

    atomic_write_text(target_file, text)

    assert target_file.read_bytes() == text.encode("utf-8")
    assert read_text(target_file) == text


def test_read_text_keeps_unicode(tmp_path):
    target_file = tmp_path / "unicode.md"
    target_file.write_bytes("Größe ∑ 日本".encode())

    assert read_text(target_file) == "Größe ∑ 日本"
