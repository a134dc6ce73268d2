"""Tests for applying line edits against the original line list."""

from simple_anki_sync.domain.entities.flashcard import EditKind, TextEdit
from simple_anki_sync.sync.text_edits import apply_edits


def test_inserts_land_after_their_own_rows() -> None:
    lines = ["a", "b", "c"]
    edits = [
        TextEdit(index=1, kind=EditKind.INSERT, text="after-a"),
        TextEdit(index=3, kind=EditKind.INSERT, text="after-c"),
    ]

    assert apply_edits(lines, edits) == ["a", "after-a", "b", "c", "after-c"]


def test_removals_and_inserts_mixed() -> None:
    lines = ["a", "x", "b", "y", "c"]
    edits = [
        TextEdit(index=3, kind=EditKind.REMOVE),
        TextEdit(index=1, kind=EditKind.REMOVE),
        TextEdit(index=2, kind=EditKind.INSERT, text="new"),
    ]

    assert apply_edits(lines, edits) == ["a", "new", "b", "c"]


def test_remove_then_insert_at_same_index() -> None:
    lines = ["a", "old", "b"]
    edits = [
        TextEdit(index=1, kind=EditKind.INSERT, text="new"),
        TextEdit(index=1, kind=EditKind.REMOVE),
    ]

    assert apply_edits(lines, edits) == ["a", "new", "b"]


def test_original_list_untouched() -> None:
    lines = ["a"]

    apply_edits(lines, [TextEdit(index=0, kind=EditKind.REMOVE)])

    assert lines == ["a"]


def test_no_edits() -> None:
    assert apply_edits(["a", "b"], []) == ["a", "b"]


def test_insert_copies_carriage_return_of_previous_line() -> None:
    lines = ["| Q |\r", "| --- |\r", "| A |\r", ""]
    edits = [TextEdit(index=3, kind=EditKind.INSERT, text="<!--ANKI_NOTE_ID:5-->")]

    result = apply_edits(lines, edits)

    assert "\n".join(result) == "| Q |\r\n| --- |\r\n| A |\r\n<!--ANKI_NOTE_ID:5-->\r\n"


def test_insert_after_plain_line_stays_plain() -> None:
    edits = [TextEdit(index=1, kind=EditKind.INSERT, text="new")]

    assert apply_edits(["a", "b\r"], edits) == ["a", "new", "b\r"]
