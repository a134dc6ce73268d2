"""Apply line edits collected during reconciliation."""

from collections.abc import Iterable

from ..domain.entities.flashcard import EditKind, TextEdit


def _order(edit: TextEdit) -> tuple[int, int]:
    # Descending index; at equal index the removal goes first so an
    # insertion lands in front of whatever follows the removed line.
    return (-edit.index, 0 if edit.kind is EditKind.REMOVE else 1)


def _line_ending(lines: list[str], index: int) -> str:
    # Lines come from split("\n"), so a CRLF line keeps its "\r"
    return "\r" if index > 0 and lines[index - 1].endswith("\r") else ""


def apply_edits(lines: list[str], edits: Iterable[TextEdit]) -> list[str]:
    """Apply edits addressed against ``lines`` and return the new line list.

    Every index refers to the original, unmodified list. Working from the end
    towards the start keeps earlier indices valid, so no running offset is
    needed.

    Args:
        lines: Original document lines
        edits: Insertions (before ``index``) and removals (of ``index``). An
            inserted line takes the "\\r" of the line before it, so CRLF
            documents stay CRLF

    Returns:
        A new list; ``lines`` is left untouched
    """
    result = list(lines)
    for edit in sorted(edits, key=_order):
        if edit.kind is EditKind.REMOVE:
            del result[edit.index]
        else:
            result.insert(edit.index, edit.text + _line_ending(lines, edit.index))
    return result
