"""Split a Markdown table row into cells.

Pipes inside wikilinks (``[[target|alias]]``) and math spans (``$…$``,
``$$…$$``) are part of the cell, and ``\\|`` is an escaped literal pipe.
"""

from enum import Enum


class SpanState(Enum):
    """Where the scanner currently is inside a row."""

    PLAIN = "plain"
    BRACKET = "bracket"
    INLINE_MATH = "inline_math"
    BLOCK_MATH = "block_math"


# (state, token) -> next state. Only one span is open at a time: a "$" inside
# a wikilink is literal text and cannot open math.
_TRANSITIONS: dict[tuple[SpanState, str], SpanState] = {
    (SpanState.PLAIN, "$$"): SpanState.BLOCK_MATH,
    (SpanState.PLAIN, "$"): SpanState.INLINE_MATH,
    (SpanState.PLAIN, "[["): SpanState.BRACKET,
    (SpanState.BLOCK_MATH, "$$"): SpanState.PLAIN,
    (SpanState.INLINE_MATH, "$"): SpanState.PLAIN,
    (SpanState.BRACKET, "]]"): SpanState.PLAIN,
}


def _strip_row(row: str) -> str:
    """Trim whitespace, then one leading and one trailing pipe."""
    clean = row.strip()
    if clean.startswith("|"):
        clean = clean[1:]
    if clean.endswith("|"):
        clean = clean[:-1]
    return clean


def split_row(row: str) -> list[str]:
    """Split a table row into trimmed cell strings.

    Empty cells are dropped, except that a row holding a single empty cell
    yields ``[""]`` rather than nothing.

    >>> split_row("| a \\\\| b |")
    ['a | b']
    >>> split_row("| [[x|y]] |")
    ['[[x|y]]']
    """
    clean = _strip_row(row)
    cells: list[str] = []
    buf: list[str] = []
    state = SpanState.PLAIN

    i = 0
    while i < len(clean):
        two = clean[i : i + 2]
        if (state, two) in _TRANSITIONS:
            state = _TRANSITIONS[(state, two)]
            buf.append(two)
            i += 2
            continue

        ch = clean[i]
        if (state, ch) in _TRANSITIONS:
            state = _TRANSITIONS[(state, ch)]
            buf.append(ch)
            i += 1
            continue

        if two == "\\|":
            buf.append("|")
            i += 2
            continue

        if ch == "|" and state is SpanState.PLAIN:
            cells.append("".join(buf).strip())
            buf = []
            i += 1
            continue

        buf.append(ch)
        i += 1

    cells.append("".join(buf).strip())
    if len(cells) == 1:
        return cells
    return [cell for cell in cells if cell]
