"""Tests for table row splitting."""

import pytest

from simple_anki_sync.obsidian.row_tokenizer import split_row


class TestSplitRow:
    """Cell splitting with wikilink, math and escape handling."""

    def test_escaped_pipe_is_literal(self) -> None:
        assert split_row("| a \\| b |") == ["a | b"]

    def test_pipe_inside_wikilink_does_not_split(self) -> None:
        assert split_row("| [[x|y]] |") == ["[[x|y]]"]

    def test_pipe_inside_inline_math_does_not_split(self) -> None:
        assert split_row("| $a|b$ |") == ["$a|b$"]

    def test_pipe_inside_block_math_does_not_split(self) -> None:
        assert split_row("| $$a|b$$ |") == ["$$a|b$$"]

    def test_single_empty_cell_is_kept(self) -> None:
        assert split_row("|  |") == [""]

    def test_two_columns(self) -> None:
        assert split_row("| front | back |") == ["front", "back"]

    def test_empty_cells_dropped_when_several(self) -> None:
        assert split_row("| a | |") == ["a"]

    def test_surrounding_whitespace_trimmed(self) -> None:
        assert split_row("   |  spaced out  |   ") == ["spaced out"]

    def test_row_without_outer_pipes(self) -> None:
        assert split_row("a | b") == ["a", "b"]

    def test_pipe_after_closed_math_splits(self) -> None:
        assert split_row("| $x$ | y |") == ["$x$", "y"]

    def test_dollar_inside_wikilink_is_literal(self) -> None:
        assert split_row("| [[a$b]] | c$ |") == ["[[a$b]]", "c$"]

    @pytest.mark.parametrize(
        ("row", "expected"),
        [
            ("| **bold** |", ["**bold**"]),
            ("| ![[img.png|200]] |", ["![[img.png|200]]"]),
            ("| $$\\frac{a}{b}$$ and $c$ |", ["$$\\frac{a}{b}$$ and $c$"]),
        ],
    )
    def test_single_cell_content_preserved(self, row, expected) -> None:
        assert split_row(row) == expected
