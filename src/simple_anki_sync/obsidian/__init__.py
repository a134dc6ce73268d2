"""Obsidian side: table parsing, content rewriting and the vault store."""

from .content_transformer import ContentTransformer, convert_markup
from .parser import (
    extract_deck_name,
    find_note_ids,
    format_note_id,
    parse_document,
    parse_flashcards,
)
from .row_tokenizer import SpanState, split_row
from .vault import VaultDocumentStore

__all__ = [
    "ContentTransformer",
    "SpanState",
    "VaultDocumentStore",
    "convert_markup",
    "extract_deck_name",
    "find_note_ids",
    "format_note_id",
    "parse_document",
    "parse_flashcards",
    "split_row",
]
