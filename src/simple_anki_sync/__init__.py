"""Sync Markdown table flashcards from an Obsidian vault to Anki."""

__version__ = "0.1.0"
