"""Parse flashcard tables, deck tags and note id annotations from a document.

A flashcard is a single-column table whose header row is the front and
whose only data row is the back::

    | What is 2 + 2? |
    | --- |
    | 4 |
    <!--ANKI_NOTE_ID:1700000000000-->

The annotation line is written by the sync engine after the note is created.
The deck comes from the first ``#anki/<path>`` tag anywhere in the document.
"""

import re

from ..domain.entities.flashcard import FlashcardRecord, ParsedDocument
from ..utils.logging import get_logger
from .row_tokenizer import split_row

logger = get_logger(__name__)

DECK_TAG = re.compile(r"#anki/(\S+)")
NOTE_ID_COMMENT = re.compile(r"<!--ANKI_NOTE_ID:(\d+)-->")
TABLE_SEPARATOR = re.compile(r"\|\s*-{3,}\s*\|")

ANKI_DECK_SEPARATOR = "::"


def format_note_id(note_id: int) -> str:
    """Render the annotation line for a note id."""
    return f"<!--ANKI_NOTE_ID:{note_id}-->"


def extract_deck_name(text: str) -> str | None:
    """Get the Anki deck selected by the document's routing tag.

    >>> extract_deck_name("tags: #anki/Math/Algebra")
    'Math::Algebra'
    """
    match = DECK_TAG.search(text)
    if not match:
        return None
    return match.group(1).replace("/", ANKI_DECK_SEPARATOR)


def find_note_ids(text: str) -> list[int]:
    """Get every annotated note id in document order."""
    return [int(m.group(1)) for m in NOTE_ID_COMMENT.finditer(text)]


def _is_row(line: str) -> bool:
    return line.strip().startswith("|")


def parse_flashcards(text: str, source_path: str) -> list[FlashcardRecord]:
    """Find every single-column flashcard table in document order."""
    lines = text.split("\n")
    records: list[FlashcardRecord] = []

    i = 0
    while i < len(lines) - 2:
        header, separator, data = lines[i], lines[i + 1], lines[i + 2]

        if not (
            _is_row(header)
            and TABLE_SEPARATOR.fullmatch(separator.strip())
            and _is_row(data)
        ):
            i += 1
            continue

        header_cells = split_row(header)
        data_cells = split_row(data)
        if len(header_cells) != 1 or len(data_cells) != 1:
            logger.debug(
                "table_skipped_not_single_column",
                document=source_path,
                line=i,
                header_cells=len(header_cells),
                data_cells=len(data_cells),
            )
            i += 1
            continue

        following = lines[i + 3] if i + 3 < len(lines) else None
        if following is not None and _is_row(following):
            # more than one data row: not a flashcard
            i += 1
            continue

        remote_id: int | None = None
        end_line = i + 2
        id_match = NOTE_ID_COMMENT.search(following) if following is not None else None
        if id_match:
            remote_id = int(id_match.group(1))
            end_line = i + 3

        records.append(
            FlashcardRecord(
                source_id=f"{source_path}-{i}",
                front=header_cells[0],
                back=data_cells[0],
                remote_id=remote_id,
                start_line=i,
                end_line=end_line,
            )
        )
        i = end_line + 1

    return records


def parse_document(text: str, source_path: str) -> ParsedDocument:
    """Parse a document into flashcards, its deck and every annotated id."""
    records = parse_flashcards(text, source_path)
    deck_name = extract_deck_name(text)
    known_ids = find_note_ids(text)

    logger.debug(
        "document_parsed",
        document=source_path,
        deck=deck_name,
        records=len(records),
        annotated=sum(1 for r in records if r.remote_id is not None),
        known_ids=len(known_ids),
    )
    return ParsedDocument(records=records, deck_name=deck_name, known_ids=known_ids)
