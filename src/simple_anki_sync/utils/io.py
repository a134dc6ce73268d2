"""File I/O utilities for safe and atomic operations."""

import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Any

from simple_anki_sync.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def atomic_write(
    path: str | Path,
    mode: str = "w",
    encoding: str | None = "utf-8",
    **kwargs: Any,
) -> Generator[Any]:
    """
    Context manager for atomic file writing.

    Writes to a temporary file in the target's directory, then renames it
    over the target on success. The target is never left partially written.

    Args:
        path: Target file path
        mode: File open mode (default: "w")
        encoding: File encoding (default: "utf-8" for text modes)
        **kwargs: Additional arguments passed to open()

    Yields:
        File object opened for writing

    Example:
        with atomic_write("note.md", newline="") as f:
            f.write(text)
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    if "b" in mode:
        encoding = None

    temp_fd, temp_path = tempfile.mkstemp(
        dir=parent,
        prefix=f".tmp_{path.name}_",
        text="b" not in mode,
    )
    os.close(temp_fd)
    temp_path_obj = Path(temp_path)

    try:
        with open(temp_path, mode, encoding=encoding, **kwargs) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())

        temp_path_obj.replace(path)
    except BaseException as e:
        with suppress(OSError):
            temp_path_obj.unlink()
        if isinstance(e, OSError):
            logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise


def atomic_write_text(path: str | Path, text: str) -> None:
    """Atomically replace a text file, keeping line endings byte-for-byte."""
    with atomic_write(path, newline="") as f:
        f.write(text)


def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file without newline translation."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()
