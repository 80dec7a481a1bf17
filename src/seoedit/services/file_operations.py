"""File operations for markdown documents.

Reads documents, writes them atomically (temp file + fsync + rename) and names
dated export files.
"""

import os
from datetime import date
from pathlib import Path
from typing import Optional

import structlog

from seoedit.services.exceptions import FileModifiedError
from seoedit.services.file_monitor import FileMonitor

logger = structlog.get_logger()


def read_document(path: Path, file_monitor: Optional[FileMonitor] = None) -> str:
    """
    Read a markdown document, recording its mtime for a later safe write.

    A UTF-8 byte order mark is dropped.

    Raises:
        FileNotFoundError: If the file doesn't exist
        UnicodeDecodeError: If the file is not UTF-8
    """
    text = path.read_text(encoding="utf-8-sig")
    if file_monitor:
        file_monitor.record(path)
    logger.debug("document_read", path=str(path), size=len(text))
    return text


def atomic_write(
    path: Path,
    content: str,
    file_monitor: Optional[FileMonitor] = None
) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    1. Early modification check (before write)
    2. Write to temporary file
    3. fsync to ensure data is on disk
    4. Late modification check (after write, before rename)
    5. Atomic rename to replace original file

    Args:
        path: Target file path
        content: Content to write
        file_monitor: Optional FileMonitor for concurrent modification detection

    Raises:
        FileModifiedError: If file was modified since it was read
        OSError: On file I/O errors
    """
    if file_monitor and file_monitor.is_modified(path):
        raise FileModifiedError(
            str(path),
            "File was modified before write (early check)"
        )

    # Same directory keeps the rename on one filesystem
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        if file_monitor and file_monitor.is_modified(path):
            raise FileModifiedError(
                str(path),
                "File was modified during write (late check)"
            )

        temp_path.replace(path)

        if file_monitor:
            file_monitor.refresh(path)

        logger.debug(
            "atomic_write_success",
            path=str(path),
            size=len(content)
        )

    except FileModifiedError:
        if temp_path.exists():
            temp_path.unlink()
        raise

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error(
            "atomic_write_failed",
            path=str(path),
            error=str(e)
        )
        raise


def export_filename(prefix: str = "seo-content", on: Optional[date] = None) -> str:
    """
    Name of a dated export file.

    Example:
        >>> export_filename(on=date(2025, 1, 15))
        "seo-content-2025-01-15.md"
    """
    on = on or date.today()
    return f"{prefix}-{on.isoformat()}.md"
