"""File modification monitoring for concurrent edit detection."""

from pathlib import Path
from typing import Dict


class FileMonitor:
    """
    Track file modification times to detect external changes.

    The CLI records a document's mtime when it reads it, and the atomic write
    refuses to replace the file if the mtime has moved since.

    Example:
        >>> monitor = FileMonitor()
        >>> monitor.record(Path("content.md"))
        >>> # Later, before write:
        >>> if monitor.is_modified(Path("content.md")):
        ...     raise FileModifiedError("content.md")
    """

    def __init__(self) -> None:
        self._mtimes: Dict[Path, float] = {}

    def record(self, path: Path) -> None:
        """
        Record current modification time for a file.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        self._mtimes[path] = path.stat().st_mtime

    def is_modified(self, path: Path) -> bool:
        """
        Check if file has been modified since last record.

        A file that is not tracked is only "modified" if it exists: writing a
        brand new file never conflicts.

        Returns:
            True if the file changed (or appeared) since it was recorded
        """
        if path not in self._mtimes:
            return path.exists()
        if not path.exists():
            return True
        return path.stat().st_mtime != self._mtimes[path]

    def refresh(self, path: Path) -> None:
        """Update recorded modification time after a successful write."""
        self._mtimes[path] = path.stat().st_mtime
