"""Structured logging for the SEO editor.

Events are JSON lines appended to ``~/.cache/seoedit/logs/seoedit.log``. Set
``SEOEDIT_LOG_LEVEL`` to DEBUG, INFO (default), WARNING or ERROR:

- DEBUG: ignored commands, decode statistics, file writes
- INFO: CLI commands, imports, exports
- WARNING: empty exports, refused edits
- ERROR: file and configuration failures

Read the log with ``jq``:

    tail -f ~/.cache/seoedit/logs/seoedit.log | jq .
"""

import os
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_log_stream: Optional[TextIO] = None
_log_path: Optional[Path] = None


def log_file_path() -> Path:
    return Path.home() / ".cache" / "seoedit" / "logs" / "seoedit.log"


def configure_logging() -> None:
    """
    Send structlog output to the log file.

    Safe to call more than once: the open log file is reused while its path
    stays the same, and closed when the path changes (e.g. a new home).
    """
    stream = _open_log_stream(log_file_path())

    level = os.environ.get("SEOEDIT_LOG_LEVEL", "INFO").upper()
    if level not in LOG_LEVELS:
        level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


def _open_log_stream(path: Path) -> TextIO:
    global _log_stream, _log_path

    if _log_stream is not None and not _log_stream.closed:
        if _log_path == path:
            return _log_stream
        _log_stream.close()

    path.parent.mkdir(parents=True, exist_ok=True)
    _log_stream = open(path, "a", encoding="utf-8")
    _log_path = path
    return _log_stream


def get_logger(name: str) -> Any:
    """Structured logger for a module, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)
