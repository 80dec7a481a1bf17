"""Pydantic data models for the SEO editor."""

from seoedit.models.document import Block, DocumentSummary, Page, Tag, TagStatus
from seoedit.models.state import EditorState

__all__ = [
    "Block",
    "DocumentSummary",
    "EditorState",
    "Page",
    "Tag",
    "TagStatus",
]
