"""SEO markdown editor - maintain SEO text changes as reviewable markdown.

Key features:
- Page → Block → Tag document model with derived change status
- Markdown import/export with one table of tag changes per block
- Pure command transitions that keep the document's invariants
- Command-line host for creating, inspecting and editing documents

Example:
    >>> from seoedit import EditorSession
    >>> session = EditorSession.from_markdown(open("seo-content.md").read())
    >>> session.summary().tag_count
    3
"""

__version__ = "0.1.0"

from seoedit.editor.coordinator import EditCoordinator, apply
from seoedit.editor.session import EditorSession
from seoedit.markdown.codec import decode, encode
from seoedit.models.document import Block, Page, Tag, TagStatus
from seoedit.models.state import EditorState

__all__ = [
    "Block",
    "EditCoordinator",
    "EditorSession",
    "EditorState",
    "Page",
    "Tag",
    "TagStatus",
    "apply",
    "decode",
    "encode",
]
