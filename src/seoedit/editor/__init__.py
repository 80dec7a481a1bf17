"""Editing: command transitions and the host session."""

from seoedit.editor.coordinator import EditCoordinator, apply
from seoedit.editor.session import EditorSession

__all__ = ["EditCoordinator", "EditorSession", "apply"]
