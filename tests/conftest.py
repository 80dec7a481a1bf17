"""Shared test fixtures for all test modules."""

from pathlib import Path

import pytest

from seoedit.editor.coordinator import EditCoordinator
from seoedit.models.document import Block, Page, Tag
from seoedit.models.state import EditorState
from seoedit.utils.ids import sequential_ids


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep logs and config lookups out of the real home directory."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    for name in (
        "SEOEDIT_LOG_LEVEL",
        "SEOEDIT_EXPORT_TITLE",
        "SEOEDIT_EXPORT_FILENAME_PREFIX",
        "SEOEDIT_EDITING_EXCLUSIVE_LOCK",
    ):
        monkeypatch.delenv(name, raising=False)
    return fake_home


@pytest.fixture
def coordinator():
    """Coordinator with predictable ids ("new-1", "new-2", ...)."""
    return EditCoordinator(id_factory=sequential_ids("new"))


@pytest.fixture
def sample_state():
    """
    Two pages:

    - home: block-title (tag-h1, tag-meta), block-body (no tags)
    - about: block-intro (tag-p)
    """
    home = Page(
        id="home",
        name="首頁",
        blocks=[
            Block(
                id="block-title",
                name="Title",
                tags=[
                    Tag(id="tag-h1", type="h1", old_content="Old Title", new_content="New Title"),
                    Tag(id="tag-meta", type="meta", old_content="", new_content="Fresh description"),
                ],
            ),
            Block(id="block-body", name="Body"),
        ],
    )
    about = Page(
        id="about",
        name="About",
        blocks=[
            Block(
                id="block-intro",
                name="Intro",
                tags=[Tag(id="tag-p", type="p", old_content="We are old", new_content="")],
            ),
        ],
    )
    return EditorState(pages=[home, about], current_page_id="home")
