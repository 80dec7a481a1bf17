"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from seoedit.models.commands import (
    AddTag,
    CommandAdapter,
    PagePatch,
    SetEditingTag,
    TagPatch,
    UpdateTag,
)
from seoedit.models.document import (
    Block,
    DocumentSummary,
    Page,
    Tag,
    TagStatus,
    find_duplicate_ids,
    iter_ids,
)
from seoedit.models.state import EditorState
from seoedit.utils.ids import sequential_ids


class TestTagStatus:
    """Test the derived tag status."""

    def test_added_when_only_new_content(self):
        """Test tag with only new content is 'added'."""
        tag = Tag(id="t", type="h1", new_content="New")
        assert tag.status == TagStatus.ADDED

    def test_removed_when_only_old_content(self):
        """Test tag with only old content is 'removed'."""
        tag = Tag(id="t", type="h1", old_content="Old")
        assert tag.status == TagStatus.REMOVED

    def test_modified_when_both_present(self):
        """Test tag with old and new content is 'modified'."""
        tag = Tag(id="t", type="h1", old_content="Old", new_content="New")
        assert tag.status == TagStatus.MODIFIED

    def test_pending_when_both_empty(self):
        """Test empty tag is 'pending'."""
        assert Tag(id="t").status == TagStatus.PENDING

    def test_whitespace_counts_as_empty(self):
        """Test whitespace-only content does not count as content."""
        tag = Tag(id="t", old_content="   ", new_content="\n New ")
        assert tag.status == TagStatus.ADDED

    def test_status_is_not_serialized(self):
        """Test status is derived, not stored."""
        tag = Tag(id="t", old_content="Old", new_content="New")
        assert "status" not in tag.model_dump()

    def test_status_follows_content_changes(self):
        """Test status is recomputed from current content."""
        tag = Tag(id="t", old_content="Old")
        assert tag.status == TagStatus.REMOVED

        tag.new_content = "New"
        assert tag.status == TagStatus.MODIFIED


class TestDocumentTree:
    """Test Page/Block lookups and id helpers."""

    def test_defaults_are_empty(self):
        """Test new entities start empty."""
        tag = Tag(id="t")
        block = Block(id="b")
        page = Page(id="p")

        assert (tag.type, tag.old_content, tag.new_content) == ("", "", "")
        assert block.name == "" and block.tags == []
        assert page.name == "" and page.blocks == []

    def test_find_block_and_tag(self, sample_state):
        """Test finding blocks on a page and tags in a block."""
        home = sample_state.pages[0]

        block = home.find_block("block-title")
        assert block.name == "Title"
        assert block.find_tag("tag-meta").type == "meta"
        assert home.find_block("block-intro") is None
        assert block.find_tag("tag-p") is None

    def test_iter_ids_in_document_order(self, sample_state):
        """Test ids are yielded page by page, depth first."""
        assert list(iter_ids(sample_state.pages)) == [
            "home", "block-title", "tag-h1", "tag-meta", "block-body",
            "about", "block-intro", "tag-p",
        ]

    def test_find_duplicate_ids_across_levels(self):
        """Test duplicates are found even between a page and a tag."""
        pages = [
            Page(id="x", blocks=[Block(id="b", tags=[Tag(id="x")])]),
            Page(id="p2", blocks=[Block(id="b")]),
        ]
        assert find_duplicate_ids(pages) == {"x", "b"}


class TestDocumentSummary:
    """Test summary counts."""

    def test_summary_counts(self, sample_state):
        """Test page, block, tag and status counts."""
        summary = DocumentSummary.from_pages(sample_state.pages)

        assert summary.page_count == 2
        assert summary.block_count == 3
        assert summary.tag_count == 3
        assert summary.status_counts == {
            TagStatus.MODIFIED: 1,
            TagStatus.ADDED: 1,
            TagStatus.REMOVED: 1,
        }

    def test_summary_of_empty_document(self):
        """Test summary of a page with nothing on it."""
        summary = DocumentSummary.from_pages([Page(id="p")])

        assert summary.page_count == 1
        assert summary.block_count == 0
        assert summary.tag_count == 0
        assert summary.status_counts == {}


class TestEditorState:
    """Test EditorState invariants."""

    def test_initial_state(self):
        """Test a fresh document has one current, empty page."""
        state = EditorState.initial(id_factory=sequential_ids("p"))

        assert len(state.pages) == 1
        assert state.pages[0].name == "首頁"
        assert state.pages[0].blocks == []
        assert state.current_page_id == "p-1"
        assert state.editing_tag_id is None
        assert not state.is_editing

    def test_initial_state_custom_name(self):
        """Test the initial page name can be chosen."""
        state = EditorState.initial(page_name="Home")
        assert state.current_page.name == "Home"

    def test_pages_cannot_be_empty(self):
        """Test a state needs at least one page."""
        with pytest.raises(ValidationError):
            EditorState(pages=[])

    def test_current_page_must_exist(self):
        """Test current page pointer must name a page."""
        with pytest.raises(ValidationError, match="Current page does not exist"):
            EditorState(pages=[Page(id="p")], current_page_id="missing")

    def test_editing_tag_must_exist(self):
        """Test editing pointer must name a tag."""
        with pytest.raises(ValidationError, match="Editing tag does not exist"):
            EditorState(pages=[Page(id="p")], editing_tag_id="missing")

    def test_ids_must_be_unique(self):
        """Test duplicate ids are rejected."""
        with pytest.raises(ValidationError, match="Duplicate ids"):
            EditorState(pages=[Page(id="p"), Page(id="p")])

    def test_lookups_across_pages(self, sample_state):
        """Test finding pages, blocks and tags anywhere in the document."""
        assert sample_state.find_page("about").name == "About"
        assert sample_state.find_block("block-intro").name == "Intro"
        assert sample_state.find_tag("tag-p").type == "p"
        assert sample_state.find_tag("missing") is None
        assert sample_state.current_page.id == "home"


class TestCommands:
    """Test command and patch models."""

    def test_patch_changes_only_include_set_values(self):
        """Test unset and None fields are left out of a patch."""
        patch = TagPatch(type="h2", new_content=None)
        assert patch.changes() == {"type": "h2"}

    def test_patch_keeps_empty_strings(self):
        """Test clearing a field with an empty string is a change."""
        assert TagPatch(old_content="").changes() == {"old_content": ""}

    def test_patch_rejects_id(self):
        """Test patches cannot change identity."""
        with pytest.raises(ValidationError):
            PagePatch(id="other")

    def test_command_from_plain_data(self):
        """Test commands validate from dicts using the kind discriminator."""
        command = CommandAdapter.validate_python(
            {"kind": "update_tag", "block_id": "b", "tag_id": "t", "patch": {"type": "h1"}}
        )

        assert isinstance(command, UpdateTag)
        assert command.patch.changes() == {"type": "h1"}

    def test_set_editing_tag_defaults_to_clear(self):
        """Test SetEditingTag without a tag closes editing."""
        assert SetEditingTag().tag_id is None

    def test_unknown_kind_is_rejected(self):
        """Test validation fails for an unknown command kind."""
        with pytest.raises(ValidationError):
            CommandAdapter.validate_python({"kind": "toggle_sidebar"})

    def test_command_kind_literal(self):
        """Test commands carry their kind."""
        assert AddTag(block_id="b").kind == "add_tag"
