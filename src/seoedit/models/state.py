"""EditorState: the whole document plus the editor's pointers."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from seoedit.models.document import Block, Page, Tag, contains_tag, find_duplicate_ids
from seoedit.utils.ids import IdFactory, generate_random_uuid


DEFAULT_PAGE_NAME = "首頁"


class EditorState(BaseModel):
    """
    Document state owned by the host and replaced by each command.

    Invariants (checked on construction, preserved by the coordinator):
    - pages is never empty
    - ids are unique across pages, blocks and tags
    - current_page_id, when set, names an existing page
    - editing_tag_id, when set, names an existing tag
    """

    pages: list[Page] = Field(
        ...,
        min_length=1,
        description="Pages in display order"
    )

    current_page_id: Optional[str] = Field(
        default=None,
        description="Page shown in the editor"
    )

    editing_tag_id: Optional[str] = Field(
        default=None,
        description="The single tag open for editing, if any"
    )

    @model_validator(mode="after")
    def check_references(self) -> "EditorState":
        duplicates = find_duplicate_ids(self.pages)
        if duplicates:
            raise ValueError(f"Duplicate ids in document: {sorted(duplicates)}")
        if self.current_page_id is not None and self.find_page(self.current_page_id) is None:
            raise ValueError(f"Current page does not exist: {self.current_page_id}")
        if self.editing_tag_id is not None and not contains_tag(self.pages, self.editing_tag_id):
            raise ValueError(f"Editing tag does not exist: {self.editing_tag_id}")
        return self

    @classmethod
    def initial(
        cls,
        page_name: str = DEFAULT_PAGE_NAME,
        id_factory: IdFactory = generate_random_uuid,
    ) -> "EditorState":
        """Fresh document: one empty page, which is current."""
        page = Page(id=id_factory(), name=page_name)
        return cls(pages=[page], current_page_id=page.id)

    @property
    def current_page(self) -> Optional[Page]:
        if self.current_page_id is None:
            return None
        return self.find_page(self.current_page_id)

    @property
    def is_editing(self) -> bool:
        return self.editing_tag_id is not None

    def find_page(self, page_id: str) -> Optional[Page]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def find_block(self, block_id: str) -> Optional[Block]:
        """Find a block on any page."""
        for page in self.pages:
            block = page.find_block(block_id)
            if block is not None:
                return block
        return None

    def find_tag(self, tag_id: str) -> Optional[Tag]:
        """Find a tag in any block on any page."""
        for page in self.pages:
            for block in page.blocks:
                tag = block.find_tag(tag_id)
                if tag is not None:
                    return tag
        return None

    model_config = {"frozen": False}
