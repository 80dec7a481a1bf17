"""Editor commands applied by the edit coordinator.

Each command is a small pydantic model tagged with a ``kind`` literal, so a
command list can be validated from plain data (e.g. JSON) through
``CommandAdapter``.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from seoedit.models.document import Block, Page, Tag


class Patch(BaseModel):
    """Partial update. Only fields that were explicitly set to a value apply."""

    def changes(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }

    model_config = {"frozen": True, "extra": "forbid"}


class PagePatch(Patch):
    name: Optional[str] = None
    blocks: Optional[list[Block]] = None


class BlockPatch(Patch):
    name: Optional[str] = None
    tags: Optional[list[Tag]] = None


class TagPatch(Patch):
    type: Optional[str] = None
    old_content: Optional[str] = None
    new_content: Optional[str] = None


class SetPages(BaseModel):
    kind: Literal["set_pages"] = "set_pages"
    pages: list[Page]

    model_config = {"frozen": True}


class AddPage(BaseModel):
    kind: Literal["add_page"] = "add_page"

    model_config = {"frozen": True}


class UpdatePage(BaseModel):
    kind: Literal["update_page"] = "update_page"
    page_id: str
    patch: PagePatch

    model_config = {"frozen": True}


class DeletePage(BaseModel):
    kind: Literal["delete_page"] = "delete_page"
    page_id: str

    model_config = {"frozen": True}


class SetCurrentPage(BaseModel):
    kind: Literal["set_current_page"] = "set_current_page"
    page_id: str

    model_config = {"frozen": True}


class AddBlock(BaseModel):
    kind: Literal["add_block"] = "add_block"

    model_config = {"frozen": True}


class UpdateBlock(BaseModel):
    kind: Literal["update_block"] = "update_block"
    block_id: str
    patch: BlockPatch

    model_config = {"frozen": True}


class DeleteBlock(BaseModel):
    kind: Literal["delete_block"] = "delete_block"
    block_id: str

    model_config = {"frozen": True}


class AddTag(BaseModel):
    kind: Literal["add_tag"] = "add_tag"
    block_id: str

    model_config = {"frozen": True}


class UpdateTag(BaseModel):
    kind: Literal["update_tag"] = "update_tag"
    block_id: str
    tag_id: str
    patch: TagPatch

    model_config = {"frozen": True}


class DeleteTag(BaseModel):
    kind: Literal["delete_tag"] = "delete_tag"
    block_id: str
    tag_id: str

    model_config = {"frozen": True}


class SetEditingTag(BaseModel):
    kind: Literal["set_editing_tag"] = "set_editing_tag"
    tag_id: Optional[str] = Field(
        default=None,
        description="Tag to open for editing, or None to close the current one"
    )

    model_config = {"frozen": True}


Command = Annotated[
    Union[
        SetPages,
        AddPage,
        UpdatePage,
        DeletePage,
        SetCurrentPage,
        AddBlock,
        UpdateBlock,
        DeleteBlock,
        AddTag,
        UpdateTag,
        DeleteTag,
        SetEditingTag,
    ],
    Field(discriminator="kind"),
]

CommandAdapter: TypeAdapter[Command] = TypeAdapter(Command)
