"""Document tree models: Page → Block → Tag."""

from collections import Counter
from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, Field


class TagStatus(str, Enum):
    """Change status of a tag, derived from its old/new content."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    PENDING = "pending"


class Tag(BaseModel):
    """A single SEO change record: a label plus an old/new content pair."""

    id: str = Field(
        ...,
        description="Process-unique tag identifier"
    )

    type: str = Field(
        default="",
        description="Free-form short label (e.g. 'h1', 'title', 'meta')"
    )

    old_content: str = Field(
        default="",
        description="Content currently on the page"
    )

    new_content: str = Field(
        default="",
        description="Content that should replace it"
    )

    @property
    def status(self) -> TagStatus:
        """Derive the change status. Whitespace-only content counts as empty."""
        has_old = bool(self.old_content.strip())
        has_new = bool(self.new_content.strip())

        if not has_old and has_new:
            return TagStatus.ADDED
        if has_old and not has_new:
            return TagStatus.REMOVED
        if has_old and has_new:
            return TagStatus.MODIFIED
        return TagStatus.PENDING

    model_config = {"frozen": False}


class Block(BaseModel):
    """A named grouping of tag edits within a page."""

    id: str = Field(
        ...,
        description="Process-unique block identifier"
    )

    name: str = Field(
        default="",
        description="Display name of the block"
    )

    tags: list[Tag] = Field(
        default_factory=list,
        description="Tags in display order"
    )

    def find_tag(self, tag_id: str) -> Optional[Tag]:
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        return None

    model_config = {"frozen": False}


class Page(BaseModel):
    """Top-level container of blocks for one target page's SEO content."""

    id: str = Field(
        ...,
        description="Process-unique page identifier"
    )

    name: str = Field(
        default="",
        description="Display name of the page"
    )

    blocks: list[Block] = Field(
        default_factory=list,
        description="Blocks in display order"
    )

    def find_block(self, block_id: str) -> Optional[Block]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    model_config = {"frozen": False}


class DocumentSummary(BaseModel):
    """Counts over a page list, shown next to import/export."""

    page_count: int = Field(default=0, ge=0)
    block_count: int = Field(default=0, ge=0)
    tag_count: int = Field(default=0, ge=0)
    status_counts: dict[TagStatus, int] = Field(
        default_factory=dict,
        description="Number of tags per derived status (statuses with no tags are omitted)"
    )

    @classmethod
    def from_pages(cls, pages: Iterable[Page]) -> "DocumentSummary":
        pages = list(pages)
        blocks = [block for page in pages for block in page.blocks]
        tags = [tag for block in blocks for tag in block.tags]
        return cls(
            page_count=len(pages),
            block_count=len(blocks),
            tag_count=len(tags),
            status_counts=dict(Counter(tag.status for tag in tags)),
        )

    model_config = {"frozen": True}


def iter_ids(pages: Iterable[Page]) -> Iterator[str]:
    """Yield every page, block and tag id in document order."""
    for page in pages:
        yield page.id
        for block in page.blocks:
            yield block.id
            for tag in block.tags:
                yield tag.id


def find_duplicate_ids(pages: Iterable[Page]) -> set[str]:
    """Return ids that occur more than once anywhere in the tree."""
    counts = Counter(iter_ids(pages))
    return {entity_id for entity_id, count in counts.items() if count > 1}


def contains_tag(pages: Iterable[Page], tag_id: str) -> bool:
    return any(
        tag.id == tag_id
        for page in pages
        for block in page.blocks
        for tag in block.tags
    )
