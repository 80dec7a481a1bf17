"""Markdown interchange format for SEO documents.

This module converts a page list to a reviewable markdown document and back:

    # SEO Content

    ## Page: 首頁

    ### Block 1: Title

    | Type | Original Content | Updated Content |
    | --- | --- | --- |
    | h1 | Old Title | New Title |

Empty fields are written as ``-``. Inside cells a literal ``|`` is escaped as
``\\|`` and line breaks are written as ``<br>``.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

from seoedit.models.document import Block, Page, Tag
from seoedit.models.state import DEFAULT_PAGE_NAME
from seoedit.utils.ids import IdFactory, generate_random_uuid
from seoedit.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_TITLE = "SEO Content"
PAGE_HEADING_PREFIX = "## Page: "
BLOCK_HEADING_PREFIX = "### Block "
HEADER_LABELS = ("Type", "Original Content", "Updated Content")
EMPTY_PLACEHOLDER = "-"
LINE_BREAK = "<br>"

_PAGE_HEADING_RE = re.compile(r"^##\s+Page:[ \t]*(.*?)\s*$")
_BLOCK_HEADING_RE = re.compile(r"^###\s+Block\s+(\d+):[ \t]*(.*?)\s*$")
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")


class ScanState(str, Enum):
    """Where the decoder is relative to a tag table."""

    SCANNING = "scanning"
    HEADER_SEEN = "header_seen"
    IN_ROWS = "in_rows"


def encode(pages: Iterable[Page], title: Optional[str] = DEFAULT_TITLE) -> str:
    """Render pages to the markdown interchange format.

    Pages, blocks and tags are written in sequence order. Pages without blocks
    and blocks without tags still get their heading; a block's table is only
    written when it has tags.

    Args:
        pages: Pages to render
        title: Leading "# " title line (None or "" omits it)

    Returns:
        Markdown text ending in a single newline ("" when there is nothing to write)
    """
    lines: list[str] = []

    if title:
        lines.extend([f"# {_single_line(title)}", ""])

    for page in pages:
        lines.extend([f"{PAGE_HEADING_PREFIX}{_single_line(page.name)}", ""])

        for index, block in enumerate(page.blocks, start=1):
            lines.extend([f"{BLOCK_HEADING_PREFIX}{index}: {_single_line(block.name)}", ""])

            if block.tags:
                lines.append(_format_row(HEADER_LABELS))
                lines.append(_format_row(["---"] * len(HEADER_LABELS)))
                lines.extend(_format_row(_tag_cells(tag)) for tag in block.tags)
                lines.append("")

    if not lines:
        return ""
    return "\n".join(lines).rstrip("\n") + "\n"


def decode(
    text: str,
    id_factory: IdFactory = generate_random_uuid,
    default_page_name: str = DEFAULT_PAGE_NAME,
) -> list[Page]:
    """Parse the markdown interchange format into pages.

    Scans line by line. Headings open pages and blocks at any point; tag rows
    are only read after a header row and its separator. Anything the scanner
    does not recognise is skipped, so this never raises.

    Identifiers are not part of the format: every page, block and tag gets a
    fresh id from ``id_factory``.

    Args:
        text: Markdown text (any line endings)
        id_factory: Identifier source for the created entities
        default_page_name: Name of the page created when blocks appear before
            any page heading, or when the text has no pages at all

    Returns:
        Non-empty list of pages
    """
    builder = _DocumentBuilder(id_factory=id_factory, default_page_name=default_page_name)
    state = ScanState.SCANNING

    for line in text.splitlines():
        stripped = line.strip()

        if page_match := _PAGE_HEADING_RE.match(stripped):
            builder.open_page(page_match.group(1))
            state = ScanState.SCANNING
            continue

        if block_match := _BLOCK_HEADING_RE.match(stripped):
            builder.open_block(block_match.group(2))
            state = ScanState.SCANNING
            continue

        if state is ScanState.SCANNING:
            if (
                builder.current_block is not None
                and _is_table_line(stripped)
                and _is_header(_split_cells(stripped))
            ):
                state = ScanState.HEADER_SEEN
            else:
                builder.skip(stripped)

        elif state is ScanState.HEADER_SEEN:
            if _is_table_line(stripped) and _is_separator(_split_cells(stripped)):
                state = ScanState.IN_ROWS
            else:
                # Header without separator is not a table
                state = ScanState.SCANNING
                builder.skip(stripped)

        elif state is ScanState.IN_ROWS:
            if not _is_table_line(stripped):
                state = ScanState.SCANNING
                builder.skip(stripped)
                continue

            # Only the line after the header is a separator; dash-only rows are tags
            cells = _split_cells(stripped)
            if len(cells) < len(HEADER_LABELS):
                builder.skip(stripped)
                continue

            # Cells past the third are dropped
            tag_type, old_content, new_content = (_unescape_cell(cell) for cell in cells[:3])
            builder.add_tag(tag_type, old_content, new_content)

    pages = builder.build()
    logger.debug(
        "markdown_decoded",
        pages=len(pages),
        blocks=sum(len(page.blocks) for page in pages),
        tags=sum(len(block.tags) for page in pages for block in page.blocks),
        skipped_lines=builder.skipped_lines,
    )
    return pages


@dataclass
class _DocumentBuilder:
    """Accumulates pages while the decoder scans."""

    id_factory: IdFactory
    default_page_name: str
    pages: list[Page] = field(default_factory=list)
    current_block: Optional[Block] = None
    skipped_lines: int = 0

    def open_page(self, name: str) -> Page:
        page = Page(id=self.id_factory(), name=name)
        self.pages.append(page)
        self.current_block = None
        return page

    def open_block(self, name: str) -> Block:
        if not self.pages:
            self.open_page(self.default_page_name)
        block = Block(id=self.id_factory(), name=name)
        self.pages[-1].blocks.append(block)
        self.current_block = block
        return block

    def add_tag(self, tag_type: str, old_content: str, new_content: str) -> None:
        self.current_block.tags.append(
            Tag(
                id=self.id_factory(),
                type=tag_type,
                old_content=old_content,
                new_content=new_content,
            )
        )

    def skip(self, stripped_line: str) -> None:
        if stripped_line:
            self.skipped_lines += 1

    def build(self) -> list[Page]:
        if not self.pages:
            return [Page(id=self.id_factory(), name=self.default_page_name)]
        return self.pages


def _single_line(value: str) -> str:
    """Headings must stay on one line."""
    return " ".join(value.splitlines())


def _tag_cells(tag: Tag) -> list[str]:
    return [_escape_cell(tag.type), _escape_cell(tag.old_content), _escape_cell(tag.new_content)]


def _format_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def _escape_cell(value: str) -> str:
    value = value.strip()
    if not value:
        return EMPTY_PLACEHOLDER
    value = value.replace("|", "\\|")
    return LINE_BREAK.join(value.splitlines())


def _unescape_cell(cell: str) -> str:
    if cell == EMPTY_PLACEHOLDER:
        return ""
    return cell.replace(LINE_BREAK, "\n").replace("\\|", "|")


def _is_table_line(stripped_line: str) -> bool:
    return stripped_line.startswith("|") or (
        "|" in stripped_line and stripped_line.endswith("|")
    )


def _split_cells(stripped_line: str) -> list[str]:
    """Split a row on unescaped pipes, dropping empty fragments."""
    cells = (part.strip() for part in _CELL_SPLIT_RE.split(stripped_line))
    return [cell for cell in cells if cell]


def _is_header(cells: list[str]) -> bool:
    if len(cells) < len(HEADER_LABELS):
        return False
    return [cell.lower() for cell in cells[: len(HEADER_LABELS)]] == [
        label.lower() for label in HEADER_LABELS
    ]


def _is_separator(cells: list[str]) -> bool:
    return bool(cells) and all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)
