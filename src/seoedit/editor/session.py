"""Editor session: owns the current document state for a host.

The session is the only stateful piece. It feeds commands to the coordinator,
imports markdown as a single replacement (decode fully, then SetPages) and
exports the current pages.
"""

from typing import Optional

from seoedit.editor.coordinator import EditCoordinator
from seoedit.markdown.codec import decode, encode
from seoedit.models.commands import Command, SetPages
from seoedit.models.config import Config
from seoedit.models.document import Block, DocumentSummary, Page
from seoedit.models.state import EditorState
from seoedit.utils.ids import IdFactory, generate_random_uuid
from seoedit.utils.logging import get_logger


logger = get_logger(__name__)


class EditorSession:
    """
    Current editor state plus the machinery to change it.

    Example:
        >>> session = EditorSession()
        >>> session.dispatch(AddBlock())
        True
        >>> markdown = session.export_markdown()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        id_factory: IdFactory = generate_random_uuid,
        state: Optional[EditorState] = None,
    ) -> None:
        self.config = config or Config()
        self.id_factory = id_factory
        self.coordinator = EditCoordinator.from_config(self.config, id_factory)
        self.state = state or EditorState.initial(self.config.names.initial_page, id_factory)

    @classmethod
    def from_markdown(
        cls,
        text: str,
        config: Optional[Config] = None,
        id_factory: IdFactory = generate_random_uuid,
    ) -> "EditorSession":
        session = cls(config=config, id_factory=id_factory)
        session.import_markdown(text)
        return session

    def dispatch(self, command: Command) -> bool:
        """Apply a command.

        Returns:
            True if the state changed, False if the command was ignored
        """
        next_state = self.coordinator.apply(self.state, command)
        if next_state is self.state:
            return False
        self.state = next_state
        return True

    def import_markdown(self, text: str) -> DocumentSummary:
        """Replace the whole document with the pages decoded from ``text``.

        Returns:
            Summary of the imported document

        Raises:
            ValueError: If the decoded pages could not be installed (the
                current state is kept)
        """
        pages = decode(
            text,
            id_factory=self.id_factory,
            default_page_name=self.config.names.initial_page,
        )
        if not self.dispatch(SetPages(pages=pages)):
            logger.error("markdown_import_rejected", pages=len(pages))
            raise ValueError("Imported document was rejected; the current document is unchanged")

        summary = self.summary()
        logger.info(
            "markdown_imported",
            pages=summary.page_count,
            blocks=summary.block_count,
            tags=summary.tag_count,
        )
        return summary

    def export_markdown(self) -> str:
        markdown = encode(self.state.pages, title=self.config.export.title or None)
        logger.info("markdown_exported", pages=len(self.state.pages), size=len(markdown))
        return markdown

    def summary(self) -> DocumentSummary:
        return DocumentSummary.from_pages(self.state.pages)

    def find_page_by_name(self, name: str) -> Optional[Page]:
        """First page with this exact name."""
        for page in self.state.pages:
            if page.name == name:
                return page
        return None

    def block_at(self, page: Page, number: int) -> Optional[Block]:
        """Block by its 1-based position on ``page``, as numbered in the export."""
        if 1 <= number <= len(page.blocks):
            return page.blocks[number - 1]
        return None
