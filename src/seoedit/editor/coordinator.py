"""Edit coordinator: pure state transitions for editor commands.

``EditCoordinator.apply(state, command)`` returns the next state and never
raises for a well-formed command. Commands that reference unknown ids, or that
would break a state invariant, are ignored: the same state object is returned
and a ``command_ignored`` debug event is logged.

States are treated as values. The input state is never modified; the result
shares unchanged pages, blocks and tags with it.
"""

from dataclasses import dataclass
from typing import Callable

from seoedit.models.commands import (
    AddBlock,
    AddPage,
    AddTag,
    Command,
    DeleteBlock,
    DeletePage,
    DeleteTag,
    SetCurrentPage,
    SetEditingTag,
    SetPages,
    UpdateBlock,
    UpdatePage,
    UpdateTag,
)
from seoedit.models.config import Config
from seoedit.models.document import Block, Page, Tag, contains_tag, find_duplicate_ids
from seoedit.models.state import EditorState
from seoedit.utils.ids import IdFactory, generate_random_uuid
from seoedit.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_NEW_PAGE_NAME = "新頁面"
DEFAULT_NEW_BLOCK_NAME = "新區塊"


@dataclass(frozen=True)
class EditCoordinator:
    """
    Applies commands to editor states.

    Attributes:
        id_factory: Source of ids for pages, blocks and tags created by commands
        new_page_name: Name given to pages created by AddPage
        new_block_name: Name given to blocks created by AddBlock
        exclusive_lock: When True, nothing else may be opened while a tag is
            being edited: AddTag, SetEditingTag (to another tag), AddPage,
            page renames, DeletePage, SetCurrentPage and AddBlock are refused.
            When False, all of them go through and AddTag/SetEditingTag take
            over the edit pointer.
    """

    id_factory: IdFactory = generate_random_uuid
    new_page_name: str = DEFAULT_NEW_PAGE_NAME
    new_block_name: str = DEFAULT_NEW_BLOCK_NAME
    exclusive_lock: bool = True

    @classmethod
    def from_config(
        cls, config: Config, id_factory: IdFactory = generate_random_uuid
    ) -> "EditCoordinator":
        return cls(
            id_factory=id_factory,
            new_page_name=config.names.new_page,
            new_block_name=config.names.new_block,
            exclusive_lock=config.editing.exclusive_lock,
        )

    def apply(self, state: EditorState, command: Command) -> EditorState:
        """Return the state after ``command``.

        Args:
            state: Current state
            command: Any editor command

        Returns:
            The next state, or ``state`` itself if the command was ignored
        """
        if isinstance(command, SetPages):
            next_state = self._set_pages(state, command)
        elif isinstance(command, AddPage):
            next_state = self._add_page(state, command)
        elif isinstance(command, UpdatePage):
            next_state = self._update_page(state, command)
        elif isinstance(command, DeletePage):
            next_state = self._delete_page(state, command)
        elif isinstance(command, SetCurrentPage):
            next_state = self._set_current_page(state, command)
        elif isinstance(command, AddBlock):
            next_state = self._add_block(state, command)
        elif isinstance(command, UpdateBlock):
            next_state = self._update_block(state, command)
        elif isinstance(command, DeleteBlock):
            next_state = self._delete_block(state, command)
        elif isinstance(command, AddTag):
            next_state = self._add_tag(state, command)
        elif isinstance(command, UpdateTag):
            next_state = self._update_tag(state, command)
        elif isinstance(command, DeleteTag):
            next_state = self._delete_tag(state, command)
        elif isinstance(command, SetEditingTag):
            next_state = self._set_editing_tag(state, command)
        else:
            return _ignored(state, command, "unknown command")

        if next_state is state:
            return state

        logger.debug("command_applied", kind=command.kind)
        return _reconcile(next_state)

    def apply_all(self, state: EditorState, commands: list[Command]) -> EditorState:
        for command in commands:
            state = self.apply(state, command)
        return state

    def _locked(self, state: EditorState) -> bool:
        """True when the edit lock forbids opening anything else."""
        return self.exclusive_lock and state.editing_tag_id is not None

    # Pages

    def _set_pages(self, state: EditorState, command: SetPages) -> EditorState:
        if not command.pages:
            return _ignored(state, command, "a document needs at least one page")

        duplicates = find_duplicate_ids(command.pages)
        if duplicates:
            return _ignored(state, command, "duplicate ids", ids=sorted(duplicates))

        pages = list(command.pages)
        return state.model_copy(update={"pages": pages, "current_page_id": pages[0].id})

    def _add_page(self, state: EditorState, command: AddPage) -> EditorState:
        if self._locked(state):
            return _locked_out(state, command)

        page = Page(id=self.id_factory(), name=self.new_page_name)
        return state.model_copy(
            update={"pages": [*state.pages, page], "current_page_id": page.id}
        )

    def _update_page(self, state: EditorState, command: UpdatePage) -> EditorState:
        if state.find_page(command.page_id) is None:
            return _ignored(state, command, "unknown page", page_id=command.page_id)

        changes = command.patch.changes()
        if "name" in changes and self._locked(state):
            return _locked_out(state, command, page_id=command.page_id)

        pages = [
            page.model_copy(update=changes) if page.id == command.page_id else page
            for page in state.pages
        ]
        return _with_pages(state, command, pages)

    def _delete_page(self, state: EditorState, command: DeletePage) -> EditorState:
        if state.find_page(command.page_id) is None:
            return _ignored(state, command, "unknown page", page_id=command.page_id)
        if len(state.pages) <= 1:
            return _ignored(state, command, "cannot delete the last page", page_id=command.page_id)
        if self._locked(state):
            return _locked_out(state, command, page_id=command.page_id)

        remaining = [page for page in state.pages if page.id != command.page_id]
        current_page_id = state.current_page_id
        if current_page_id == command.page_id:
            current_page_id = remaining[0].id

        return state.model_copy(update={"pages": remaining, "current_page_id": current_page_id})

    def _set_current_page(self, state: EditorState, command: SetCurrentPage) -> EditorState:
        if state.find_page(command.page_id) is None:
            return _ignored(state, command, "unknown page", page_id=command.page_id)
        if state.current_page_id == command.page_id:
            return state
        if self._locked(state):
            return _locked_out(state, command, page_id=command.page_id)

        return state.model_copy(update={"current_page_id": command.page_id})

    # Blocks

    def _add_block(self, state: EditorState, command: AddBlock) -> EditorState:
        current_page = state.current_page
        if current_page is None:
            return _ignored(state, command, "no current page")
        if self._locked(state):
            return _locked_out(state, command)

        block = Block(id=self.id_factory(), name=self.new_block_name)
        pages = [
            page.model_copy(update={"blocks": [*page.blocks, block]})
            if page.id == current_page.id else page
            for page in state.pages
        ]
        return state.model_copy(update={"pages": pages})

    def _update_block(self, state: EditorState, command: UpdateBlock) -> EditorState:
        if state.find_block(command.block_id) is None:
            return _ignored(state, command, "unknown block", block_id=command.block_id)

        changes = command.patch.changes()
        pages = _map_block(
            state.pages, command.block_id, lambda block: block.model_copy(update=changes)
        )
        return _with_pages(state, command, pages)

    def _delete_block(self, state: EditorState, command: DeleteBlock) -> EditorState:
        if state.find_block(command.block_id) is None:
            return _ignored(state, command, "unknown block", block_id=command.block_id)

        pages = [
            page.model_copy(
                update={"blocks": [block for block in page.blocks if block.id != command.block_id]}
            )
            if page.find_block(command.block_id) is not None else page
            for page in state.pages
        ]
        return state.model_copy(update={"pages": pages})

    # Tags

    def _add_tag(self, state: EditorState, command: AddTag) -> EditorState:
        if state.find_block(command.block_id) is None:
            return _ignored(state, command, "unknown block", block_id=command.block_id)
        if self._locked(state):
            return _locked_out(state, command)

        tag = Tag(id=self.id_factory())
        pages = _map_block(
            state.pages,
            command.block_id,
            lambda block: block.model_copy(update={"tags": [*block.tags, tag]}),
        )
        return state.model_copy(update={"pages": pages, "editing_tag_id": tag.id})

    def _update_tag(self, state: EditorState, command: UpdateTag) -> EditorState:
        block = state.find_block(command.block_id)
        if block is None or block.find_tag(command.tag_id) is None:
            return _ignored(
                state, command, "unknown tag", block_id=command.block_id, tag_id=command.tag_id
            )

        changes = command.patch.changes()
        pages = _map_block(
            state.pages,
            command.block_id,
            lambda block: block.model_copy(
                update={
                    "tags": [
                        tag.model_copy(update=changes) if tag.id == command.tag_id else tag
                        for tag in block.tags
                    ]
                }
            ),
        )
        return state.model_copy(update={"pages": pages})

    def _delete_tag(self, state: EditorState, command: DeleteTag) -> EditorState:
        block = state.find_block(command.block_id)
        if block is None or block.find_tag(command.tag_id) is None:
            return _ignored(
                state, command, "unknown tag", block_id=command.block_id, tag_id=command.tag_id
            )

        pages = _map_block(
            state.pages,
            command.block_id,
            lambda block: block.model_copy(
                update={"tags": [tag for tag in block.tags if tag.id != command.tag_id]}
            ),
        )
        editing_tag_id = None if state.editing_tag_id == command.tag_id else state.editing_tag_id
        return state.model_copy(update={"pages": pages, "editing_tag_id": editing_tag_id})

    def _set_editing_tag(self, state: EditorState, command: SetEditingTag) -> EditorState:
        if command.tag_id == state.editing_tag_id:
            return state
        if command.tag_id is None:
            return state.model_copy(update={"editing_tag_id": None})
        if state.find_tag(command.tag_id) is None:
            return _ignored(state, command, "unknown tag", tag_id=command.tag_id)
        if self._locked(state):
            return _locked_out(state, command)

        return state.model_copy(update={"editing_tag_id": command.tag_id})


def apply(state: EditorState, command: Command) -> EditorState:
    """Apply ``command`` with the default coordinator (random ids, edit lock on)."""
    return _DEFAULT_COORDINATOR.apply(state, command)


_DEFAULT_COORDINATOR = EditCoordinator()


def _ignored(state: EditorState, command: Command, reason: str, **context) -> EditorState:
    logger.debug("command_ignored", kind=getattr(command, "kind", None), reason=reason, **context)
    return state


def _locked_out(state: EditorState, command: Command, **context) -> EditorState:
    return _ignored(
        state,
        command,
        "another tag is being edited",
        editing_tag_id=state.editing_tag_id,
        **context,
    )


def _with_pages(state: EditorState, command: Command, pages: list[Page]) -> EditorState:
    """Install patched pages unless the patch brought in clashing ids."""
    duplicates = find_duplicate_ids(pages)
    if duplicates:
        return _ignored(state, command, "duplicate ids", ids=sorted(duplicates))
    return state.model_copy(update={"pages": pages})


def _map_block(
    pages: list[Page], block_id: str, transform: Callable[[Block], Block]
) -> list[Page]:
    """Copy the page holding ``block_id`` with that block transformed."""
    result = []
    for page in pages:
        if page.find_block(block_id) is None:
            result.append(page)
            continue
        blocks = [transform(block) if block.id == block_id else block for block in page.blocks]
        result.append(page.model_copy(update={"blocks": blocks}))
    return result


def _reconcile(state: EditorState) -> EditorState:
    """Drop pointers left dangling by a removal or replacement."""
    updates = {}
    if state.editing_tag_id is not None and not contains_tag(state.pages, state.editing_tag_id):
        updates["editing_tag_id"] = None
    if state.current_page_id is not None and state.find_page(state.current_page_id) is None:
        updates["current_page_id"] = state.pages[0].id if state.pages else None
    if not updates:
        return state
    return state.model_copy(update=updates)
