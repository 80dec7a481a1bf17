"""CLI entry point for the SEO editor."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from seoedit import __version__
from seoedit.config import load_config
from seoedit.editor.session import EditorSession
from seoedit.models.commands import (
    AddBlock,
    AddPage,
    AddTag,
    Command,
    DeletePage,
    DeleteTag,
    SetCurrentPage,
    SetEditingTag,
    UpdateBlock,
    UpdatePage,
    UpdateTag,
    BlockPatch,
    PagePatch,
    TagPatch,
)
from seoedit.models.config import Config
from seoedit.models.document import Block, DocumentSummary, Page, TagStatus
from seoedit.services.exceptions import FileModifiedError
from seoedit.services.file_monitor import FileMonitor
from seoedit.services.file_operations import atomic_write, export_filename, read_document
from seoedit.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()

STATUS_STYLES = {
    TagStatus.ADDED: "green",
    TagStatus.REMOVED: "red",
    TagStatus.MODIFIED: "yellow",
    TagStatus.PENDING: "dim",
}

DOCUMENT_ARGUMENT = click.argument(
    "document", type=click.Path(dir_okay=False, path_type=Path)
)
PAGE_OPTION = click.option(
    "--page", "page_name", default=None, help="Page name (default: first page)"
)


def get_config(ctx: click.Context) -> Config:
    """
    Load configuration once per invocation.

    Raises:
        click.ClickException: If the config file or an override is invalid
    """
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = load_config(ctx.obj.get("config_path"))
        except ValueError as e:
            raise click.ClickException(str(e))
    return ctx.obj["config"]


def open_document(path: Path, config: Config, monitor: FileMonitor) -> EditorSession:
    """
    Read and import a markdown document.

    Raises:
        click.ClickException: If the file cannot be read or imported
    """
    try:
        text = read_document(path, monitor)
    except FileNotFoundError:
        logger.error("document_not_found", path=str(path))
        raise click.ClickException(f"Document not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("document_read_error", path=str(path), error=str(e))
        raise click.ClickException(f"Cannot read {path}: {e}")

    try:
        return EditorSession.from_markdown(text, config=config)
    except ValueError as e:
        raise click.ClickException(str(e))


def save_document(session: EditorSession, path: Path, monitor: Optional[FileMonitor] = None) -> None:
    """
    Write the session's document back to disk.

    Raises:
        click.ClickException: If the file changed since it was read or cannot be written
    """
    try:
        atomic_write(path, session.export_markdown(), monitor)
    except FileModifiedError as e:
        raise click.ClickException(f"{e}\nRe-run the command to apply it to the new version.")
    except OSError as e:
        raise click.ClickException(f"Cannot write {path}: {e}")
    logger.info("document_saved", path=str(path))


def run_command(session: EditorSession, command: Command, failure: str) -> None:
    """Dispatch a command, turning a refusal into a CLI error."""
    if not session.dispatch(command):
        logger.warning("command_refused", kind=command.kind, reason=failure)
        raise click.ClickException(failure)


def resolve_page(session: EditorSession, page_name: Optional[str]) -> Page:
    if page_name is None:
        return session.state.current_page or session.state.pages[0]
    page = session.find_page_by_name(page_name)
    if page is None:
        raise click.ClickException(f"No page named '{page_name}'")
    return page


def resolve_block(session: EditorSession, page: Page, number: int) -> Block:
    block = session.block_at(page, number)
    if block is None:
        raise click.ClickException(
            f"Page '{page.name}' has no block {number} (it has {len(page.blocks)})"
        )
    return block


def format_summary(summary: DocumentSummary) -> str:
    parts = [
        f"{summary.page_count} page(s)",
        f"{summary.block_count} block(s)",
        f"{summary.tag_count} tag(s)",
    ]
    statuses = ", ".join(
        f"{count} {status.value}"
        for status, count in summary.status_counts.items()
    )
    text = ", ".join(parts)
    return f"{text} ({statuses})" if statuses else text


@click.group()
@click.version_option(version=__version__, prog_name="seoedit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.config/seoedit/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """seoedit: Maintain SEO text changes as reviewable markdown."""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@DOCUMENT_ARGUMENT
@click.option("--page", "page_name", default=None, help="Name of the first page")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def new(ctx: click.Context, document: Path, page_name: Optional[str], force: bool):
    """Create a new document with one empty page."""
    logger.info("new_command_started", path=str(document))
    if document.exists() and not force:
        raise click.ClickException(f"{document} already exists (use --force to overwrite)")

    session = EditorSession(config=get_config(ctx))
    if page_name:
        run_command(
            session,
            UpdatePage(page_id=session.state.pages[0].id, patch=PagePatch(name=page_name)),
            "Cannot name the page",
        )

    save_document(session, document)
    click.echo(f"Created {document}")


@cli.command()
@DOCUMENT_ARGUMENT
@click.pass_context
def show(ctx: click.Context, document: Path):
    """Show pages, blocks and tags with their change status."""
    session = open_document(document, get_config(ctx), FileMonitor())

    table = Table(title=escape(str(document)), show_lines=False)
    table.add_column("Page")
    table.add_column("Block")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Original Content")
    table.add_column("Updated Content")

    for page in session.state.pages:
        if not page.blocks:
            table.add_row(escape(page.name), "", "", "", "", "")
        for number, block in enumerate(page.blocks, start=1):
            block_label = escape(f"{number}. {block.name}")
            if not block.tags:
                table.add_row(escape(page.name), block_label, "", "", "", "")
            for tag in block.tags:
                style = STATUS_STYLES[tag.status]
                table.add_row(
                    escape(page.name),
                    block_label,
                    escape(tag.type),
                    f"[{style}]{tag.status.value}[/{style}]",
                    escape(tag.old_content),
                    escape(tag.new_content),
                )

    console.print(table)
    console.print(format_summary(session.summary()))


@cli.command()
@DOCUMENT_ARGUMENT
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for the dated export file",
)
@click.pass_context
def export(ctx: click.Context, document: Path, output_dir: Path):
    """Write a normalised, dated copy of the document."""
    config = get_config(ctx)
    session = open_document(document, config, FileMonitor())

    summary = session.summary()
    if summary.block_count == 0:
        logger.warning("export_without_blocks", path=str(document))
        click.echo("Warning: the document has no blocks to review", err=True)

    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / export_filename(config.export.filename_prefix)
    save_document(session, target)
    click.echo(f"Exported {format_summary(summary)} to {target}")


@cli.command("add-page")
@DOCUMENT_ARGUMENT
@click.argument("name")
@click.pass_context
def add_page(ctx: click.Context, document: Path, name: str):
    """Append a page named NAME."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)

    run_command(session, AddPage(), "Cannot add a page")
    run_command(
        session,
        UpdatePage(page_id=session.state.current_page_id, patch=PagePatch(name=name)),
        "Cannot name the new page",
    )

    save_document(session, document, monitor)
    click.echo(f"Added page '{name}'")


@cli.command("rename-page")
@DOCUMENT_ARGUMENT
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename_page(ctx: click.Context, document: Path, old_name: str, new_name: str):
    """Rename page OLD_NAME to NEW_NAME."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)
    page = resolve_page(session, old_name)

    if new_name != old_name:
        run_command(
            session,
            UpdatePage(page_id=page.id, patch=PagePatch(name=new_name)),
            f"Cannot rename page '{old_name}'",
        )

    save_document(session, document, monitor)
    click.echo(f"Renamed page '{old_name}' to '{new_name}'")


@cli.command("delete-page")
@DOCUMENT_ARGUMENT
@click.argument("name")
@click.pass_context
def delete_page(ctx: click.Context, document: Path, name: str):
    """Delete page NAME and everything on it."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)
    page = resolve_page(session, name)

    run_command(session, DeletePage(page_id=page.id), "Cannot delete the last page")

    save_document(session, document, monitor)
    click.echo(f"Deleted page '{name}'")


@cli.command("add-block")
@DOCUMENT_ARGUMENT
@click.argument("name")
@PAGE_OPTION
@click.pass_context
def add_block(ctx: click.Context, document: Path, name: str, page_name: Optional[str]):
    """Append a block named NAME to a page."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)
    page = resolve_page(session, page_name)

    if session.state.current_page_id != page.id:
        run_command(session, SetCurrentPage(page_id=page.id), f"Cannot open page '{page.name}'")
    run_command(session, AddBlock(), f"Cannot add a block to '{page.name}'")

    block = session.state.current_page.blocks[-1]
    run_command(
        session,
        UpdateBlock(block_id=block.id, patch=BlockPatch(name=name)),
        "Cannot name the new block",
    )

    save_document(session, document, monitor)
    click.echo(f"Added block {len(session.state.current_page.blocks)} '{name}' to '{page.name}'")


@cli.command("add-tag")
@DOCUMENT_ARGUMENT
@click.option("--block", "block_number", type=click.IntRange(min=1), required=True, help="Block number (1-based)")
@PAGE_OPTION
@click.option("--type", "tag_type", required=True, help="Tag label, e.g. h1, title, meta")
@click.option("--old", "old_content", default="", help="Content currently on the page")
@click.option("--new", "new_content", default="", help="Replacement content")
@click.pass_context
def add_tag(
    ctx: click.Context,
    document: Path,
    block_number: int,
    page_name: Optional[str],
    tag_type: str,
    old_content: str,
    new_content: str,
):
    """Append a tag change to a block."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)
    page = resolve_page(session, page_name)
    block = resolve_block(session, page, block_number)

    run_command(session, AddTag(block_id=block.id), f"Cannot add a tag to block {block_number}")
    tag_id = session.state.editing_tag_id
    run_command(
        session,
        UpdateTag(
            block_id=block.id,
            tag_id=tag_id,
            patch=TagPatch(type=tag_type, old_content=old_content, new_content=new_content),
        ),
        "Cannot fill in the new tag",
    )
    run_command(session, SetEditingTag(tag_id=None), "Cannot close the new tag")

    status = session.state.find_tag(tag_id).status
    save_document(session, document, monitor)
    click.echo(f"Added {tag_type} tag ({status.value}) to block {block_number} of '{page.name}'")


@cli.command("delete-tag")
@DOCUMENT_ARGUMENT
@click.option("--block", "block_number", type=click.IntRange(min=1), required=True, help="Block number (1-based)")
@click.option("--tag", "tag_number", type=click.IntRange(min=1), required=True, help="Tag row number (1-based)")
@PAGE_OPTION
@click.pass_context
def delete_tag(
    ctx: click.Context,
    document: Path,
    block_number: int,
    tag_number: int,
    page_name: Optional[str],
):
    """Delete one tag row from a block."""
    monitor = FileMonitor()
    session = open_document(document, get_config(ctx), monitor)
    page = resolve_page(session, page_name)
    block = resolve_block(session, page, block_number)

    if tag_number > len(block.tags):
        raise click.ClickException(
            f"Block {block_number} has no tag {tag_number} (it has {len(block.tags)})"
        )
    tag = block.tags[tag_number - 1]

    run_command(session, DeleteTag(block_id=block.id, tag_id=tag.id), "Cannot delete the tag")

    save_document(session, document, monitor)
    click.echo(f"Deleted {tag.type or 'untyped'} tag from block {block_number} of '{page.name}'")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
