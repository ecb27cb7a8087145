"""CLI application for Notelytic using Rich and Typer."""

import asyncio
import logging
import re
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from notelytic.core.backup import BACKUP_FILENAME
from notelytic.core.errors import NotebookError
from notelytic.core.notebook import Notebook
from notelytic.core.types import (
    ALL_CATEGORIES,
    Category,
    Note,
    NoteDraft,
    NoteQuery,
    NoteUpdate,
    SortKey,
)
from notelytic.core.views import excerpt, plain_text

T = TypeVar("T")

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

app = typer.Typer(
    name="notelytic",
    help="Notelytic CLI - your local note-taking dashboard",
    no_args_is_help=True,
)

console = Console()


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a notebook coroutine, reporting failures as a single error line."""
    try:
        return asyncio.run(coro)
    except NotebookError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def _notebook(ctx: typer.Context) -> Notebook:
    return ctx.obj


async def _resolve_note_id(notebook: Notebook, prefix: str) -> str:
    """Find the note whose ID starts with ``prefix``."""
    notes = await notebook.all_notes()
    exact = [n for n in notes if n.id == prefix]
    if exact:
        return exact[0].id

    matches = [n for n in notes if n.id.startswith(prefix)]
    if len(matches) > 1:
        raise NotebookError(f"Multiple notes match {prefix}. Be more specific.")
    if not matches:
        # Let the notebook raise its not-found error
        return prefix
    return matches[0].id


def _color_style(color: str) -> str:
    """Rich style for a stored colour; unknown formats render unstyled."""
    return color if _HEX_COLOR.match(color) else ""


def _flags(note: Note) -> str:
    flags = []
    if note.is_pinned:
        flags.append("[yellow]pinned[/yellow]")
    if note.is_archived:
        flags.append("[dim]archived[/dim]")
    return " ".join(flags)


def _notes_table(notes: list[Note], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Tags", style="magenta")
    table.add_column("Preview", style="dim")
    table.add_column("Updated")
    table.add_column("Status")

    for note in notes:
        table.add_row(
            note.id[:8],
            escape(note.title),
            Text(note.category, style=_color_style(note.color)),
            escape(", ".join(note.tags)),
            escape(excerpt(note.content, 40)),
            note.updated_at.astimezone().strftime("%Y-%m-%d %H:%M"),
            _flags(note),
        )
    return table


@app.callback()
def main(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="Path to the notes database (default: ~/.notelytic/notelytic.db)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Notelytic CLI - your local note-taking dashboard."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        console.print("[dim]Debug logging enabled[/dim]")

    notebook = Notebook(db_path=Path(db).expanduser() if db else None)
    _run(notebook.load())
    ctx.obj = notebook


@app.command("list")
def list_notes(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Text to search for"),
    category: str = typer.Option(
        ALL_CATEGORIES, "--category", "-c", help="Only notes in this category"
    ),
    archived: bool = typer.Option(
        False, "--archived", "-a", help="Show archived notes instead"
    ),
    sort_by: SortKey = typer.Option(
        SortKey.UPDATED_AT, "--sort", help="Sort order"
    ),
):
    """List notes, pinned first."""
    query = NoteQuery(
        search=search, category=category, show_archived=archived, sort_by=sort_by
    )
    notes = _run(_notebook(ctx).list_notes(query))

    if not notes:
        console.print("[dim]No notes found.[/dim]")
        return

    title = "Archived notes" if archived else "Notes"
    console.print(_notes_table(notes, title))


@app.command()
def show(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note ID")):
    """Show a single note."""
    notebook = _notebook(ctx)

    async def _show() -> Note:
        return await notebook.get_note(await _resolve_note_id(notebook, note_id))

    note = _run(_show())
    meta = [
        f"[dim]ID:[/dim] {note.id}",
        f"[dim]Category:[/dim] {escape(note.category)}",
        f"[dim]Tags:[/dim] {escape(', '.join(note.tags)) or '-'}",
        f"[dim]Created:[/dim] {note.created_at.astimezone():%Y-%m-%d %H:%M}",
        f"[dim]Updated:[/dim] {note.updated_at.astimezone():%Y-%m-%d %H:%M}",
    ]
    if note.image:
        meta.append("[dim]Image:[/dim] attached")
    flags = _flags(note)
    if flags:
        meta.append(flags)

    console.print(
        Panel(
            escape(plain_text(note.content)) + "\n\n" + "\n".join(meta),
            title=escape(note.title),
            border_style=_color_style(note.color) or "blue",
        )
    )


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    content: str = typer.Option(..., "--content", "-m", help="Note content"),
    category: str = typer.Option(..., "--category", "-c", help="Category name"),
    tag: Optional[List[str]] = typer.Option(
        None, "--tag", help="Tag (repeat for several)"
    ),
):
    """Add a note."""
    draft = NoteDraft(title=title, content=content, category=category, tags=tag or [])
    note = _run(_notebook(ctx).add_note(draft))
    console.print(f"[green]Note added successfully! ({note.id[:8]})[/green]")


@app.command()
def edit(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(
        None, "--content", "-m", help="New content"
    ),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="New category"
    ),
    tag: Optional[List[str]] = typer.Option(
        None, "--tag", help="Replace tags (repeat for several)"
    ),
):
    """Edit a note."""
    notebook = _notebook(ctx)
    changes = NoteUpdate(title=title, content=content, category=category, tags=tag)

    async def _edit() -> Note:
        return await notebook.update_note(
            await _resolve_note_id(notebook, note_id), changes
        )

    _run(_edit())
    console.print("[green]Note updated successfully![/green]")


@app.command()
def delete(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note ID")):
    """Delete a note."""
    notebook = _notebook(ctx)

    async def _delete() -> None:
        await notebook.delete_note(await _resolve_note_id(notebook, note_id))

    _run(_delete())
    console.print("[yellow]Note deleted[/yellow]")


@app.command()
def pin(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note ID")):
    """Pin or unpin a note."""
    notebook = _notebook(ctx)

    async def _pin() -> Note:
        return await notebook.toggle_pin(await _resolve_note_id(notebook, note_id))

    note = _run(_pin())
    if note.is_pinned:
        console.print("[green]Note pinned[/green]")
    else:
        console.print("[yellow]Note unpinned[/yellow]")


@app.command()
def archive(ctx: typer.Context, note_id: str = typer.Argument(..., help="Note ID")):
    """Archive or unarchive a note."""
    notebook = _notebook(ctx)

    async def _archive() -> Note:
        return await notebook.toggle_archive(
            await _resolve_note_id(notebook, note_id)
        )

    note = _run(_archive())
    if note.is_archived:
        console.print("[green]Note archived[/green]")
    else:
        console.print("[yellow]Note unarchived[/yellow]")


@app.command()
def tag(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID"),
    tags: Optional[List[str]] = typer.Argument(None, help="New tags"),
):
    """Replace the tags of a note. No tags clears them."""
    notebook = _notebook(ctx)

    async def _tag() -> Note:
        return await notebook.set_tags(
            await _resolve_note_id(notebook, note_id), tags or []
        )

    note = _run(_tag())
    console.print(
        f"[green]Tags updated successfully! ({escape(', '.join(note.tags))})[/green]"
    )


@app.command()
def tags(ctx: typer.Context):
    """List all tags and how many notes use them."""
    counts = _run(_notebook(ctx).tag_counts())

    if not counts:
        console.print("[dim]No tags yet.[/dim]")
        return

    table = Table(title="Tags", show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="magenta")
    table.add_column("Notes", justify="right")
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(escape(name), str(count))
    console.print(table)


@app.command()
def categories(ctx: typer.Context):
    """List categories."""
    items = _run(_notebook(ctx).list_categories())

    table = Table(title="Categories", show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Color")
    for category in items:
        table.add_row(
            escape(category.name),
            Text(category.color, style=_color_style(category.color)),
        )
    console.print(table)


@app.command("add-category")
def add_category(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name"),
    color: str = typer.Argument(..., help="Colour, e.g. #FF5733"),
):
    """Add a category."""
    _run(_notebook(ctx).add_category(Category(name=name, color=color)))
    console.print("[green]Category added successfully![/green]")


@app.command("delete-category")
def delete_category(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name"),
):
    """Delete a category. Its notes move to Uncategorized."""
    moved = _run(_notebook(ctx).delete_category(name))
    console.print(
        f"[green]Category deleted successfully! ({moved} notes moved)[/green]"
    )


@app.command("export")
def export_notes(
    ctx: typer.Context,
    path: Path = typer.Argument(Path(BACKUP_FILENAME), help="Output file"),
):
    """Export notes and categories to a JSON file."""
    payload = _run(_notebook(ctx).export_data())
    path.write_text(payload, encoding="utf-8")
    console.print(
        f"[green]Notes and categories exported to {escape(str(path))}[/green]"
    )


@app.command("import")
def import_notes(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Backup file to import"),
):
    """Import notes and categories from a JSON file."""
    if not path.exists():
        console.print(f"[red]File not found: {escape(str(path))}[/red]")
        raise typer.Exit(1)

    result = _run(_notebook(ctx).import_data(path.read_bytes()))
    console.print(
        f"[green]Imported {result.notes} notes and "
        f"{result.categories} categories[/green]"
    )


@app.command()
def stats(ctx: typer.Context):
    """Show dashboard statistics."""
    summary = _run(_notebook(ctx).stats())

    table = Table(title="Dashboard", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total notes", str(summary.total_notes))
    table.add_row("Active", str(summary.active_notes))
    table.add_row("Archived", str(summary.archived_notes))
    table.add_row("Pinned", str(summary.pinned_notes))
    table.add_row("Categories", str(summary.category_count))
    table.add_row("Tags", str(summary.tag_count))
    console.print(table)

    if summary.notes_per_category:
        per_category = Table(title="Notes per category", show_header=True)
        per_category.add_column("Category")
        per_category.add_column("Notes", justify="right")
        for name, count in sorted(summary.notes_per_category.items()):
            per_category.add_row(escape(name), str(count))
        console.print(per_category)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port"),
):
    """Run the REST API server."""
    from notelytic.api.app import run_server
    from notelytic.core.config import validate_api_environment

    is_valid, message = validate_api_environment()
    if not is_valid:
        console.print(f"[yellow]{escape(message)}[/yellow]")

    run_server(host=host, port=port)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
