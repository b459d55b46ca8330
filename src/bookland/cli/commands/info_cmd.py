# ABOUTME: The `bookland info` command for displaying a cataloged book.
# ABOUTME: Shows all stored fields for a single book by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookland.cli.options import catalog_session, data_path_option, db_option, resolve_storage

console = Console()


@click.command("info")
@click.argument("book_id")
@data_path_option
@db_option
def info(book_id: str, data_path: Path | None, db_path: Path | None) -> None:
    """Show detailed metadata for a book by ID."""
    with catalog_session(resolve_storage(data_path), db_path) as catalog:
        record = catalog.get_by_id(book_id)

    if record is None:
        console.print(f"[red]Book {escape(book_id)} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=10)
    table.add_column("Value")

    table.add_row("ID", record.id)
    table.add_row("Title", escape(record.title))
    table.add_row("Author", escape(record.author or "unknown"))
    table.add_row("Type", record.file_type)
    table.add_row("Size", f"{record.file_size:,} bytes")
    table.add_row("File", escape(str(record.file_path)))
    cover = escape(str(record.cover_path)) if record.cover_path else "[dim]none[/dim]"
    table.add_row("Cover", cover)
    table.add_row("Added", record.added_at or "?")

    console.print(table)
