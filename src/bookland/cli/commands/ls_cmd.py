# ABOUTME: The `bookland ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table (or JSON) of all books in the library database.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookland.cli.options import catalog_session, data_path_option, db_option, resolve_storage

console = Console()


@click.command("ls")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@data_path_option
@db_option
def ls(json_output: bool, data_path: Path | None, db_path: Path | None) -> None:
    """List all books in the library catalog, newest first."""
    with catalog_session(resolve_storage(data_path), db_path) as catalog:
        records = catalog.list_all()

    if json_output:
        data = [
            {
                "id": record.id,
                "title": record.title,
                "author": record.author,
                "cover_path": str(record.cover_path) if record.cover_path else None,
                "file_path": str(record.file_path),
                "file_size": record.file_size,
                "file_type": record.file_type,
                "added_at": record.added_at,
            }
            for record in records
        ]
        click.echo(json_lib.dumps(data, indent=2))
        return

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=8)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Type", width=5)

    for record in records:
        table.add_row(
            record.id[:8],
            escape(record.title),
            escape(record.author) or "[dim]unknown[/dim]",
            record.file_type,
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
