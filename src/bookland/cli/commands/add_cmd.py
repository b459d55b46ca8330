# ABOUTME: The `bookland add` command for importing individual ebook files.
# ABOUTME: Copies each file into library storage, extracts metadata, and catalogs it.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookland.cli.options import catalog_session, data_path_option, db_option, resolve_storage
from bookland.core.importer import UnsupportedFormatError, add_book
from bookland.db.catalog import DuplicateBookError

console = Console()


@click.command("add")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@data_path_option
@db_option
def add(files: tuple[Path, ...], data_path: Path | None, db_path: Path | None) -> None:
    """Copy FILES into the library and catalog them."""
    storage = resolve_storage(data_path)
    failures = 0
    with catalog_session(storage, db_path) as catalog:
        for path in files:
            try:
                record = add_book(path, catalog, storage)
            except (UnsupportedFormatError, DuplicateBookError, OSError) as exc:
                failures += 1
                console.print(f"[red]Skipped[/red] {escape(path.name)}: {escape(str(exc))}")
                continue

            author = escape(record.author or "unknown")
            console.print(
                f"[green]Added[/green] {escape(record.title)} [dim]by {author}[/dim] ({record.id})"
            )

    if failures:
        raise SystemExit(1)
