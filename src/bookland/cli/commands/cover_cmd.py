# ABOUTME: The `bookland cover` command for replacing a book's cover image.
# ABOUTME: Validates the image file and stores it in the book's directory.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookland.cli.options import catalog_session, data_path_option, db_option, resolve_storage
from bookland.core.covers import BookNotFoundError, InvalidImageError, set_cover

console = Console()


@click.command("cover")
@click.argument("book_id")
@click.argument(
    "image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@data_path_option
@db_option
def cover(book_id: str, image: Path, data_path: Path | None, db_path: Path | None) -> None:
    """Set IMAGE as the cover of the book with BOOK_ID."""
    storage = resolve_storage(data_path)
    try:
        with catalog_session(storage, db_path) as catalog:
            cover_path = set_cover(book_id, image.read_bytes(), catalog, storage)
    except BookNotFoundError as exc:
        console.print(f"[red]Book {escape(book_id)} not found.[/red]")
        raise SystemExit(1) from exc
    except InvalidImageError as exc:
        console.print(f"[red]{escape(image.name)} is not a valid image file.[/red]")
        raise SystemExit(1) from exc

    console.print(f"[green]Cover saved:[/green] {escape(str(cover_path))}")
