# ABOUTME: The `bookland inspect` command for previewing extraction on a single file.
# ABOUTME: Shows title, author, and cover detection without touching the catalog.

import tempfile
import uuid
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookland.core.extractor import SUPPORTED_TYPES, detect_file_type, extract_metadata
from bookland.formats.images import classify

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--cover-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Keep the extracted cover in this directory.",
)
def inspect(path: Path, cover_dir: Path | None) -> None:
    """Show the metadata Bookland would extract from an ebook file."""
    file_type = detect_file_type(path)
    if file_type is None:
        supported = ", ".join(sorted(SUPPORTED_TYPES))
        console.print(f"[red]Error:[/red] unsupported file type (expected one of {supported})")
        raise SystemExit(1)

    with tempfile.TemporaryDirectory(prefix="bookland-inspect-") as scratch:
        target = cover_dir or Path(scratch)
        result = extract_metadata(
            path, file_type, target, str(uuid.uuid4()), fallback_title=path.stem
        )

        cover = "[dim]none[/dim]"
        if result.cover_path is not None:
            kind = classify(result.cover_path.read_bytes())
            cover = kind.value
            if cover_dir is not None:
                cover = f"{kind.value} ({escape(str(result.cover_path))})"

    table = Table(title=escape(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Type", file_type)
    table.add_row("Title", escape(result.title))
    table.add_row("Author", escape(result.author) or "[dim]unknown[/dim]")
    table.add_row("Cover", cover)

    console.print(table)
