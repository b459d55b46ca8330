# ABOUTME: The `bookland scan` command for registering a folder of ebooks.
# ABOUTME: Scans one directory, catalogs new files with extracted metadata, and reports what was added.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookland.cli.options import catalog_session, data_path_option, db_option, resolve_storage
from bookland.core.scanner import ScanResult, scan_directory

console = Console()


@click.command("scan")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="BOOKLAND_BOOKS_PATH",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@data_path_option
@db_option
def scan(
    directory: Path, json_output: bool, data_path: Path | None, db_path: Path | None
) -> None:
    """Register new ebook files found in DIRECTORY."""
    storage = resolve_storage(data_path)
    with catalog_session(storage, db_path) as catalog:
        try:
            result = scan_directory(directory.resolve(), catalog, storage)
        except OSError as exc:
            console.print(
                f"[red]Failed to scan {escape(str(directory))}:[/red] {escape(str(exc))}"
            )
            raise SystemExit(1) from exc

    if json_output:
        _print_json(result)
        return

    _print_rich(result)


def _print_json(result: ScanResult) -> None:
    """Print scan results as JSON."""
    data = {
        "scan_root": str(result.scan_root),
        "added": [
            {
                "id": record.id,
                "title": record.title,
                "author": record.author,
                "cover_path": str(record.cover_path) if record.cover_path else None,
                "file_path": str(record.file_path),
                "file_size": record.file_size,
                "file_type": record.file_type,
            }
            for record in result.added
        ],
        "skipped": result.skipped,
        "errors": [
            {"path": str(path), "error": msg} for path, msg in result.error_details
        ],
    }
    click.echo(json_lib.dumps(data, indent=2))


def _print_rich(result: ScanResult) -> None:
    """Print scan results with Rich formatting."""
    if result.added:
        table = Table(title="Added")
        table.add_column("Title", style="bold")
        table.add_column("Author")
        table.add_column("Type", width=5)
        table.add_column("Cover", width=5)

        for record in result.added:
            table.add_row(
                escape(record.title),
                escape(record.author) or "[dim]unknown[/dim]",
                record.file_type,
                "yes" if record.has_cover else "no",
            )
        console.print(table)

    parts = [f"[green]{len(result.added)} added[/green]"]
    if result.skipped:
        parts.append(f"[yellow]{result.skipped} already cataloged[/yellow]")
    if result.errors:
        parts.append(f"[red]{result.errors} error(s)[/red]")
    console.print(", ".join(parts))

    if result.error_details:
        console.print(
            f"\n[yellow]{result.errors} file(s) could not be registered:[/yellow]"
        )
        for path, msg in result.error_details:
            console.print(f"  [dim]{escape(path.name)}:[/dim] {escape(msg)}")
