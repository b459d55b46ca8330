# ABOUTME: Shared Click options for Bookland CLI commands.
# ABOUTME: Provides reusable decorators for --data-path and --db plus the helpers that resolve them.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from bookland.core.storage import LibraryStorage
from bookland.db.catalog import LibraryCatalog
from bookland.db.connection import DEFAULT_DATA_PATH, library_connection

data_path_option = click.option(
    "--data-path",
    "data_path",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="BOOKLAND_DATA_PATH",
    default=None,
    help=f"Library data directory for the database, copies, and covers (default: {DEFAULT_DATA_PATH})",
)

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to library database (default: <data-path>/library.db)",
)


def resolve_storage(data_path: Path | None) -> LibraryStorage:
    """Build the library layout from the --data-path option."""
    return LibraryStorage(data_path or DEFAULT_DATA_PATH)


@contextmanager
def catalog_session(storage: LibraryStorage, db_path: Path | None) -> Iterator[LibraryCatalog]:
    """Open the catalog for one command, honoring a --db override."""
    with library_connection(db_path or storage.db_path) as conn:
        yield LibraryCatalog(conn)
