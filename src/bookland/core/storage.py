# ABOUTME: Explicit on-disk layout for a Bookland library.
# ABOUTME: Resolves the database file and per-book storage directories from one data root.

from dataclasses import dataclass
from pathlib import Path

from bookland.db.connection import DB_FILENAME, DEFAULT_DATA_PATH


@dataclass(frozen=True)
class LibraryStorage:
    """Where a library keeps its database, imported files, and covers.

    Layout under data_path:
        library.db
        books/<book_id>/book.<ext>     (files added with `bookland add`)
        books/<book_id>/cover.<ext>    (extracted or uploaded covers)
    """

    data_path: Path = DEFAULT_DATA_PATH

    @property
    def db_path(self) -> Path:
        return self.data_path / DB_FILENAME

    @property
    def books_dir(self) -> Path:
        return self.data_path / "books"

    def book_dir(self, book_id: str) -> Path:
        """Storage directory owned by a single book."""
        return self.books_dir / book_id
