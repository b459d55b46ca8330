# ABOUTME: CRUD operations for the Bookland library catalog.
# ABOUTME: Registers books and looks them up by id or file path in the SQLite database.

import sqlite3
from pathlib import Path

from bookland.db.mapping import BookRecord, record_to_row, row_to_record


class DuplicateBookError(Exception):
    """Raised when a book's file_path is already cataloged."""


class LibraryCatalog:
    """Typed access to the books table over an open sqlite3 connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _fetch_one(self, where: str, value: str) -> BookRecord | None:
        row = self._conn.execute(f"SELECT * FROM books WHERE {where} = ?", (value,)).fetchone()
        return row_to_record(row) if row else None

    def add_book(self, record: BookRecord) -> BookRecord:
        """Insert a book and return it as stored.

        The returned record carries the added_at timestamp assigned by the
        database when the caller left it unset.

        Raises:
            DuplicateBookError: If another book already has this file_path.
        """
        row = record_to_row(record)
        sql = "INSERT INTO books ({}) VALUES ({})".format(
            ", ".join(row), ", ".join("?" * len(row))
        )

        try:
            with self._conn:
                self._conn.execute(sql, tuple(row.values()))
        except sqlite3.IntegrityError as exc:
            if "books.file_path" in str(exc):
                raise DuplicateBookError(f"{record.file_path} is already cataloged") from exc
            raise

        return self.get_by_id(record.id) or record

    def get_by_id(self, book_id: str) -> BookRecord | None:
        """Look up a book by its identifier."""
        return self._fetch_one("id", book_id)

    def get_by_path(self, file_path: Path) -> BookRecord | None:
        """Look up a book by the exact path of its file."""
        return self._fetch_one("file_path", str(file_path))

    def list_all(self) -> list[BookRecord]:
        """All cataloged books, most recently added first."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY added_at DESC, title")
        return [row_to_record(row) for row in cursor]

    def set_cover_path(self, book_id: str, cover_path: Path | None) -> None:
        """Record the cover image path for a book, or clear it with None.

        Raises:
            ValueError: If no book has this id.
        """
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE books SET cover_path = ? WHERE id = ?",
                (str(cover_path) if cover_path else None, book_id),
            )
        if cursor.rowcount == 0:
            raise ValueError(f"Book with id {book_id} not found")
