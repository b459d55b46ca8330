# ABOUTME: Converts between BookRecord dataclasses and SQLite row dictionaries.
# ABOUTME: Paths are stored as strings; an empty cover_path means no cover.

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class BookRecord:
    """A cataloged book file with its extracted metadata."""

    id: str
    title: str
    author: str
    cover_path: Path | None
    file_path: Path
    file_size: int
    file_type: str
    added_at: str | None = None

    @property
    def has_cover(self) -> bool:
        """Whether a cover image has been recorded for this book."""
        return self.cover_path is not None


def record_to_row(record: BookRecord) -> dict[str, Any]:
    """Convert a BookRecord to a dict suitable for INSERT.

    added_at is left out when unset so the column default applies.
    """
    row: dict[str, Any] = {
        "id": record.id,
        "title": record.title,
        "author": record.author,
        "cover_path": str(record.cover_path) if record.cover_path else None,
        "file_path": str(record.file_path),
        "file_size": record.file_size,
        "file_type": record.file_type,
    }
    if record.added_at is not None:
        row["added_at"] = record.added_at
    return row


def row_to_record(row: Any) -> BookRecord:
    """Convert a database row (dict-like) to a BookRecord."""
    cover = row["cover_path"]
    return BookRecord(
        id=row["id"],
        title=row["title"],
        author=row["author"] or "",
        cover_path=Path(cover) if cover else None,
        file_path=Path(row["file_path"]),
        file_size=row["file_size"],
        file_type=row["file_type"],
        added_at=row["added_at"],
    )
