# ABOUTME: Directory scanner that registers new ebook files in the library catalog.
# ABOUTME: Lists one folder, skips already-cataloged paths, extracts metadata, and records each book.

from __future__ import annotations

import logging
import sqlite3
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from bookland.core.extractor import detect_file_type, extract_metadata
from bookland.db.catalog import DuplicateBookError
from bookland.db.mapping import BookRecord

if TYPE_CHECKING:
    from bookland.core.storage import LibraryStorage
    from bookland.db.catalog import LibraryCatalog
    from bookland.formats.pdf import Runner

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of scanning one directory."""

    scan_root: Path
    added: list[BookRecord] = field(default_factory=list)
    skipped: int = 0
    error_details: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def errors(self) -> int:
        """Number of files that could not be registered."""
        return len(self.error_details)


def scan_directory(
    directory: Path,
    catalog: LibraryCatalog,
    storage: LibraryStorage,
    *,
    runner: Runner | None = None,
) -> ScanResult:
    """Register every supported, not-yet-cataloged file in a directory.

    Only the directory itself is listed (no recursion), in name order, one
    file at a time. A file whose path is already in the catalog is skipped
    without re-extracting anything. Per-file failures are logged and
    recorded; they never stop the scan.

    Args:
        directory: The folder to scan.
        catalog: The library catalog to register books in.
        storage: Library layout; each new book gets storage.book_dir(id).
        runner: Optional subprocess.run replacement for PDF rendering.

    Returns:
        A ScanResult listing the newly registered books.

    Raises:
        OSError: If the directory itself cannot be listed.
    """
    result = ScanResult(scan_root=directory)

    for path in sorted(directory.iterdir()):
        if path.is_dir():
            continue

        file_type = detect_file_type(path)
        if file_type is None:
            continue

        # Point-in-time check, not a lock against concurrent scans
        if catalog.get_by_path(path) is not None:
            result.skipped += 1
            continue

        try:
            file_size = path.stat().st_size
        except OSError as exc:
            logger.warning("Failed to stat file %s: %s", path.name, exc)
            result.error_details.append((path, str(exc)))
            continue

        book_id = str(uuid.uuid4())
        extracted = extract_metadata(
            path,
            file_type,
            storage.book_dir(book_id),
            book_id,
            fallback_title=path.stem,
            runner=runner,
        )

        record = BookRecord(
            id=book_id,
            title=extracted.title,
            author=extracted.author,
            cover_path=extracted.cover_path,
            file_path=path,
            file_size=file_size,
            file_type=file_type,
        )

        try:
            stored = catalog.add_book(record)
        except (DuplicateBookError, sqlite3.Error) as exc:
            logger.warning("Failed to insert book %s: %s", record.title, exc)
            result.error_details.append((path, str(exc)))
            continue

        result.added.append(stored)
        logger.info("Added book: %s by %s", stored.title, stored.author or "unknown")

    return result
