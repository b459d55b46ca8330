# ABOUTME: Single-file import that copies an ebook into library storage and catalogs it.
# ABOUTME: The stored copy, not the source, becomes the cataloged file.

from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from bookland.core.extractor import detect_file_type, extract_metadata
from bookland.db.mapping import BookRecord

if TYPE_CHECKING:
    from bookland.core.storage import LibraryStorage
    from bookland.db.catalog import LibraryCatalog
    from bookland.formats.pdf import Runner

logger = logging.getLogger(__name__)


class UnsupportedFormatError(Exception):
    """Raised when a file's extension is not a supported ebook type."""


def add_book(
    source: Path,
    catalog: LibraryCatalog,
    storage: LibraryStorage,
    *,
    runner: Runner | None = None,
) -> BookRecord:
    """Copy an ebook into the library and register it.

    The file is stored as books/<id>/book<ext> under the data root, and
    its cover (if any) lands next to it. The source file's name without
    extension is the fallback title. If copying, extraction, or
    registration fails, the book directory is removed again.

    Args:
        source: The ebook file to import.
        catalog: The library catalog to register the book in.
        storage: Library layout deciding where the copy goes.
        runner: Optional subprocess.run replacement for PDF rendering.

    Returns:
        The cataloged BookRecord.

    Raises:
        UnsupportedFormatError: If the extension is not supported.
        OSError: If the file cannot be copied into storage.
        DuplicateBookError: If the stored path is somehow already cataloged.
    """
    file_type = detect_file_type(source)
    if file_type is None:
        raise UnsupportedFormatError(f"Unsupported file type: {source.suffix or source.name}")

    book_id = str(uuid.uuid4())
    book_dir = storage.book_dir(book_id)
    book_dir.mkdir(parents=True, exist_ok=True)

    stored_path = book_dir / f"book{source.suffix.lower()}"
    try:
        shutil.copyfile(source, stored_path)
        extracted = extract_metadata(
            stored_path,
            file_type,
            book_dir,
            book_id,
            fallback_title=source.stem,
            runner=runner,
        )
        record = BookRecord(
            id=book_id,
            title=extracted.title,
            author=extracted.author,
            cover_path=extracted.cover_path,
            file_path=stored_path,
            file_size=stored_path.stat().st_size,
            file_type=file_type,
        )
        stored = catalog.add_book(record)
    except Exception:
        shutil.rmtree(book_dir, ignore_errors=True)
        raise

    logger.info("Imported %s as %s", source.name, book_id)
    return stored
