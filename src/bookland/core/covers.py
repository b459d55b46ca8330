# ABOUTME: Replaces a cataloged book's cover with a user-supplied image.
# ABOUTME: Validates the image bytes before writing them into the book's storage directory.

import logging
from pathlib import Path

from bookland.core.storage import LibraryStorage
from bookland.db.catalog import LibraryCatalog
from bookland.formats.images import cover_extension, is_valid_image

logger = logging.getLogger(__name__)


class BookNotFoundError(Exception):
    """Raised when no cataloged book has the given id."""


class InvalidImageError(Exception):
    """Raised when supplied cover data is not a JPEG, PNG, GIF, or WebP image."""


def set_cover(
    book_id: str, data: bytes, catalog: LibraryCatalog, storage: LibraryStorage
) -> Path:
    """Write a new cover image for a book and record it in the catalog.

    The cover is saved as cover.png for PNG data and cover.jpg otherwise,
    in the book's own storage directory. A previous cover of the other
    format in that directory is removed.

    Raises:
        BookNotFoundError: If book_id is not cataloged.
        InvalidImageError: If data does not start with known image magic bytes.
        OSError: If the cover file cannot be written.
    """
    record = catalog.get_by_id(book_id)
    if record is None:
        raise BookNotFoundError(f"Book {book_id} not found")

    if not is_valid_image(data):
        raise InvalidImageError("Invalid image file")

    book_dir = storage.book_dir(book_id)
    book_dir.mkdir(parents=True, exist_ok=True)
    cover_path = book_dir / f"cover{cover_extension(data)}"
    cover_path.write_bytes(data)

    old_cover = record.cover_path
    if old_cover is not None and old_cover != cover_path and old_cover.parent == book_dir:
        old_cover.unlink(missing_ok=True)

    catalog.set_cover_path(book_id, cover_path)
    logger.info("Cover for %s set to %s", book_id, cover_path)
    return cover_path
