# ABOUTME: Public API for the Bookland library database layer.
# ABOUTME: Exports connection management, catalog operations, and data types.

from bookland.db.catalog import DuplicateBookError, LibraryCatalog
from bookland.db.connection import DEFAULT_DATA_PATH, DEFAULT_DB_PATH, open_library
from bookland.db.mapping import BookRecord

__all__ = [
    "DEFAULT_DATA_PATH",
    "DEFAULT_DB_PATH",
    "BookRecord",
    "DuplicateBookError",
    "LibraryCatalog",
    "open_library",
]
