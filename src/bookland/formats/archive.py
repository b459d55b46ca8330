# ABOUTME: Thin fail-soft helpers over zipfile for EPUB and CBZ containers.
# ABOUTME: Opening or reading a damaged archive yields None instead of an exception.

import logging
import zipfile
import zlib
from pathlib import Path

logger = logging.getLogger(__name__)

# Errors zipfile can raise while decompressing a damaged or unsupported member
ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    zlib.error,
)


def open_archive(path: Path) -> zipfile.ZipFile | None:
    """Open a zip container for reading, or None if it is missing or corrupt."""
    try:
        return zipfile.ZipFile(path)
    except (zipfile.BadZipFile, OSError) as exc:
        logger.debug("Cannot open archive %s: %s", path, exc)
        return None


def read_entry(archive: zipfile.ZipFile, name: str) -> bytes | None:
    """Read a member by exact name, or None if missing or unreadable."""
    try:
        return archive.read(name)
    except KeyError:
        return None
    except ENTRY_READ_ERRORS as exc:
        logger.debug("Cannot read %s from %s: %s", name, archive.filename, exc)
        return None
