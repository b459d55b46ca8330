# ABOUTME: Cover extraction for CBZ comic archives.
# ABOUTME: Picks the first image page by name and saves it as the book cover.

import logging
import zipfile
from pathlib import Path

from bookland.formats.archive import ENTRY_READ_ERRORS, open_archive
from bookland.formats.images import is_valid_image, save_cover

logger = logging.getLogger(__name__)

PAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".webp"})


def _image_entries(archive: zipfile.ZipFile) -> list[str]:
    """Member names with an image extension, sorted by name."""
    names = [
        info.filename
        for info in archive.infolist()
        if not info.is_dir() and Path(info.filename).suffix.lower() in PAGE_EXTENSIONS
    ]
    return sorted(names)


def extract_cbz_cover(cbz_path: Path, cover_dir: Path) -> Path | None:
    """Save the first page of a CBZ archive as its cover.

    Pages are ordered by plain string comparison of their member names, so
    page10.jpg sorts before page2.jpg. Only the first candidate is
    considered; if its bytes are not an image there is no cover.

    Args:
        cbz_path: Path to the CBZ file.
        cover_dir: Directory to write cover.jpg or cover.png into.

    Returns:
        Path to the written cover, or None.
    """
    archive = open_archive(cbz_path)
    if archive is None:
        return None

    with archive:
        candidates = _image_entries(archive)
        if not candidates:
            return None
        try:
            data = archive.read(candidates[0])
        except ENTRY_READ_ERRORS as exc:
            logger.debug("Cannot read %s from %s: %s", candidates[0], cbz_path, exc)
            return None

    if not is_valid_image(data):
        logger.warning("First page %s of %s is not a valid image", candidates[0], cbz_path)
        return None

    return save_cover(data, cover_dir)
