# ABOUTME: File-type detection and dispatch to the format-specific extractors.
# ABOUTME: Shared by the directory scanner and single-file import.

import logging
from pathlib import Path

from bookland.formats.cbz import extract_cbz_cover
from bookland.formats.epub import extract_epub_metadata
from bookland.formats.pdf import Runner, extract_pdf_cover, extract_pdf_metadata
from bookland.metadata.types import ExtractionResult

logger = logging.getLogger(__name__)

SUPPORTED_TYPES: dict[str, str] = {
    ".epub": "epub",
    ".pdf": "pdf",
    ".mobi": "mobi",
    ".azw3": "azw3",
    ".fb2": "fb2",
    ".cbz": "cbz",
}


def detect_file_type(path: Path) -> str | None:
    """Map a file's extension (case-insensitive) to a supported type, or None."""
    return SUPPORTED_TYPES.get(path.suffix.lower())


def extract_metadata(
    path: Path,
    file_type: str,
    storage_dir: Path,
    book_id: str,
    fallback_title: str,
    *,
    runner: Runner | None = None,
) -> ExtractionResult:
    """Run the extractor that matches file_type.

    MOBI, AZW3, and FB2 have no extractor: they keep the fallback title,
    no author, and no cover. Never raises.

    Args:
        path: The ebook file to read.
        file_type: One of the SUPPORTED_TYPES values.
        storage_dir: The book's own directory; covers are written here.
        book_id: The book's identifier (namespaces PDF render temp files).
        fallback_title: Title to use when the file declares none.
        runner: Optional subprocess.run replacement for PDF rendering.

    Returns:
        ExtractionResult for the file.
    """
    if file_type == "epub":
        return extract_epub_metadata(path, storage_dir, fallback_title)

    if file_type == "pdf":
        title, author = extract_pdf_metadata(path, fallback_title)
        cover_path = extract_pdf_cover(path, storage_dir, book_id, runner=runner)
        return ExtractionResult(title=title, author=author, cover_path=cover_path)

    if file_type == "cbz":
        cover_path = extract_cbz_cover(path, storage_dir)
        return ExtractionResult(title=fallback_title, cover_path=cover_path)

    logger.debug("No extractor for %s files, using file name for %s", file_type, path)
    return ExtractionResult(title=fallback_title)
