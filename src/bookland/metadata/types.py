# ABOUTME: Core metadata data structures returned by the format extractors.
# ABOUTME: ExtractionResult is the interchange format between extraction, scanning, and the catalog.

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ExtractionResult:
    """Title, author, and cover recovered from a single ebook file.

    Extractors always return one of these, even for unreadable files: title
    falls back to a caller-supplied value (usually the file name), author
    to an empty string, and cover_path stays None when no valid cover image
    could be found.
    """

    title: str
    author: str = ""
    cover_path: Path | None = None

    @property
    def has_cover(self) -> bool:
        """Whether a cover image was written."""
        return self.cover_path is not None
