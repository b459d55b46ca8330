# ABOUTME: Metadata package for ebook metadata representation.
# ABOUTME: Exports the ExtractionResult dataclass used throughout Bookland.

from bookland.metadata.types import ExtractionResult

__all__ = [
    "ExtractionResult",
]
