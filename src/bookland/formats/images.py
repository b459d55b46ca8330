# ABOUTME: Magic-byte image sniffing and cover file writing.
# ABOUTME: Classifies byte buffers as JPEG/PNG/GIF/WebP and saves validated covers to disk.

import logging
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG"
_GIF_MAGIC = b"GIF8"
_RIFF_MAGIC = b"RIFF"
_WEBP_MAGIC = b"WEBP"

# Shortest buffer we are willing to call an image
_MIN_IMAGE_BYTES = 8


class ImageKind(str, Enum):
    """Image formats recognized by their leading bytes."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    INVALID = "invalid"


def classify(data: bytes) -> ImageKind:
    """Classify a byte buffer by its magic bytes.

    Rules are checked in order and the first match wins. Buffers shorter
    than 8 bytes are never images. WebP needs the RIFF container header at
    offset 0 and the WEBP fourcc at offset 8.
    """
    if len(data) < _MIN_IMAGE_BYTES:
        return ImageKind.INVALID
    if data[:3] == _JPEG_MAGIC:
        return ImageKind.JPEG
    if data[:4] == _PNG_MAGIC:
        return ImageKind.PNG
    if data[:4] == _GIF_MAGIC:
        return ImageKind.GIF
    if len(data) > 12 and data[:4] == _RIFF_MAGIC and data[8:12] == _WEBP_MAGIC:
        return ImageKind.WEBP
    return ImageKind.INVALID


def is_valid_image(data: bytes) -> bool:
    """Whether the buffer starts with the magic bytes of a supported image."""
    return classify(data) is not ImageKind.INVALID


def cover_extension(data: bytes) -> str:
    """File extension for a saved cover: .png for PNG data, .jpg otherwise."""
    return ".png" if classify(data) is ImageKind.PNG else ".jpg"


def save_cover(data: bytes, cover_dir: Path) -> Path | None:
    """Write validated image bytes to cover_dir/cover<ext>.

    Creates cover_dir (and parents) if needed. Existing files in the
    directory are left alone, except a previous cover with the same name,
    which is overwritten.

    Returns:
        The path of the written cover, or None if the directory or file
        could not be written.
    """
    cover_path = cover_dir / f"cover{cover_extension(data)}"
    try:
        cover_dir.mkdir(parents=True, exist_ok=True)
        cover_path.write_bytes(data)
    except OSError as exc:
        logger.warning("Could not write cover %s: %s", cover_path, exc)
        return None
    return cover_path
