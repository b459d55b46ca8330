# ABOUTME: PDF title/author sniffing and first-page cover rendering via pdftoppm.
# ABOUTME: Both helpers degrade to fallback values instead of raising.

import logging
import shutil
import subprocess
import tempfile
from collections.abc import Callable
from pathlib import Path

from bookland.formats.images import is_valid_image

logger = logging.getLogger(__name__)

# Only the head of the file is searched for the info dictionary
METADATA_SCAN_BYTES = 50_000

# Longest string literal accepted for a /Title or /Author value
_MAX_FIELD_LENGTH = 200

RASTERIZER = "pdftoppm"
RASTERIZE_TIMEOUT = 30.0
COVER_SCALE = 800

# Signature of subprocess.run, injectable so tests need no real rasterizer
Runner = Callable[..., subprocess.CompletedProcess]


def _read_head(pdf_path: Path, size: int = METADATA_SCAN_BYTES) -> str | None:
    """Read the first `size` bytes of a file as latin-1 text."""
    try:
        with open(pdf_path, "rb") as f:
            data = f.read(size)
    except OSError as exc:
        logger.debug("Cannot read PDF %s: %s", pdf_path, exc)
        return None
    return data.decode("latin-1")


def _string_after(content: str, marker: str) -> str | None:
    """Return the literal string following a dictionary key like /Title.

    Finds the marker, then the next "(" and the next ")" after it. Spans of
    200 characters or more are rejected so a key without a literal string
    value cannot run into unrelated stream data.
    """
    idx = content.find(marker)
    if idx == -1:
        return None
    start = content.find("(", idx)
    if start == -1:
        return None
    start += 1
    end = content.find(")", start)
    if end == -1 or end - start >= _MAX_FIELD_LENGTH:
        return None
    value = content[start:end].strip()
    return _decode_literal(value.replace("\\(", "(").replace("\\)", ")"))


def _decode_literal(value: str) -> str:
    """Reread a latin-1 decoded literal as UTF-8 when its bytes are valid UTF-8."""
    try:
        return value.encode("latin-1").decode("utf-8")
    except UnicodeDecodeError:
        return value


def extract_pdf_metadata(pdf_path: Path, fallback_title: str) -> tuple[str, str]:
    """Extract title and author from a PDF's info dictionary.

    Heuristic: only the first 50,000 bytes are searched, so info
    dictionaries appended later (incremental updates) are not seen.

    Args:
        pdf_path: Path to the PDF file.
        fallback_title: Title to use when none is found.

    Returns:
        (title, author) tuple; author is "" when not found.
    """
    title, author = fallback_title, ""

    content = _read_head(pdf_path)
    if content is None:
        return title, author

    extracted_title = _string_after(content, "/Title")
    if extracted_title is not None and 2 < len(extracted_title) < _MAX_FIELD_LENGTH:
        title = extracted_title

    extracted_author = _string_after(content, "/Author")
    if extracted_author is not None and 0 < len(extracted_author) < _MAX_FIELD_LENGTH:
        author = extracted_author

    return title, author


def _rendered_page(prefix: Path) -> Path | None:
    """Locate pdftoppm's output for page 1.

    pdftoppm zero-pads the page number to the width of the document's page
    count, so a one-page PDF yields prefix-1.jpg and a 150-page PDF
    prefix-001.jpg.
    """
    for candidate in _page_candidates(prefix):
        if candidate.exists():
            return candidate
    return None


def _page_candidates(prefix: Path) -> list[Path]:
    return [
        prefix.with_name(prefix.name + suffix)
        for suffix in ("-1.jpg", "-01.jpg", "-001.jpg", "-0001.jpg")
    ]


def _discard_renders(prefix: Path) -> None:
    """Remove whatever page files a render attempt left behind."""
    for candidate in _page_candidates(prefix):
        try:
            candidate.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("Cannot remove %s: %s", candidate, exc)


def extract_pdf_cover(
    pdf_path: Path,
    cover_dir: Path,
    book_id: str,
    *,
    runner: Runner | None = None,
    timeout: float = RASTERIZE_TIMEOUT,
) -> Path | None:
    """Render the first page of a PDF to cover_dir/cover.jpg.

    Runs pdftoppm with a hard timeout. The temporary output name carries
    the book id so concurrent renders never collide. A missing rasterizer,
    a timeout, a non-zero exit, or missing output all mean "no cover".

    Args:
        pdf_path: Path to the PDF file.
        cover_dir: Directory to write cover.jpg into.
        book_id: Identifier used to namespace the temporary file.
        runner: Callable with the subprocess.run signature; defaults to
            subprocess.run.
        timeout: Seconds before the rasterizer is killed.

    Returns:
        Path to the written cover, or None.
    """
    run = runner or subprocess.run
    prefix = Path(tempfile.gettempdir()) / f"bookland-pdf-{book_id}"
    cmd = [
        RASTERIZER,
        "-jpeg",
        "-f", "1",
        "-l", "1",
        "-scale-to", str(COVER_SCALE),
        str(pdf_path),
        str(prefix),
    ]

    try:
        return _render_cover(run, cmd, pdf_path, prefix, cover_dir, timeout)
    finally:
        _discard_renders(prefix)


def _render_cover(
    run: Runner,
    cmd: list[str],
    pdf_path: Path,
    prefix: Path,
    cover_dir: Path,
    timeout: float,
) -> Path | None:
    try:
        completed = run(cmd, capture_output=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired:
        logger.warning("PDF cover extraction timed out for: %s", pdf_path)
        return None
    except OSError as exc:
        logger.warning("Failed to run %s for %s: %s", RASTERIZER, pdf_path, exc)
        return None

    if completed.returncode != 0:
        logger.warning(
            "%s exited with status %d for %s", RASTERIZER, completed.returncode, pdf_path
        )
        return None

    rendered = _rendered_page(prefix)
    if rendered is None:
        logger.warning("%s produced no output for %s", RASTERIZER, pdf_path)
        return None

    cover_path = cover_dir / "cover.jpg"
    try:
        if not is_valid_image(rendered.read_bytes()):
            logger.warning("%s output for %s is not a valid image", RASTERIZER, pdf_path)
            return None
        cover_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(rendered, cover_path)
    except OSError as exc:
        logger.warning("Could not write cover %s: %s", cover_path, exc)
        return None

    return cover_path
