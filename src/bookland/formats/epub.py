# ABOUTME: EPUB title, author, and cover extraction straight from the zip container.
# ABOUTME: Fail-soft: unreadable archives or missing structure fall back to default values.

import logging
import posixpath
import zipfile
from pathlib import Path

from lxml import etree

from bookland.formats.archive import open_archive, read_entry
from bookland.formats.images import is_valid_image, save_cover
from bookland.metadata.types import ExtractionResult

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"

# Base names (lowercased) tried when the OPF does not declare a cover
COVER_FILENAMES: frozenset[str] = frozenset({"cover.jpg", "cover.jpeg", "cover.png"})


def _parse_xml(data: bytes) -> etree._Element | None:
    """Parse XML leniently, recovering from malformed markup where possible."""
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError):
        return None


def _local_name(element: etree._Element) -> str | None:
    """Tag name without namespace URI or prefix; None for comments and PIs."""
    tag = element.tag
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _iter_elements(root: etree._Element, name: str):
    """Yield elements with the given local name, in document order."""
    for element in root.iter():
        if _local_name(element) == name:
            yield element


def _first_text(root: etree._Element, name: str) -> str | None:
    """Stripped text of the first element with the given local name."""
    for element in _iter_elements(root, name):
        text = "".join(element.itertext()).strip()
        return text or None
    return None


def _find_opf_path(archive: zipfile.ZipFile) -> str | None:
    """Resolve the package document path from META-INF/container.xml."""
    data = read_entry(archive, CONTAINER_PATH)
    if data is None:
        return None
    container = _parse_xml(data)
    if container is None:
        return None
    for rootfile in _iter_elements(container, "rootfile"):
        full_path = rootfile.get("full-path")
        if full_path:
            return full_path
    return None


def _cover_href_from_properties(opf: etree._Element) -> str | None:
    """EPUB 3: the manifest item flagged with the cover-image property."""
    for item in _iter_elements(opf, "item"):
        if "cover-image" in (item.get("properties") or "").split():
            return item.get("href") or None
    return None


def _cover_href_from_meta(opf: etree._Element) -> str | None:
    """EPUB 2: <meta name="cover" content="id"/> pointing at an image manifest item."""
    cover_id = None
    for meta in _iter_elements(opf, "meta"):
        if meta.get("name") == "cover":
            cover_id = meta.get("content")
            break
    if not cover_id:
        return None

    for item in _iter_elements(opf, "item"):
        if item.get("id") != cover_id:
            continue
        if not (item.get("media-type") or "").startswith("image/"):
            return None
        return item.get("href") or None
    return None


def _cover_entry_by_filename(archive: zipfile.ZipFile) -> str | None:
    """Last resort: any member named cover.jpg/.jpeg/.png, at any depth."""
    for name in archive.namelist():
        basename = posixpath.basename(name.replace("\\", "/"))
        if basename.lower() in COVER_FILENAMES:
            return name
    return None


def _locate_cover(
    archive: zipfile.ZipFile, opf: etree._Element | None, opf_path: str
) -> str | None:
    """Find the archive path of the cover image.

    Strategies run in a fixed order and the first one that yields a
    location wins: the EPUB 3 cover-image property, the EPUB 2 cover meta,
    then a file-name search. Manifest hrefs are relative to the OPF's
    directory; the file-name search already returns an archive path.
    """
    href = None
    if opf is not None:
        href = _cover_href_from_properties(opf) or _cover_href_from_meta(opf)

    if href:
        opf_dir = posixpath.dirname(opf_path)
        location = posixpath.normpath(posixpath.join(opf_dir, href))
    else:
        location = _cover_entry_by_filename(archive)
        if location is None:
            return None

    return location.replace("\\", "/").replace("%20", " ")


def _find_entry(archive: zipfile.ZipFile, location: str) -> str | None:
    """Match a resolved location against member names, tolerating backslashes."""
    for name in archive.namelist():
        if name == location or name.replace("\\", "/") == location:
            return name
    return None


def _read_cover(
    archive: zipfile.ZipFile, opf: etree._Element | None, opf_path: str
) -> bytes | None:
    """Locate, read, and validate the cover image bytes.

    Only one location is ever tried: if it does not hold a valid image the
    book simply has no cover.
    """
    location = _locate_cover(archive, opf, opf_path)
    if location is None:
        return None

    entry = _find_entry(archive, location)
    if entry is None:
        logger.debug("Cover %s not found in %s", location, archive.filename)
        return None

    data = read_entry(archive, entry)
    if data is None:
        return None

    if not is_valid_image(data):
        logger.warning("Cover file %s is not a valid image", entry)
        return None

    return data


def extract_epub_metadata(
    epub_path: Path, cover_dir: Path, fallback_title: str
) -> ExtractionResult:
    """Extract title, author, and cover from an EPUB file.

    Never raises. Each step that fails leaves its field at the default:
    fallback_title for the title, an empty author, and no cover.

    Args:
        epub_path: Path to the EPUB file.
        cover_dir: Directory to write cover.jpg or cover.png into.
        fallback_title: Title to use when the OPF has none.

    Returns:
        ExtractionResult with whatever could be recovered.
    """
    result = ExtractionResult(title=fallback_title)

    archive = open_archive(epub_path)
    if archive is None:
        return result

    with archive:
        opf_path = _find_opf_path(archive)
        if opf_path is None:
            logger.debug("No package document declared in %s", epub_path)
            return result

        opf = None
        opf_data = read_entry(archive, opf_path)
        if opf_data is not None:
            opf = _parse_xml(opf_data)

        if opf is not None:
            result.title = _first_text(opf, "title") or fallback_title
            result.author = _first_text(opf, "creator") or ""

        cover_data = _read_cover(archive, opf, opf_path)

    if cover_data is not None:
        result.cover_path = save_cover(cover_data, cover_dir)

    return result
