# ABOUTME: Unit tests for EPUB title, author, and cover extraction.
# ABOUTME: Exercises container lookup, EPUB 2/3 cover strategies, the filename fallback, and soft failures.

from pathlib import Path

from bookland.formats.epub import extract_epub_metadata
from tests.fixtures.books import (
    JPEG_BYTES,
    NOT_AN_IMAGE,
    PNG_BYTES,
    opf_document,
    write_epub,
)

TITLED = "<dc:title>Foo</dc:title>\n<dc:creator>Bar</dc:creator>"


def _epub(tmp_path: Path, files: dict[str, bytes | str], **kwargs) -> Path:
    return write_epub(tmp_path / "book.epub", files, **kwargs)


class TestTitleAndAuthor:
    """Title and author come from the first dc:title and dc:creator."""

    def test_epub3_fields(self, epub3_book: Path, tmp_path: Path) -> None:
        result = extract_epub_metadata(epub3_book, tmp_path / "covers", "fallback")
        assert result.title == "Foo"
        assert result.author == "Bar"

    def test_creator_with_attributes(self, epub2_book: Path, tmp_path: Path) -> None:
        """Attributes on dc:creator do not leak into the author text."""
        result = extract_epub_metadata(epub2_book, tmp_path / "covers", "fallback")
        assert result.title == "The Second Edition"
        assert result.author == "Jane Doe"

    def test_first_creator_wins(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=(
                "<dc:title>Good Omens</dc:title>"
                "<dc:creator>Terry Pratchett</dc:creator>"
                "<dc:creator>Neil Gaiman</dc:creator>"
            )
        )
        path = _epub(tmp_path, {"OEBPS/content.opf": opf})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.author == "Terry Pratchett"

    def test_missing_title_keeps_fallback(self, tmp_path: Path) -> None:
        opf = opf_document(metadata="<dc:creator>Anonymous</dc:creator>")
        path = _epub(tmp_path, {"OEBPS/content.opf": opf})
        result = extract_epub_metadata(path, tmp_path / "covers", "my-file")
        assert result.title == "my-file"
        assert result.author == "Anonymous"

    def test_missing_creator_is_empty(self, tmp_path: Path) -> None:
        opf = opf_document(metadata="<dc:title>Solo</dc:title>")
        path = _epub(tmp_path, {"OEBPS/content.opf": opf})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.author == ""

    def test_malformed_opf_is_recovered(self, tmp_path: Path) -> None:
        """An unclosed element later in the document does not hide the title."""
        opf = (
            '<?xml version="1.0"?><package xmlns="http://www.idpf.org/2007/opf">'
            '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">'
            "<dc:title>Broken But Readable</dc:title><dc:creator>Someone</dc:creator>"
            "</metadata><manifest><item id='x' href='a.xhtml'>"
        )
        path = _epub(tmp_path, {"OEBPS/content.opf": opf})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "Broken But Readable"
        assert result.author == "Someone"


class TestEpub3Cover:
    """Strategy A: manifest item with properties="cover-image"."""

    def test_writes_cover_jpg(self, epub3_book: Path, tmp_path: Path) -> None:
        cover_dir = tmp_path / "covers"
        result = extract_epub_metadata(epub3_book, cover_dir, "fallback")
        assert result.cover_path == cover_dir / "cover.jpg"
        assert result.cover_path.read_bytes() == JPEG_BYTES
        assert result.has_cover

    def test_property_list_with_other_values(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest='<item id="c" href="c.png" media-type="image/png" properties="svg cover-image"/>',
        )
        path = _epub(tmp_path, {"OEBPS/content.opf": opf, "OEBPS/c.png": PNG_BYTES})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path == tmp_path / "covers" / "cover.png"

    def test_beats_epub2_meta(self, tmp_path: Path) -> None:
        """When both declarations exist, the cover-image property is used."""
        opf = opf_document(
            metadata=TITLED + '<meta name="cover" content="old-cover"/>',
            manifest=(
                '<item id="old-cover" href="old.png" media-type="image/png"/>'
                '<item id="new-cover" href="new.jpg" media-type="image/jpeg" '
                'properties="cover-image"/>'
            ),
        )
        path = _epub(
            tmp_path,
            {
                "OEBPS/content.opf": opf,
                "OEBPS/old.png": PNG_BYTES,
                "OEBPS/new.jpg": JPEG_BYTES,
            },
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path == tmp_path / "covers" / "cover.jpg"


class TestEpub2Cover:
    """Strategy B: <meta name="cover"> naming an image manifest item."""

    def test_writes_cover_png(self, epub2_book: Path, tmp_path: Path) -> None:
        cover_dir = tmp_path / "covers"
        result = extract_epub_metadata(epub2_book, cover_dir, "fallback")
        assert result.cover_path == cover_dir / "cover.png"
        assert result.cover_path.read_bytes() == PNG_BYTES

    def test_non_image_item_is_ignored(self, tmp_path: Path) -> None:
        """A cover meta pointing at an XHTML page yields no cover."""
        opf = opf_document(
            metadata=TITLED + '<meta name="cover" content="cover-page"/>',
            manifest='<item id="cover-page" href="cover.xhtml" media-type="application/xhtml+xml"/>',
        )
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "OEBPS/cover.xhtml": "<html/>"},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is None
        assert not (tmp_path / "covers").exists()


class TestFilenameFallback:
    """Strategy C: an archive member named cover.jpg/.jpeg/.png anywhere."""

    def test_finds_case_insensitive_name(self, tmp_path: Path) -> None:
        opf = opf_document(metadata=TITLED)
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "OEBPS/Images/Cover.JPEG": JPEG_BYTES},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path == tmp_path / "covers" / "cover.jpg"
        assert result.cover_path.read_bytes() == JPEG_BYTES

    def test_archive_path_is_not_joined_with_opf_dir(self, tmp_path: Path) -> None:
        """The member path is used as-is, even outside the OPF's folder."""
        opf = opf_document(metadata=TITLED)
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "art/cover.png": PNG_BYTES},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path == tmp_path / "covers" / "cover.png"

    def test_used_when_opf_entry_is_missing(self, tmp_path: Path) -> None:
        """container.xml points at a missing OPF: no metadata, but the cover is found."""
        path = _epub(tmp_path, {"images/cover.jpg": JPEG_BYTES})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "fallback"
        assert result.author == ""
        assert result.cover_path == tmp_path / "covers" / "cover.jpg"

    def test_other_names_are_not_covers(self, tmp_path: Path) -> None:
        opf = opf_document(metadata=TITLED)
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "OEBPS/front.jpg": JPEG_BYTES, "OEBPS/cover.gif": JPEG_BYTES},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is None


class TestHrefResolution:
    """Manifest hrefs are resolved against the OPF's directory."""

    def test_opf_at_archive_root(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest='<item id="c" href="img/c.jpg" media-type="image/jpeg" properties="cover-image"/>',
        )
        path = _epub(
            tmp_path,
            {"content.opf": opf, "img/c.jpg": JPEG_BYTES},
            opf_path="content.opf",
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "Foo"
        assert result.cover_path is not None

    def test_parent_directory_segments(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest='<item id="c" href="../Images/c.jpg" media-type="image/jpeg" properties="cover-image"/>',
        )
        path = _epub(
            tmp_path,
            {"OEBPS/Text/content.opf": opf, "OEBPS/Images/c.jpg": JPEG_BYTES},
            opf_path="OEBPS/Text/content.opf",
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is not None

    def test_percent_encoded_spaces(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest=(
                '<item id="c" href="images/front%20cover.jpg" media-type="image/jpeg" '
                'properties="cover-image"/>'
            ),
        )
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "OEBPS/images/front cover.jpg": JPEG_BYTES},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is not None

    def test_declared_cover_missing_from_archive(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest='<item id="c" href="gone.jpg" media-type="image/jpeg" properties="cover-image"/>',
        )
        path = _epub(tmp_path, {"OEBPS/content.opf": opf})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "Foo"
        assert result.cover_path is None


class TestInvalidCover:
    """A resolved cover that is not an image means no cover at all."""

    def test_text_cover_is_discarded(self, tmp_path: Path) -> None:
        opf = opf_document(
            metadata=TITLED,
            manifest='<item id="c" href="cover.jpg" media-type="image/jpeg" properties="cover-image"/>',
        )
        path = _epub(tmp_path, {"OEBPS/content.opf": opf, "OEBPS/cover.jpg": NOT_AN_IMAGE})
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is None
        assert result.title == "Foo"
        assert result.author == "Bar"
        assert not (tmp_path / "covers").exists()

    def test_no_fallback_to_lower_priority_strategy(self, tmp_path: Path) -> None:
        """Once the cover-image property resolves, a valid EPUB 2 cover is not tried."""
        opf = opf_document(
            metadata=TITLED + '<meta name="cover" content="b"/>',
            manifest=(
                '<item id="a" href="a.jpg" media-type="image/jpeg" properties="cover-image"/>'
                '<item id="b" href="b.png" media-type="image/png"/>'
            ),
        )
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "OEBPS/a.jpg": NOT_AN_IMAGE, "OEBPS/b.png": PNG_BYTES},
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.cover_path is None


class TestSoftFailures:
    """Unreadable input returns defaults instead of raising."""

    def test_no_container_xml(self, tmp_path: Path) -> None:
        opf = opf_document(metadata=TITLED)
        path = _epub(
            tmp_path,
            {"OEBPS/content.opf": opf, "cover.jpg": JPEG_BYTES},
            opf_path=None,
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "fallback"
        assert result.author == ""
        assert result.cover_path is None

    def test_container_without_full_path(self, tmp_path: Path) -> None:
        path = _epub(
            tmp_path,
            {"META-INF/container.xml": "<container><rootfiles/></container>"},
            opf_path=None,
        )
        result = extract_epub_metadata(path, tmp_path / "covers", "fallback")
        assert result.title == "fallback"
        assert result.cover_path is None

    def test_corrupt_file(self, corrupt_epub: Path, tmp_path: Path) -> None:
        result = extract_epub_metadata(corrupt_epub, tmp_path / "covers", "corrupt")
        assert result.title == "corrupt"
        assert result.author == ""
        assert result.cover_path is None

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        result = extract_epub_metadata(tmp_path / "missing.epub", tmp_path / "covers", "missing")
        assert result.title == "missing"
        assert result.cover_path is None

    def test_unwritable_cover_dir_keeps_metadata(self, epub3_book: Path, tmp_path: Path) -> None:
        blocker = tmp_path / "blocked"
        blocker.write_text("a file, not a directory")
        result = extract_epub_metadata(epub3_book, blocker, "fallback")
        assert result.title == "Foo"
        assert result.author == "Bar"
        assert result.cover_path is None


class TestEbooklibOutput:
    """EPUBs written by ebooklib are read like any other."""

    def test_reads_title_author_and_cover(self, sample_epub: Path, tmp_path: Path) -> None:
        result = extract_epub_metadata(sample_epub, tmp_path / "covers", "fallback")
        assert result.title == "The Name of the Rose"
        assert result.author == "Umberto Eco"
        assert result.cover_path == tmp_path / "covers" / "cover.jpg"
        assert result.cover_path.read_bytes() == JPEG_BYTES
