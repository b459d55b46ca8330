# ABOUTME: Shared pytest fixtures for Bookland tests.
# ABOUTME: Provides sample EPUB/CBZ/PDF files, a temporary catalog, and a fake PDF rasterizer.

from pathlib import Path

import pytest
from ebooklib import epub

from bookland.core.storage import LibraryStorage
from bookland.db.catalog import LibraryCatalog
from bookland.db.connection import library_connection
from tests.fixtures.books import (
    JPEG_BYTES,
    PNG_BYTES,
    opf_document,
    pdf_bytes,
    write_cbz,
    write_epub,
)
from tests.fixtures.rasterizer import FakeRasterizer


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def storage(tmp_path: Path) -> LibraryStorage:
    """Library layout rooted in a temporary data directory."""
    return LibraryStorage(tmp_path / "data")


@pytest.fixture
def catalog(storage: LibraryStorage):
    """Provide a LibraryCatalog backed by a temporary database."""
    with library_connection(storage.db_path) as conn:
        yield LibraryCatalog(conn)


@pytest.fixture
def epub3_book(tmp_path: Path) -> Path:
    """EPUB 3 with title, author, and a cover-image manifest item."""
    opf = opf_document(
        metadata="<dc:title>Foo</dc:title>\n<dc:creator>Bar</dc:creator>",
        manifest=(
            '<item id="cover" href="images/cover.jpg" media-type="image/jpeg" '
            'properties="cover-image"/>'
        ),
    )
    return write_epub(
        tmp_path / "foo.epub",
        {
            "OEBPS/content.opf": opf,
            "OEBPS/chap01.xhtml": "<html><body><p>Foo</p></body></html>",
            "OEBPS/images/cover.jpg": JPEG_BYTES,
        },
    )


@pytest.fixture
def epub2_book(tmp_path: Path) -> Path:
    """EPUB 2 whose cover is declared through <meta name="cover">."""
    opf = opf_document(
        metadata=(
            "<dc:title>The Second Edition</dc:title>\n"
            '<dc:creator opf:role="aut" opf:file-as="Doe, Jane">Jane Doe</dc:creator>\n'
            '<meta name="cover" content="cover-id"/>'
        ),
        manifest='<item id="cover-id" href="cover.png" media-type="image/png"/>',
        version="2.0",
    )
    return write_epub(
        tmp_path / "second.epub",
        {
            "OEBPS/content.opf": opf,
            "OEBPS/chap01.xhtml": "<html><body><p>Two</p></body></html>",
            "OEBPS/cover.png": PNG_BYTES,
        },
    )


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """A realistic EPUB written by ebooklib, with a cover image."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")
    book.set_cover("cover.jpg", JPEG_BYTES)

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    # Add navigation
    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """A PDF with /Title and /Author in its info dictionary."""
    filepath = tmp_path / "my_book.pdf"
    filepath.write_bytes(pdf_bytes(title="My Book", author="Jane Doe"))
    return filepath


@pytest.fixture
def sample_cbz(tmp_path: Path) -> Path:
    """A CBZ whose pages are stored out of order next to a text file."""
    return write_cbz(
        tmp_path / "comic.cbz",
        {
            "page2.jpg": JPEG_BYTES + b"page2",
            "page1.jpg": JPEG_BYTES + b"page1",
            "notes.txt": b"scanned by someone",
        },
    )


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    """A rasterizer that succeeds and renders a tiny JPEG."""
    return FakeRasterizer()


@pytest.fixture
def library_dir(tmp_path: Path, epub3_book: Path, sample_cbz: Path) -> Path:
    """A folder of mixed files as a user would point `bookland scan` at.

    Layout:
        books/
            foo.epub        (EPUB 3 with cover)
            comic.cbz
            Dune.mobi
            readme.txt      (unsupported, ignored)
            nested/
                hidden.epub (not scanned: no recursion)
    """
    root = tmp_path / "books"
    root.mkdir()
    epub3_book.rename(root / "foo.epub")
    sample_cbz.rename(root / "comic.cbz")
    (root / "Dune.mobi").write_bytes(b"BOOKMOBI fake mobi")
    (root / "readme.txt").write_text("not a book")
    nested = root / "nested"
    nested.mkdir()
    (nested / "hidden.epub").write_bytes(b"fake epub")
    return root
