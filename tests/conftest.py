"""Shared fixtures: small EPUB files written with ebooklib."""

from __future__ import annotations

from pathlib import Path

import pytest
from ebooklib import epub

LONG_PARAGRAPH = (
    "<p>It was a bright cold day in April, and the clocks were striking thirteen.</p>"
)

# JPEG header followed by binary noise; decodes to garbage, not HTML
JPEG_BYTES = b"\xff\xd8\xff\xe0" + bytes(range(256)) * 4


def write_epub(
    path: Path,
    chapters: list[str],
    title: str | None = "Sample Book",
    authors: tuple[str, ...] = ("Jane Doe",),
    identifier: str = "id-123",
    subjects: tuple[str, ...] = (),
    toc: list | None = None,
    cover_in_spine: bool = False,
) -> Path:
    """Write an EPUB whose spine holds one XHTML page per body in ``chapters``."""
    book = epub.EpubBook()
    book.set_identifier(identifier)
    if title is not None:
        book.set_title(title)
    book.set_language("en")
    for author in authors:
        book.add_author(author)
    for subject in subjects:
        book.add_metadata("DC", "subject", subject)

    items = []
    for number, body in enumerate(chapters, start=1):
        item = epub.EpubHtml(
            title=f"Chapter {number}",
            file_name=f"chap_{number:02d}.xhtml",
            lang="en",
        )
        item.content = (
            f"<html><head><title>Chapter {number}</title></head>"
            f"<body>{body}</body></html>"
        )
        book.add_item(item)
        items.append(item)

    if toc is None:
        toc = [
            epub.Link(item.file_name, item.title, f"chap{number}")
            for number, item in enumerate(items, start=1)
        ]
    book.toc = toc
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    spine: list = list(items)
    if cover_in_spine:
        cover = epub.EpubImage(
            uid="cover-img",
            file_name="cover.jpg",
            media_type="image/jpeg",
            content=JPEG_BYTES,
        )
        book.add_item(cover)
        spine.insert(1, "cover-img")
    book.spine = spine

    path.parent.mkdir(parents=True, exist_ok=True)
    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Three chapters; the middle one is too short to keep."""
    return write_epub(
        tmp_path / "sample.epub",
        chapters=[
            f"<h1>One</h1>{LONG_PARAGRAPH}",
            "<p>Cover</p>",
            f"<h1>Two</h1>{LONG_PARAGRAPH}",
        ],
        title="Sample Book",
        authors=("A", "B"),
    )


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """Directory tree with two valid books and one corrupt file."""
    root = tmp_path / "books"
    write_epub(root / "a.epub", chapters=[LONG_PARAGRAPH], title="Book A")
    broken = root / "b.epub"
    broken.write_bytes(b"this is not a zip archive")
    write_epub(root / "sub" / "c.epub", chapters=[LONG_PARAGRAPH], title="Book C")
    return root
