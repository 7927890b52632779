"""Tests for ContentProcessor and chapter rendering."""

from epub_to_md.core.content_processor import ContentProcessor
from epub_to_md.core.converter import chapter_filename, render_chapters
from epub_to_md.models.book import ChapterContent


class FakeDocument:
    """Spine of raw HTML pages; None stands for an entry without content."""

    def __init__(self, pages):
        self.pages = pages

    @property
    def spine_length(self):
        return len(self.pages)

    def chapter_at(self, index):
        html = self.pages[index]
        if html is None:
            return None
        return ChapterContent(
            index=index,
            item_id=f"item{index}",
            file_name=f"page{index}.xhtml",
            media_type="application/xhtml+xml",
            html=html,
        )


def page(body: str) -> str:
    return f"<html><head><title>Ignored</title></head><body>{body}</body></html>"


LONG = page("<p>" + "word " * 20 + "</p>")
SHORT = page("<p>Cover</p>")


class TestContentProcessor:
    """Test cases for ContentProcessor."""

    def test_renders_headings_atx(self):
        markdown = ContentProcessor().to_markdown(page("<h1>Title</h1><p>Body</p>"))

        assert "# Title" in markdown
        assert "Body" in markdown

    def test_lists_and_links(self):
        markdown = ContentProcessor().to_markdown(
            page(
                "<ul><li>first</li><li>second</li></ul>"
                '<p><a href="x.html">link</a></p>'
            )
        )

        assert "- first" in markdown
        assert "- second" in markdown
        assert "[link](x.html)" in markdown

    def test_processor_reused_across_pages(self):
        processor = ContentProcessor()

        first = processor.to_markdown(page("<h2>A</h2>"))
        second = processor.to_markdown(page("<h2>B</h2>"))

        assert first.strip() == "## A"
        assert second.strip() == "## B"

    def test_head_not_rendered(self):
        markdown = ContentProcessor().to_markdown(page("<p>Body</p>"))
        assert "Ignored" not in markdown

    def test_exactly_threshold_is_kept(self):
        processor = ContentProcessor()
        markdown = processor.to_markdown(page("<p>" + "a" * 50 + "</p>"))

        assert len(markdown.strip()) == 50
        assert processor.is_substantial(markdown)

    def test_below_threshold_is_dropped(self):
        processor = ContentProcessor()
        markdown = processor.to_markdown(page("<p>" + "a" * 49 + "</p>"))

        assert not processor.is_substantial(markdown)

    def test_whitespace_only_is_dropped(self):
        processor = ContentProcessor(min_content_length=0)
        assert not processor.is_substantial("   \n\n  ")

    def test_custom_threshold(self):
        processor = ContentProcessor(min_content_length=3)
        assert processor.is_substantial("abc")


class TestRenderChapters:
    """Test cases for render_chapters."""

    def test_numbering_is_dense_over_kept_chapters(self):
        document = FakeDocument([LONG, SHORT, LONG, SHORT, LONG])

        chapters = list(render_chapters(document, ContentProcessor()))

        assert [c.number for c in chapters] == [1, 2, 3]
        assert [c.spine_index for c in chapters] == [0, 2, 4]
        assert [c.filename for c in chapters] == [
            "chapter_001.md",
            "chapter_002.md",
            "chapter_003.md",
        ]

    def test_missing_content_skipped(self):
        document = FakeDocument([None, LONG, None])

        chapters = list(render_chapters(document, ContentProcessor()))

        assert len(chapters) == 1
        assert chapters[0].number == 1
        assert chapters[0].spine_index == 1

    def test_empty_spine(self):
        assert list(render_chapters(FakeDocument([]), ContentProcessor())) == []


def test_chapter_filename_overflows_padding():
    assert chapter_filename(7) == "chapter_007.md"
    assert chapter_filename(1234) == "chapter_1234.md"
