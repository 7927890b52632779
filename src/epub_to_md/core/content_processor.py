"""Render chapter HTML as Markdown."""

import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from markdownify import MarkdownConverter

from epub_to_md.models.options import DEFAULT_MIN_CONTENT_LENGTH

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


class ContentProcessor:
    """Convert HTML documents to Markdown and judge whether they carry content."""

    def __init__(self, min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH):
        self.min_content_length = min_content_length
        self.converter = MarkdownConverter(heading_style="ATX", bullets="-")

    def to_markdown(self, html: str) -> str:
        """Render the document body as Markdown.

        The head (title, styles) is not rendered; the body goes through
        markdownify unchanged.
        """
        soup = BeautifulSoup(html, "lxml")
        body = soup.body or soup
        return self.converter.convert_soup(body)

    def is_substantial(self, markdown: str) -> bool:
        """False for blank pages, covers and other near-empty chapters."""
        text = markdown.strip()
        return bool(text) and len(text) >= self.min_content_length
