"""EPUB container access using ebooklib."""

import logging
import warnings
from pathlib import Path

import ebooklib
from bs4 import UnicodeDammit
from ebooklib import epub

from epub_to_md.core.errors import ConversionError
from epub_to_md.models.book import ChapterContent

# ebooklib warns about upcoming defaults on every read
warnings.filterwarnings("ignore", category=UserWarning, module="ebooklib")
warnings.filterwarnings("ignore", category=FutureWarning, module="ebooklib")

log = logging.getLogger(__name__)

MODIFIED_PROPERTY = "dcterms:modified"
HTML_MEDIA_TYPES = {"application/xhtml+xml", "text/html"}


class EpubDocument:
    """Read-only view of an opened EPUB file.

    Chapters are fetched by explicit spine index, so there is no shared
    cursor. One instance belongs to one conversion and is never shared
    between workers.
    """

    def __init__(self, epub_path: Path):
        self.path = epub_path
        try:
            self.book = epub.read_epub(str(epub_path))
        except Exception as e:
            raise ConversionError("Failed to open EPUB file", epub_path) from e

    @property
    def spine_length(self) -> int:
        return len(self.book.spine)

    @property
    def version(self) -> str:
        """Package version attribute, e.g. ``"3.0"``."""
        version = getattr(self.book, "version", None)
        return str(version) if version else "unknown"

    def metadata_values(self, name: str) -> list[str]:
        """All Dublin Core values for ``name`` in document order."""
        try:
            entries = self.book.get_metadata("DC", name)
        except KeyError:
            return []
        return [value for value, _attrs in entries if value is not None]

    def metadata_value(self, name: str) -> str | None:
        """First Dublin Core value for ``name``, if any."""
        values = self.metadata_values(name)
        return values[0] if values else None

    def _opf_meta_entries(self) -> list[tuple[str | None, dict]]:
        entries = []
        # Read books keep <meta> under the OPF namespace, built books under None
        for namespace in (epub.NAMESPACES["OPF"], None):
            for values in self.book.metadata.get(namespace, {}).values():
                entries.extend(values)
        return entries

    @property
    def release_identifier(self) -> str | None:
        """``identifier@modified`` as defined for EPUB 3 packages."""
        identifier = self.metadata_value("identifier")
        if not identifier:
            return None
        for value, attrs in self._opf_meta_entries():
            if (attrs or {}).get("property") == MODIFIED_PROPERTY and value:
                return f"{identifier}@{value.strip()}"
        return None

    @property
    def toc(self) -> list:
        """Raw ebooklib navigation tree (links and ``(section, children)`` tuples)."""
        return list(self.book.toc or [])

    def _spine_id(self, index: int) -> str:
        entry = self.book.spine[index]
        # read books store (idref, linear); built books may hold ids or items
        if isinstance(entry, tuple):
            entry = entry[0]
        if isinstance(entry, str):
            return entry
        return entry.get_id()

    def chapter_at(self, index: int) -> ChapterContent | None:
        """Decoded content of the spine entry at ``index``.

        Returns None when the entry points at a missing item, at
        something other than an (X)HTML document, or has no decodable text.
        """
        item_id = self._spine_id(index)
        item = self.book.get_item_with_id(item_id)
        if item is None:
            log.debug(
                "%s: spine entry %d (%s) has no manifest item",
                self.path.name,
                index,
                item_id,
            )
            return None

        if not is_text_item(item):
            log.debug(
                "%s: spine entry %d (%s) is not a document",
                self.path.name,
                index,
                item.media_type,
            )
            return None

        # raw file payload; EpubHtml.get_content() would re-template the page
        raw = item.content
        if not raw:
            return None
        if isinstance(raw, str):
            html = raw
        else:
            html = UnicodeDammit(raw).unicode_markup
        if html is None:
            log.debug("%s: could not decode %s", self.path.name, item.get_name())
            return None

        return ChapterContent(
            index=index,
            item_id=item_id,
            file_name=item.get_name(),
            media_type=item.media_type or "",
            html=html,
        )


def is_text_item(item) -> bool:
    """True for (X)HTML documents; images, styles and fonts are not chapters."""
    if item.get_type() == ebooklib.ITEM_DOCUMENT:
        return True
    return (item.media_type or "").lower() in HTML_MEDIA_TYPES
