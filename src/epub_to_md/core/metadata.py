"""Extract book metadata from an opened EPUB."""

from epub_to_md.core.epub_reader import EpubDocument
from epub_to_md.models.book import BookMetadata, TocEntry

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"


def extract_metadata(document: EpubDocument) -> BookMetadata:
    """Read descriptive fields from the package metadata.

    Missing fields become None or empty lists; nothing here raises for
    incomplete metadata.
    """
    return BookMetadata(
        title=document.metadata_value("title"),
        creators=document.metadata_values("creator"),
        language=document.metadata_value("language"),
        description=document.metadata_value("description"),
        publisher=document.metadata_value("publisher"),
        date=document.metadata_value("date"),
        subjects=document.metadata_values("subject"),
        identifier=document.metadata_value("identifier"),
        rights=document.metadata_value("rights"),
        contributors=document.metadata_values("contributor"),
        source=document.metadata_value("source"),
        epub_version=document.version,
        release_identifier=document.release_identifier,
        chapter_count=document.spine_length,
        toc=build_toc(document.toc),
    )


def build_toc(toc_items: list) -> list[TocEntry]:
    """Recursively map ebooklib navigation nodes to TocEntry trees."""
    entries = []

    for item in toc_items:
        if isinstance(item, (tuple, list)):
            # Section with children: (Section, [children])
            section, children = item
            entries.append(
                TocEntry(label=_label(section), children=build_toc(children))
            )
        else:
            entries.append(TocEntry(label=_label(item)))

    return entries


def _label(node) -> str:
    return getattr(node, "title", None) or ""


def resolve_display_names(
    metadata: BookMetadata,
    default_title: str = UNKNOWN_TITLE,
    default_author: str = UNKNOWN_AUTHOR,
) -> tuple[str, str]:
    """Title and first author for display, with fallbacks for missing values."""
    title = metadata.title or default_title
    author = metadata.creators[0] if metadata.creators else default_author
    return title, author
