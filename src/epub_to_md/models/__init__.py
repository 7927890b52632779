"""Data models."""

from epub_to_md.models.book import (
    BookMetadata,
    ChapterContent,
    TocEntry,
)
from epub_to_md.models.options import (
    DEFAULT_MIN_CONTENT_LENGTH,
    ConversionOptions,
)
from epub_to_md.models.result import (
    BatchReport,
    ConversionResult,
)

__all__ = [
    # Book models
    "TocEntry",
    "BookMetadata",
    "ChapterContent",
    # Options
    "ConversionOptions",
    "DEFAULT_MIN_CONTENT_LENGTH",
    # Results
    "ConversionResult",
    "BatchReport",
]
