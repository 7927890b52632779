"""Convert a single EPUB file to Markdown."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rich.console import Console

from epub_to_md.core.content_processor import ContentProcessor
from epub_to_md.core.epub_reader import EpubDocument
from epub_to_md.core.errors import ConversionError
from epub_to_md.core.metadata import extract_metadata, resolve_display_names
from epub_to_md.core.paths import sanitize_filename
from epub_to_md.models.book import ChapterContent
from epub_to_md.models.options import ConversionOptions
from epub_to_md.models.result import ConversionResult

log = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.json"
CHAPTER_SEPARATOR = "\n\n---\n\n"


class ChapterSource(Protocol):
    """Anything that hands out chapter content by spine index."""

    @property
    def spine_length(self) -> int: ...

    def chapter_at(self, index: int) -> ChapterContent | None: ...


@dataclass
class RenderedChapter:
    """A chapter that passed the content filter."""

    number: int  # 1-based, dense over kept chapters
    spine_index: int
    markdown: str

    @property
    def filename(self) -> str:
        return chapter_filename(self.number)


def chapter_filename(number: int) -> str:
    return f"chapter_{number:03d}.md"


def render_chapters(
    document: ChapterSource, processor: ContentProcessor
) -> Iterator[RenderedChapter]:
    """Render the spine in reading order, skipping near-empty chapters.

    Skipped entries do not consume a chapter number.
    """
    number = 1

    for index in range(document.spine_length):
        chapter = document.chapter_at(index)
        if chapter is None:
            continue

        markdown = processor.to_markdown(chapter.html)
        if not processor.is_substantial(markdown):
            log.debug(
                "Skipping spine entry %d (%s): too short", index, chapter.file_name
            )
            continue

        yield RenderedChapter(number=number, spine_index=index, markdown=markdown)
        number += 1


def merged_header(title: str, author: str) -> str:
    return f"# {title}\n\n**Author:** {author}\n\n---\n\n"


class BookConverter:
    """Convert one EPUB file into a directory of Markdown files."""

    def __init__(
        self,
        epub_path: Path,
        output_dir: Path,
        options: ConversionOptions | None = None,
        console: Console | None = None,
    ):
        """Initialize the converter.

        Args:
            epub_path: Source EPUB file
            output_dir: Directory receiving the Markdown output
            options: Conversion settings (defaults when omitted)
            console: Where to print the per-book summary line, if anywhere
        """
        self.epub_path = epub_path
        self.output_dir = output_dir
        self.options = options or ConversionOptions()
        self.console = console
        self.processor = ContentProcessor(self.options.min_content_length)

    def convert(self) -> ConversionResult:
        """Run the conversion.

        Raises:
            ConversionError: If the file cannot be opened or any output
                file cannot be written
        """
        document = EpubDocument(self.epub_path)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionError(
                "Failed to create output directory", self.epub_path
            ) from e

        written: list[Path] = []

        metadata = extract_metadata(document)
        if self.options.write_metadata:
            written.append(
                self._write(METADATA_FILENAME, metadata.model_dump_json(indent=2))
            )

        title, author = resolve_display_names(metadata)
        if self.console is not None:
            self.console.print(
                f"  [{self.epub_path.name}] Title: {title}, Author: {author}",
                markup=False,
                highlight=False,
            )

        chapters = render_chapters(document, self.processor)
        if self.options.single_file:
            count = self._write_merged(chapters, title, author, written)
        else:
            count = 0
            for chapter in chapters:
                written.append(self._write(chapter.filename, chapter.markdown))
                count += 1

        log.debug(
            "%s: wrote %d chapter(s) to %s", self.epub_path.name, count, self.output_dir
        )

        return ConversionResult(
            source=self.epub_path,
            output_dir=self.output_dir,
            success=True,
            title=title,
            author=author,
            chapters_written=count,
            output_files=written,
        )

    def _write_merged(
        self,
        chapters: Iterator[RenderedChapter],
        title: str,
        author: str,
        written: list[Path],
    ) -> int:
        parts = [merged_header(title, author)]
        count = 0
        for chapter in chapters:
            parts.append(chapter.markdown)
            parts.append(CHAPTER_SEPARATOR)
            count += 1

        filename = f"{sanitize_filename(title)}.md"
        written.append(
            self._write(
                filename,
                "".join(parts),
                failure="Failed to write combined Markdown file",
            )
        )
        return count

    def _write(self, filename: str, content: str, failure: str | None = None) -> Path:
        filepath = self.output_dir / filename
        try:
            filepath.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConversionError(
                failure or f"Failed to write {filename}", self.epub_path
            ) from e
        return filepath


def convert_epub(
    epub_path: Path,
    output_dir: Path,
    options: ConversionOptions | None = None,
    console: Console | None = None,
) -> ConversionResult:
    """Convert ``epub_path`` into ``output_dir``; raises ConversionError on failure."""
    return BookConverter(epub_path, output_dir, options, console).convert()
