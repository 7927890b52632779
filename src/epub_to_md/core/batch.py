"""Convert every EPUB file under a directory in parallel."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from rich.console import Console

from epub_to_md.core.converter import convert_epub
from epub_to_md.core.errors import NoEpubFilesError, describe_error
from epub_to_md.core.paths import output_dir_for
from epub_to_md.models.options import ConversionOptions
from epub_to_md.models.result import BatchReport, ConversionResult

log = logging.getLogger(__name__)

EPUB_SUFFIX = ".epub"


def is_epub(path: Path, case_sensitive: bool = True) -> bool:
    """Check the file extension against ``.epub``."""
    if case_sensitive:
        return path.suffix == EPUB_SUFFIX
    return path.suffix.lower() == EPUB_SUFFIX


def find_epub_files(root: Path, case_sensitive: bool = True) -> list[Path]:
    """Recursively find EPUB files under ``root``, sorted by path."""
    found = sorted(
        path
        for path in root.rglob("*")
        if is_epub(path, case_sensitive) and path.is_file()
    )
    log.debug("Found %d EPUB file(s) under %s", len(found), root)
    return found


def discover_epub_files(root: Path, options: ConversionOptions) -> list[Path]:
    """Find the EPUB files to convert under ``root``.

    Raises:
        NoEpubFilesError: If the scan finds nothing
    """
    epub_files = find_epub_files(root, options.case_sensitive_extension)
    if not epub_files:
        raise NoEpubFilesError(f"No EPUB files found in directory: {root}", root)
    return epub_files


def convert_one(
    epub_path: Path,
    output_dir: Path,
    options: ConversionOptions,
    console: Console | None = None,
) -> ConversionResult:
    """Convert one file, turning any failure into a failed result."""
    try:
        return convert_epub(epub_path, output_dir, options, console)
    except Exception as e:  # noqa: BLE001 - one bad book must not stop the batch
        log.debug("Conversion of %s failed", epub_path, exc_info=True)
        return ConversionResult(
            source=epub_path,
            output_dir=output_dir,
            success=False,
            error=describe_error(e),
        )


def convert_files(
    epub_files: list[Path],
    input_root: Path,
    output_base: Path | None,
    options: ConversionOptions,
    console: Console | None = None,
    on_result: Callable[[ConversionResult], None] | None = None,
) -> BatchReport:
    """Convert ``epub_files`` concurrently.

    Every file gets its own document handle and output directory. Results
    are reported in the order of ``epub_files`` once all workers finish.
    """
    results: dict[Path, ConversionResult] = {}

    with ThreadPoolExecutor(
        max_workers=options.max_workers, thread_name_prefix="epub-convert"
    ) as executor:
        futures = [
            executor.submit(
                convert_one,
                epub_path,
                output_dir_for(epub_path, input_root, output_base),
                options,
                console,
            )
            for epub_path in epub_files
        ]
        for future in as_completed(futures):
            result = future.result()
            results[result.source] = result
            if on_result is not None:
                on_result(result)

    return BatchReport(
        root=input_root,
        results=[results[epub_path] for epub_path in epub_files],
    )


def convert_directory(
    root: Path,
    output_base: Path | None = None,
    options: ConversionOptions | None = None,
    console: Console | None = None,
) -> BatchReport:
    """Find and convert every EPUB file under ``root``.

    Raises:
        NoEpubFilesError: If the scan finds nothing
    """
    options = options or ConversionOptions()
    epub_files = discover_epub_files(root, options)
    return convert_files(epub_files, root, output_base, options, console)
