"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from epub_to_md.commands.convert import execute_convert
from epub_to_md.core.batch import is_epub
from epub_to_md.core.errors import describe_error
from epub_to_md.models.options import DEFAULT_MIN_CONTENT_LENGTH, ConversionOptions

app = typer.Typer(
    name="epub-to-md",
    help="Convert EPUB files to Markdown format.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def convert(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Path to an EPUB file or a directory containing EPUB files",
            show_default=False,
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output directory for Markdown files "
            "(default: {name}_markdown next to each EPUB)",
        ),
    ] = None,
    single: Annotated[
        bool,
        typer.Option(
            "--single",
            "-s",
            help="Create a single merged Markdown file instead of separate files",
        ),
    ] = False,
    no_metadata: Annotated[
        bool,
        typer.Option(
            "--no-metadata",
            help="Do not write metadata.json next to the Markdown output",
        ),
    ] = False,
    min_length: Annotated[
        int,
        typer.Option(
            "--min-length",
            help="Skip chapters whose Markdown is shorter than this many characters",
            min=0,
        ),
    ] = DEFAULT_MIN_CONTENT_LENGTH,
    ignore_case: Annotated[
        bool,
        typer.Option(
            "--ignore-case",
            help="Accept .EPUB and other case variants of the extension",
        ),
    ] = False,
    workers: Annotated[
        Optional[int],
        typer.Option(
            "--workers",
            "-j",
            help="Number of books converted in parallel (directory input)",
            min=1,
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Convert an EPUB file, or every EPUB under a directory, to Markdown."""
    configure_logging(verbose)

    try:
        options = ConversionOptions(
            single_file=single,
            write_metadata=not no_metadata,
            min_content_length=min_length,
            case_sensitive_extension=not ignore_case,
            max_workers=workers,
        )
    except ValidationError as e:
        err_console.print(f"[red]Invalid options: {escape(str(e))}[/]")
        raise typer.Exit(1)

    # Validate input
    if not input_path.exists():
        err_console.print(
            f"[red]Input path does not exist: {escape(str(input_path))}[/]"
        )
        raise typer.Exit(1)
    if not input_path.is_dir() and not is_epub(
        input_path, options.case_sensitive_extension
    ):
        err_console.print("[red]Input file must have .epub extension[/]")
        raise typer.Exit(1)

    try:
        execute_convert(
            input_path=input_path,
            output=output,
            options=options,
            quiet=quiet,
            console=console,
            err_console=err_console,
        )
    except Exception as e:
        err_console.print(f"[red]Error: {escape(describe_error(e))}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
