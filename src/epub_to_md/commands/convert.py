"""Convert command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from epub_to_md.core.batch import convert_files, discover_epub_files
from epub_to_md.core.converter import convert_epub
from epub_to_md.core.errors import ConversionError
from epub_to_md.core.paths import default_output_dir
from epub_to_md.models.options import ConversionOptions
from epub_to_md.models.result import BatchReport, ConversionResult


def execute_convert(
    input_path: Path,
    output: Path | None,
    options: ConversionOptions,
    quiet: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Dispatch to directory or single-file conversion.

    Raises:
        ConversionError: If the conversion (or any file of a batch) failed
    """
    if input_path.is_dir():
        execute_directory(input_path, output, options, quiet, console, err_console)
    else:
        execute_single(input_path, output, options, quiet, console)


def execute_single(
    epub_path: Path,
    output: Path | None,
    options: ConversionOptions,
    quiet: bool,
    console: Console,
) -> ConversionResult:
    """Convert one EPUB file; errors propagate to the caller."""
    output_dir = output or default_output_dir(epub_path)

    if not quiet:
        console.print(f"Converting [cyan]{escape(str(epub_path))}[/] to Markdown...")

    result = convert_epub(epub_path, output_dir, options, None if quiet else console)

    if not quiet:
        console.print()
        console.print(
            Panel(
                "\n".join(
                    [
                        f"[green]Converted {result.chapters_written} chapter(s)[/]",
                        "",
                        f"[dim]Output saved to:[/] {escape(str(output_dir))}",
                    ]
                ),
                title="Complete",
                border_style="green",
            )
        )
    return result


def execute_directory(
    root: Path,
    output_base: Path | None,
    options: ConversionOptions,
    quiet: bool,
    console: Console,
    err_console: Console,
) -> BatchReport:
    """Convert every EPUB under ``root`` and summarize the outcome."""
    epub_files = discover_epub_files(root, options)

    if quiet:
        report = convert_files(epub_files, root, output_base, options)
    else:
        console.print(
            f"Found {len(epub_files)} EPUB file(s) in {escape(str(root))}"
        )
        console.print("[dim]Processing in parallel...[/]\n")
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Converting...", total=len(epub_files))
            report = convert_files(
                epub_files,
                root,
                output_base,
                options,
                console=progress.console,
                on_result=lambda _result: progress.advance(task),
            )

    for failure in report.failures:
        err_console.print(
            f"[red]Failed to process {escape(str(failure.source))}: "
            f"{escape(failure.error or 'unknown error')}[/]"
        )

    if not quiet:
        summary_lines = [f"[green]Successfully processed: {report.success_count}[/]"]
        if report.error_count:
            summary_lines.append(f"[red]Failed: {report.error_count}[/]")
        console.print()
        console.print(
            Panel(
                "\n".join(summary_lines),
                title="Summary",
                border_style="green" if report.ok else "red",
            )
        )

    if not report.ok:
        raise ConversionError(f"{report.error_count} EPUB file(s) failed to process")

    return report
