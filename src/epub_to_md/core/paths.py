"""Filename and output-location rules."""

from pathlib import Path

OUTPUT_DIR_SUFFIX = "_markdown"

_RESERVED_CHARS = '/\\:*?"<>|'
_SANITIZE_TABLE = str.maketrans({c: "_" for c in _RESERVED_CHARS})


def sanitize_filename(name: str) -> str:
    """Replace characters that are invalid in filenames with ``_``.

    One character in, one character out; nothing is dropped or truncated.
    """
    return name.translate(_SANITIZE_TABLE)


def default_output_dir(epub_path: Path) -> Path:
    """``{stem}_markdown`` next to the source file."""
    return epub_path.parent / f"{epub_path.stem}{OUTPUT_DIR_SUFFIX}"


def mirrored_output_dir(epub_path: Path, input_root: Path, output_base: Path) -> Path:
    """Place the output under ``output_base`` at the file's path relative to ``input_root``."""
    try:
        relative = epub_path.relative_to(input_root)
    except ValueError:
        relative = Path(epub_path.name)
    return output_base / relative.parent / f"{relative.stem}{OUTPUT_DIR_SUFFIX}"


def output_dir_for(
    epub_path: Path, input_root: Path, output_base: Path | None
) -> Path:
    """Output directory for a file found while scanning ``input_root``."""
    if output_base is not None:
        return mirrored_output_dir(epub_path, input_root, output_base)
    return default_output_dir(epub_path)
