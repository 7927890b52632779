"""Exceptions raised while converting EPUB files."""

from pathlib import Path


class ConversionError(Exception):
    """A fatal problem converting a single EPUB file.

    The message names the failed operation; the underlying cause is kept
    as ``__cause__`` via ``raise ... from``.
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class NoEpubFilesError(ConversionError):
    """Directory scan found nothing to convert."""


def describe_error(exc: BaseException) -> str:
    """Render an exception and its cause chain as one line.

    >>> describe_error(ConversionError("Failed to write chapter_003.md"))
    'Failed to write chapter_003.md'
    """
    parts = []
    current: BaseException | None = exc
    while current is not None:
        text = str(current) or type(current).__name__
        if text not in parts:
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)
