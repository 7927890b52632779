"""Data models for conversion outcomes."""

from pathlib import Path

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Outcome of converting one EPUB file."""

    source: Path
    output_dir: Path
    success: bool
    error: str | None = None
    title: str | None = None
    author: str | None = None
    chapters_written: int = 0
    output_files: list[Path] = Field(default_factory=list)


class BatchReport(BaseModel):
    """Aggregated outcome of a directory conversion."""

    root: Path
    results: list[ConversionResult] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def failures(self) -> list[ConversionResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return self.error_count == 0
