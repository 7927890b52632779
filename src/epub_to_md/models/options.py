"""Conversion settings shared by single-file and batch runs."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MIN_CONTENT_LENGTH = 50


class ConversionOptions(BaseModel):
    """User-selected conversion behaviour.

    Built once from the command line and handed read-only to every worker.
    """

    model_config = ConfigDict(frozen=True)

    single_file: bool = False
    write_metadata: bool = True
    min_content_length: int = Field(default=DEFAULT_MIN_CONTENT_LENGTH, ge=0)
    case_sensitive_extension: bool = True
    max_workers: int | None = Field(default=None, ge=1)
