"""Data models for EPUB book metadata."""

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class TocEntry(BaseModel):
    """Single entry in the table of contents."""

    model_config = ConfigDict(frozen=True)

    label: str
    children: list["TocEntry"] = Field(default_factory=list)

    @model_serializer(mode="wrap")
    def drop_empty_children(self, handler):
        data = handler(self)
        if not self.children:
            data.pop("children", None)
        return data


class BookMetadata(BaseModel):
    """Descriptive metadata read from an EPUB package.

    Field order is the order written to ``metadata.json``.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    creators: list[str] = Field(default_factory=list)
    language: str | None = None
    description: str | None = None
    publisher: str | None = None
    date: str | None = None
    subjects: list[str] = Field(default_factory=list)
    identifier: str | None = None
    rights: str | None = None
    contributors: list[str] = Field(default_factory=list)
    source: str | None = None
    epub_version: str = "unknown"
    release_identifier: str | None = None
    chapter_count: int = 0  # spine length, before filtering
    toc: list[TocEntry] = Field(default_factory=list)


class ChapterContent(BaseModel):
    """Decoded payload of a single spine entry."""

    index: int
    item_id: str
    file_name: str
    media_type: str
    html: str
