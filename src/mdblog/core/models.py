"""Post data models shared by the build steps and the runtime store"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mdblog.core.utils.dates import parse_date, to_iso


FrontmatterRecord = dict[str, Any]


@dataclass(frozen=True)
class RawDocument:
    """An on-disk content unit, read once per build."""
    path:     str          # relative POSIX path under the content root
    raw_text: str          # full file content (includes frontmatter)


class PostFrontmatter(BaseModel):
    """Validated frontmatter; only ever produced by validate_frontmatter."""
    title:       str
    date:        datetime  # always timezone-aware UTC
    description: str
    tags:        list[str] = Field(default_factory=list)


class PostMetadata(PostFrontmatter):
    slug:         str      # filename without .md
    topic:        str      # immediate parent directory name
    reading_time: int = Field(ge=0, description="Estimated whole minutes")


class Post(PostMetadata):
    content: str           # markdown body, frontmatter stripped, unprocessed

    def metadata(self) -> PostMetadata:
        return PostMetadata(**self.model_dump(exclude={"content"}))

    def serialize(self) -> "SerializedPost":
        return SerializedPost(
            title=self.title,
            date=to_iso(self.date),
            description=self.description,
            tags=list(self.tags),
            slug=self.slug,
            topic=self.topic,
            reading_time=self.reading_time,
            content=self.content,
        )


class SerializedPost(BaseModel):
    """JSON-safe form of a Post as stored in the generated content artifact."""
    model_config = ConfigDict(populate_by_name=True)

    title:        str
    date:         str      # ISO-8601, e.g. 2024-01-01T00:00:00.000Z
    description:  str
    tags:         list[str] = Field(default_factory=list)
    slug:         str
    topic:        str
    reading_time: int = Field(alias="readingTime", ge=0)
    content:      str

    def hydrate(self) -> Post:
        """Re-create the Post, turning the ISO date string back into a datetime."""
        return Post(
            title=self.title,
            date=parse_date(self.date),
            description=self.description,
            tags=list(self.tags),
            slug=self.slug,
            topic=self.topic,
            reading_time=self.reading_time,
            content=self.content,
        )
