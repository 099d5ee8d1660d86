"""Data models for podcast episodes and feeds."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Episode(BaseModel):
    """Represents a single podcast episode as declared in the feed."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    pub_date: str = ""  # Raw <pubDate> text
    media_url: str = ""  # <enclosure url="...">
    duration: str | None = None  # Raw <itunes:duration>, free-form
    published: datetime | None = None  # Set by the episode filter

    def with_published(self, published: datetime) -> "Episode":
        """Return a copy carrying the parsed publish date."""
        return self.model_copy(update={"published": published})


class Feed(BaseModel):
    """A parsed podcast feed: channel title plus episodes in document order."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    episodes: list[Episode] = Field(default_factory=list)
