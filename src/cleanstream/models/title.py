"""Stored title record."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from cleanstream.models.segment import RawSegment


class TitleRecord(BaseModel):
    """All raw segments known for one title, plus its metadata."""

    title_id: str = Field(..., description="Title identifier (IMDB id)")
    title: str | None = None
    year: int | None = None
    type: str | None = None
    segments: list[RawSegment] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StoreStats(BaseModel):
    """Counts across all stored titles."""

    total_titles: int = 0
    total_segments: int = 0
