"""MovieContentFilter (MCF) document models."""

from pydantic import BaseModel, Field, field_validator

from cleanstream.models.segment import Channel, Severity
from cleanstream.models.timeline import TimeRange

DEFAULT_MCF_VERSION = "1.1.0"


class FilterEntry(BaseModel):
    """One `category=severity=channel # comment` line of a cue."""

    category: str = Field(..., description="Flag name as written in the file")
    parent_category: str = Field(..., description="Parent category from the taxonomy")
    severity: Severity | None = None
    channel: Channel = Channel.BOTH
    comment: str | None = None

    @field_validator("severity")
    @classmethod
    def severity_not_off(cls, v: Severity | None) -> Severity | None:
        if v is Severity.OFF:
            raise ValueError("filter severity must be low, medium or high")
        return v


class DocumentSegment(TimeRange):
    """A cue: time range plus its filter lines."""

    filters: list[FilterEntry] = Field(default_factory=list)


class DocumentMetadata(BaseModel):
    """Title metadata from the first NOTE block."""

    title: str | None = None
    year: int | None = None
    type: str | None = None
    season: int | None = None
    episode: int | None = None
    imdb: str | None = None
    source: str | None = None
    release: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class Markers(BaseModel):
    """Optional global start/end bounds of the filtered media."""

    start: int | None = Field(default=None, ge=0)
    end: int | None = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


class AnnotationDocument(BaseModel):
    """Structured form of an MCF file."""

    version: str = DEFAULT_MCF_VERSION
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    markers: Markers = Field(default_factory=Markers)
    segments: list[DocumentSegment] = Field(default_factory=list)

    @property
    def filter_count(self) -> int:
        """Total number of filter lines across all cues."""
        return sum(len(seg.filters) for seg in self.segments)
