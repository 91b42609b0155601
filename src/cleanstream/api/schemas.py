"""Request and response schemas for the CleanStream API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cleanstream.models.segment import RawSegment
from cleanstream.models.title import TitleRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------------------------------------------------
# Contribution requests
# ------------------------------------------------------------------


class ContributeRequest(_CamelModel):
    start_ms: int = Field(..., description="Start time in milliseconds")
    end_ms: int = Field(..., description="End time in milliseconds")
    category: str = Field(..., description="Parent category")
    subcategory: str | None = Field(None, description="Fine-grained flag")
    severity: str = Field(..., description="low, medium or high")
    channel: str = Field("both", description="both, video or audio")
    comment: str | None = None
    contributor: str = Field("anonymous", description="Contributor name")


class MetadataUpdateRequest(_CamelModel):
    title: str | None = None
    year: int | None = None
    type: str | None = None


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------


class ContributeResponse(_CamelModel):
    message: str
    segment: RawSegment


class ImportResponse(_CamelModel):
    message: str
    segments_added: int
    segments_skipped: int = 0


class TitleListResponse(_CamelModel):
    count: int
    filters: list[TitleRecord]


class MetadataUpdateResponse(_CamelModel):
    message: str
    filter_data: TitleRecord


class StatsResponse(_CamelModel):
    total_titles: int
    total_segments: int
