"""Resolved skip interval and JSON report models."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cleanstream.models.segment import Channel, Severity
from cleanstream.models.timeline import TimeRange

SKIP_FORMAT_VERSION = "1.0.0"


class SkipInterval(TimeRange):
    """A resolved, possibly merged, interval the player should skip."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = Field(default=None, description="First contributing segment id")
    start_time: str = Field(..., description="Display start time (M:SS)")
    end_time: str = Field(..., description="Display end time (M:SS)")
    duration: int = Field(..., ge=0, description="Duration in milliseconds")
    category: str = Field(..., description="Category of the first contributing segment")
    categories: list[str] = Field(
        default_factory=list, description="All contributing categories, in order"
    )
    subcategory: str | None = None
    severity: Severity | None = None
    channel: Channel = Channel.BOTH
    description: str = Field(..., description="Human-readable description")


class SkipReport(BaseModel):
    """JSON envelope around a resolved skip list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: str = SKIP_FORMAT_VERSION
    title_id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_skips: int = 0
    total_skip_time: int = Field(default=0, description="Sum of skip durations in ms")
    skips: list[SkipInterval] = Field(default_factory=list)
