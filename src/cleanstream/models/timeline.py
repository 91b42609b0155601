"""Time range model shared by segments, skips and MCF cues."""

from pydantic import BaseModel, Field, model_validator


class TimeRange(BaseModel):
    """Time range in milliseconds."""

    start_ms: int = Field(..., ge=0, description="Start time in milliseconds")
    end_ms: int = Field(..., ge=0, description="End time in milliseconds")

    @model_validator(mode="after")
    def validate_range(self) -> "TimeRange":
        """Ensure end is after start."""
        if self.end_ms <= self.start_ms:
            raise ValueError("end_ms must be greater than start_ms")
        return self

    @property
    def duration_ms(self) -> int:
        """Return duration in milliseconds."""
        return self.end_ms - self.start_ms

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start_ms < other.end_ms and other.start_ms < self.end_ms

    def contains(self, timestamp_ms: int) -> bool:
        """Check if a timestamp falls within this range."""
        return self.start_ms <= timestamp_ms < self.end_ms
