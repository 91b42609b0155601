"""Raw content-flag segment models."""

from enum import Enum

from pydantic import Field

from cleanstream.models.timeline import TimeRange


class Severity(str, Enum):
    """Content intensity, totally ordered from OFF to HIGH.

    OFF only makes sense as a user threshold; segments carry LOW..HIGH
    or no severity at all.
    """

    OFF = "off"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Integer rank used for threshold comparison (off=0 .. high=3)."""
        return _SEVERITY_RANKS[self]

    @classmethod
    def coerce(cls, value: "Severity | str | None") -> "Severity":
        """Map any value to a Severity, falling back to OFF."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.OFF
        return cls.OFF


_SEVERITY_RANKS = {
    Severity.OFF: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
}

# Severities a contributed segment may carry
SEGMENT_SEVERITIES = (Severity.LOW, Severity.MEDIUM, Severity.HIGH)


class Channel(str, Enum):
    """Which part of the media a flag applies to."""

    BOTH = "both"
    VIDEO = "video"
    AUDIO = "audio"


class RawSegment(TimeRange):
    """One community-contributed content flag on a title's timeline."""

    id: str | None = Field(default=None, description="Store-assigned identifier")
    category: str = Field(..., description="Parent category (e.g. 'violence')")
    subcategory: str | None = Field(
        default=None, description="Fine-grained flag (e.g. 'punching')"
    )
    severity: Severity | None = Field(
        default=None, description="Flag severity; unset is treated as high"
    )
    channel: Channel = Field(default=Channel.BOTH, description="Affected channel")
    comment: str | None = Field(default=None, description="Contributor comment")
    contributor: str | None = Field(default=None, description="Contributor name")
