"""Data models for CleanStream."""

from cleanstream.models.document import (
    AnnotationDocument,
    DocumentMetadata,
    DocumentSegment,
    FilterEntry,
    Markers,
)
from cleanstream.models.segment import Channel, RawSegment, Severity
from cleanstream.models.skip import SkipInterval, SkipReport
from cleanstream.models.timeline import TimeRange
from cleanstream.models.title import StoreStats, TitleRecord

__all__ = [
    # Timeline
    "TimeRange",
    # Segments
    "Severity",
    "Channel",
    "RawSegment",
    # Skips
    "SkipInterval",
    "SkipReport",
    # MCF
    "AnnotationDocument",
    "DocumentMetadata",
    "DocumentSegment",
    "FilterEntry",
    "Markers",
    # Store
    "TitleRecord",
    "StoreStats",
]
