"""Services module for CleanStream."""

from cleanstream.services.interfaces import ISegmentStore
from cleanstream.services.mcf import (
    MCFParser,
    document_to_segments,
    generate_mcf,
    segments_to_document,
)
from cleanstream.services.preferences import parse_preferences, preferences_from_query
from cleanstream.services.skip_resolver import SkipResolver
from cleanstream.services.store import InMemorySegmentStore, validate_segment

__all__ = [
    "ISegmentStore",
    "InMemorySegmentStore",
    "validate_segment",
    "MCFParser",
    "generate_mcf",
    "document_to_segments",
    "segments_to_document",
    "parse_preferences",
    "preferences_from_query",
    "SkipResolver",
]
