"""Service interfaces (Protocols) for CleanStream.

The skip engine only reads from the segment store; the write path is
used by contributions and MCF imports.
"""

from typing import Protocol

from cleanstream.models.segment import RawSegment
from cleanstream.models.title import StoreStats, TitleRecord


class ISegmentStore(Protocol):
    """Interface for a keyed store of raw segments per title."""

    def get(self, title_id: str) -> TitleRecord | None:
        """Return the record for a title, or None if unknown."""
        ...

    def put(self, title_id: str, segment: RawSegment) -> RawSegment:
        """Validate and store a segment.

        Returns:
            The stored segment with its assigned id

        Raises:
            ValidationError: If the segment is invalid
        """
        ...

    def update_metadata(
        self,
        title_id: str,
        title: str | None = None,
        year: int | None = None,
        type: str | None = None,
    ) -> TitleRecord:
        """Set title metadata, creating the record if needed."""
        ...

    def list_titles(self, limit: int = 100) -> list[TitleRecord]:
        """List known titles, most recently updated first."""
        ...

    def stats(self) -> StoreStats:
        """Count stored titles and segments."""
        ...
