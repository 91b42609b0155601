"""In-memory segment store with write-path validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import pydantic

from cleanstream.errors import ValidationError
from cleanstream.models.segment import SEGMENT_SEVERITIES, RawSegment
from cleanstream.models.title import StoreStats, TitleRecord
from cleanstream.services.taxonomy import is_parent_category

logger = logging.getLogger(__name__)


def validate_segment(data: RawSegment | Mapping[str, Any]) -> RawSegment:
    """Validate a contributed segment.

    Unlike skip resolution, the write path is strict: the range must be
    positive, the category must be a parent category and the severity
    must be low, medium or high.

    Raises:
        ValidationError: If any of these rules is broken
    """
    if isinstance(data, RawSegment):
        data = data.model_dump()

    try:
        segment = RawSegment.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid segment: {exc.errors()[0]['msg']}") from exc

    if not is_parent_category(segment.category):
        raise ValidationError(f"Invalid category: {segment.category}")
    if segment.severity not in SEGMENT_SEVERITIES:
        raise ValidationError("Invalid severity. Must be: low, medium, or high")

    if segment.subcategory is None:
        segment = segment.model_copy(update={"subcategory": segment.category})
    return segment


class InMemorySegmentStore:
    """Process-local segment store.

    Records are kept in a dict keyed by title id. Suitable for tests,
    the CLI and single-process deployments.
    """

    def __init__(self) -> None:
        self._titles: dict[str, TitleRecord] = {}

    def get(self, title_id: str) -> TitleRecord | None:
        """Get a title record by id."""
        return self._titles.get(title_id)

    def put(self, title_id: str, segment: RawSegment | Mapping[str, Any]) -> RawSegment:
        """Validate a segment, assign it an id and append it to the title."""
        stored = validate_segment(segment).model_copy(update={"id": str(uuid4())})

        record = self._get_or_create(title_id)
        record.segments.append(stored)
        record.updated_at = datetime.now(timezone.utc)

        logger.info(
            "Stored %s segment %s for %s (%d-%d ms)",
            stored.category,
            stored.id,
            title_id,
            stored.start_ms,
            stored.end_ms,
        )
        return stored

    def update_metadata(
        self,
        title_id: str,
        title: str | None = None,
        year: int | None = None,
        type: str | None = None,
    ) -> TitleRecord:
        """Set title metadata; None values leave the current value alone."""
        record = self._get_or_create(title_id)
        if title:
            record.title = title
        if year:
            record.year = year
        if type:
            record.type = type
        record.updated_at = datetime.now(timezone.utc)
        return record

    def list_titles(self, limit: int = 100) -> list[TitleRecord]:
        """List titles, most recently updated first."""
        records = sorted(self._titles.values(), key=lambda r: r.updated_at, reverse=True)
        return records[:limit]

    def stats(self) -> StoreStats:
        """Count stored titles and segments."""
        return StoreStats(
            total_titles=len(self._titles),
            total_segments=sum(len(r.segments) for r in self._titles.values()),
        )

    def _get_or_create(self, title_id: str) -> TitleRecord:
        if title_id not in self._titles:
            self._titles[title_id] = TitleRecord(title_id=title_id)
        return self._titles[title_id]
