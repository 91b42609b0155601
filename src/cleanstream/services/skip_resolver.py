"""Skip resolution: preference filtering and temporal merge of segments."""

import logging
from collections.abc import Iterable, Mapping

from cleanstream.models.segment import RawSegment, Severity
from cleanstream.models.skip import SkipInterval
from cleanstream.services.taxonomy import describe_category, resolve_parent
from cleanstream.services.timestamp import format_display_time

logger = logging.getLogger(__name__)

# Segments closer than this are played as one skip to avoid flicker
MERGE_GAP_MS = 500


class SkipResolver:
    """Turns a title's raw segments into the skip list for one viewer.

    A segment survives when its category has a threshold other than OFF
    and its severity ranks at or above that threshold. Survivors are
    sorted and merged when they overlap or sit within ``merge_gap_ms``
    of each other. The resolver never raises on well-formed segments.
    """

    def __init__(self, merge_gap_ms: int = MERGE_GAP_MS) -> None:
        self.merge_gap_ms = merge_gap_ms

    def resolve(
        self,
        segments: Iterable[RawSegment] | None,
        preferences: Mapping[str, Severity | str] | None,
    ) -> list[SkipInterval]:
        """Resolve segments against a preference map.

        Args:
            segments: Raw segments for one title
            preferences: Category -> threshold; missing means OFF

        Returns:
            Skip intervals sorted by start time, pairwise non-overlapping
        """
        if not segments or not preferences:
            return []

        selected = [seg for seg in segments if self._passes_threshold(seg, preferences)]
        selected.sort(key=lambda s: s.start_ms)
        skips = self._merge([self._to_skip(seg) for seg in selected])

        logger.info(
            "Resolved %d skips from %d qualifying segments", len(skips), len(selected)
        )
        return skips

    def _passes_threshold(
        self,
        segment: RawSegment,
        preferences: Mapping[str, Severity | str],
    ) -> bool:
        threshold = Severity.coerce(preferences.get(resolve_parent(segment.category)))
        if threshold is Severity.OFF:
            return False
        severity = segment.severity or Severity.HIGH
        return severity.rank >= threshold.rank

    def _to_skip(self, segment: RawSegment) -> SkipInterval:
        category = resolve_parent(segment.category)
        return SkipInterval(
            id=segment.id,
            start_ms=segment.start_ms,
            end_ms=segment.end_ms,
            start_time=format_display_time(segment.start_ms),
            end_time=format_display_time(segment.end_ms),
            duration=segment.duration_ms,
            category=category,
            categories=[category],
            subcategory=segment.subcategory,
            severity=segment.severity,
            channel=segment.channel,
            description=segment.comment or describe_category(category),
        )

    def _merge(self, skips: list[SkipInterval]) -> list[SkipInterval]:
        """Merge sorted skips that overlap or are within the merge gap."""
        merged: list[SkipInterval] = []
        for current in skips:
            if not merged or current.start_ms > merged[-1].end_ms + self.merge_gap_ms:
                merged.append(current)
                continue

            last = merged[-1]
            end_ms = max(last.end_ms, current.end_ms)
            categories = list(last.categories)
            description = last.description
            if current.category not in categories:
                categories.append(current.category)
                description = f"{description}, {current.category}"

            merged[-1] = last.model_copy(
                update={
                    "end_ms": end_ms,
                    "end_time": format_display_time(end_ms),
                    "duration": end_ms - last.start_ms,
                    "categories": categories,
                    "description": description,
                }
            )
        return merged
