"""JSON skip report renderer."""

import json
from collections.abc import Sequence
from typing import Any

from cleanstream.export.base import SkipRenderer
from cleanstream.models.skip import SkipInterval, SkipReport


def build_skip_report(
    skips: Sequence[SkipInterval],
    title_id: str,
    metadata: dict[str, Any] | None = None,
) -> SkipReport:
    """Wrap a skip list in the JSON report envelope.

    Args:
        skips: Resolved skip intervals
        title_id: Title identifier
        metadata: Title metadata passed through unchanged

    Returns:
        SkipReport with totals filled in
    """
    return SkipReport(
        title_id=title_id,
        metadata=dict(metadata or {}),
        total_skips=len(skips),
        total_skip_time=sum(skip.duration for skip in skips),
        skips=list(skips),
    )


def generate_skip_json(
    skips: Sequence[SkipInterval],
    title_id: str,
    metadata: dict[str, Any] | None = None,
) -> dict:
    """Build the report as a JSON-ready dict with camelCase keys."""
    report = build_skip_report(skips, title_id, metadata)
    return report.model_dump(mode="json", by_alias=True)


class JSONSkipRenderer(SkipRenderer):
    """Renders the skip report as indented JSON text."""

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def media_type(self) -> str:
        return "application/json"

    @property
    def file_extension(self) -> str:
        return ".json"

    def render(
        self,
        skips: Sequence[SkipInterval],
        title_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        data = generate_skip_json(skips, title_id, metadata)
        return json.dumps(data, ensure_ascii=False, indent=2)
