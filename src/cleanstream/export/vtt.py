"""WebVTT skip marker renderer.

Embeds skip data as subtitle cues so that a companion player script can
pick them up: a warning cue shortly before each skip, then a skip cue
spanning the flagged scene.
"""

from collections.abc import Sequence
from typing import Any

from cleanstream.export.base import SkipRenderer
from cleanstream.models.skip import SKIP_FORMAT_VERSION, SkipInterval
from cleanstream.services.timestamp import format_timestamp

VTT_HEADER = "WEBVTT CleanStream Skip Data"
DEFAULT_WARNING_LEAD_MS = 3000


class VTTSkipRenderer(SkipRenderer):
    """Renders skips as ``{n}-warning`` / ``{n}-skip`` WebVTT cues."""

    def __init__(self, warning_lead_ms: int = DEFAULT_WARNING_LEAD_MS) -> None:
        self.warning_lead_ms = warning_lead_ms

    @property
    def format_name(self) -> str:
        return "vtt"

    @property
    def media_type(self) -> str:
        return "text/vtt"

    @property
    def file_extension(self) -> str:
        return ".vtt"

    def render(
        self,
        skips: Sequence[SkipInterval],
        title_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        lines = [
            VTT_HEADER,
            f"X-CLEANSTREAM-VERSION: {SKIP_FORMAT_VERSION}",
            f"X-CLEANSTREAM-IMDB: {title_id}",
            f"X-CLEANSTREAM-TOTAL-SKIPS: {len(skips)}",
            "",
        ]

        for index, skip in enumerate(skips, 1):
            warning_start = max(0, skip.start_ms - self.warning_lead_ms)
            lead_seconds = f"{(skip.start_ms - warning_start) / 1000:g}"

            lines.append(f"{index}-warning")
            lines.append(
                f"{format_timestamp(warning_start)} --> {format_timestamp(skip.start_ms)}"
            )
            lines.append(
                f"<c.cleanstream-warning>⏭️ Scene skip in {lead_seconds}s "
                f"({skip.description})</c>"
            )
            lines.append("")

            lines.append(f"{index}-skip")
            lines.append(
                f"{format_timestamp(skip.start_ms)} --> {format_timestamp(skip.end_ms)}"
            )
            lines.append(
                f"<c.cleanstream-skip>⏭️ Press → to skip ({skip.description})</c>"
            )
            lines.append("")

        return "\n".join(lines) + "\n"
