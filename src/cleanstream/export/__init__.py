"""Export module for CleanStream."""

from cleanstream.export.base import SkipRenderer
from cleanstream.export.json_report import (
    JSONSkipRenderer,
    build_skip_report,
    generate_skip_json,
)
from cleanstream.export.mcf import MCFSkipRenderer, build_title_document, skips_to_document
from cleanstream.export.vtt import VTTSkipRenderer

RENDERERS: dict[str, type[SkipRenderer]] = {
    "json": JSONSkipRenderer,
    "vtt": VTTSkipRenderer,
    "mcf": MCFSkipRenderer,
}

__all__ = [
    "SkipRenderer",
    "JSONSkipRenderer",
    "MCFSkipRenderer",
    "VTTSkipRenderer",
    "RENDERERS",
    "build_skip_report",
    "build_title_document",
    "generate_skip_json",
    "skips_to_document",
]
