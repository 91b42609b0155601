"""MCF renderer for resolved skips and stored titles."""

from collections.abc import Sequence
from typing import Any

from cleanstream.export.base import SkipRenderer
from cleanstream.models.document import (
    AnnotationDocument,
    DocumentMetadata,
    DocumentSegment,
    FilterEntry,
    Markers,
)
from cleanstream.models.skip import SkipInterval
from cleanstream.models.title import TitleRecord
from cleanstream.services.mcf import generate_mcf, segments_to_document

IMDB_TITLE_URL = "https://www.imdb.com/title/{title_id}/"


def skips_to_document(
    skips: Sequence[SkipInterval],
    metadata: DocumentMetadata | None = None,
) -> AnnotationDocument:
    """Convert resolved skips to a document, one filter per category."""
    cues = []
    for skip in skips:
        filters = [
            FilterEntry(
                category=category,
                parent_category=category,
                severity=skip.severity,
                channel=skip.channel,
            )
            for category in skip.categories or [skip.category]
        ]
        cues.append(DocumentSegment(start_ms=skip.start_ms, end_ms=skip.end_ms, filters=filters))
    return AnnotationDocument(metadata=metadata or DocumentMetadata(), segments=cues)


def build_title_document(record: TitleRecord) -> AnnotationDocument:
    """Export all raw segments of a stored title as an MCF document."""
    metadata = DocumentMetadata(
        title=record.title,
        year=record.year,
        type=record.type,
        imdb=IMDB_TITLE_URL.format(title_id=record.title_id),
    )
    return segments_to_document(record.segments, metadata=metadata, markers=Markers(start=0))


class MCFSkipRenderer(SkipRenderer):
    """Renders resolved skips as an MCF document."""

    @property
    def format_name(self) -> str:
        return "mcf"

    @property
    def media_type(self) -> str:
        return "text/plain"

    @property
    def file_extension(self) -> str:
        return ".mcf"

    def render(
        self,
        skips: Sequence[SkipInterval],
        title_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        metadata = dict(metadata or {})
        metadata.setdefault("imdb", IMDB_TITLE_URL.format(title_id=title_id))
        known = {k: v for k, v in metadata.items() if k in DocumentMetadata.model_fields}
        document = skips_to_document(skips, DocumentMetadata.model_validate(known))
        return generate_mcf(document)
