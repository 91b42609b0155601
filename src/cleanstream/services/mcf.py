"""MovieContentFilter (MCF) format parser and generator.

MCF is a WebVTT dialect used by community filter tools:

    WEBVTT MovieContentFilter 1.1.0

    NOTE
    TITLE Some Movie
    YEAR 2004

    NOTE
    START 00:00:00.000

    00:01:40.000 --> 00:02:40.000
    punching=high=video # bar fight

Parsing is lenient: only a missing header is an error. Unknown lines,
filter lines without ``=`` and empty cues are dropped so that imperfect
community files still yield their usable cues.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from cleanstream.errors import FormatError
from cleanstream.models.document import (
    DEFAULT_MCF_VERSION,
    AnnotationDocument,
    DocumentMetadata,
    DocumentSegment,
    FilterEntry,
    Markers,
)
from cleanstream.models.segment import Channel, RawSegment, Severity
from cleanstream.services.taxonomy import resolve_parent
from cleanstream.services.timestamp import format_timestamp, try_parse_timestamp

logger = logging.getLogger(__name__)

MCF_HEADER = "WEBVTT MovieContentFilter"

_CUE_SEPARATOR = " --> "
_COMMENT_SEPARATOR = " # "

# NOTE keys -> DocumentMetadata fields
_TEXT_KEYS = {
    "TITLE": "title",
    "TYPE": "type",
    "IMDB": "imdb",
    "SOURCE": "source",
    "RELEASE": "release",
}
_INT_KEYS = {
    "YEAR": "year",
    "SEASON": "season",
    "EPISODE": "episode",
}
_MARKER_KEYS = {
    "START": "start",
    "END": "end",
}

# Emission order of the metadata block
_METADATA_ORDER = (
    ("TITLE", "title"),
    ("YEAR", "year"),
    ("TYPE", "type"),
    ("SEASON", "season"),
    ("EPISODE", "episode"),
    ("IMDB", "imdb"),
    ("SOURCE", "source"),
    ("RELEASE", "release"),
)


def _strip_bom(text: str) -> str:
    """Remove UTF-8 BOM if present."""
    if text.startswith("\ufeff"):
        return text[1:]
    return text


@dataclass
class _OpenCue:
    start_ms: int
    end_ms: int
    filters: list[FilterEntry] = field(default_factory=list)


class MCFParser:
    """Parser for MCF filter files.

    Produces an AnnotationDocument holding the title metadata, the
    optional start/end markers and every cue with at least one filter.
    """

    def parse_file(self, mcf_path: Path) -> AnnotationDocument:
        """Parse an MCF file from disk.

        Raises:
            FormatError: If the file is not UTF-8 or lacks the MCF header
            FileNotFoundError: If the file does not exist
        """
        mcf_path = Path(mcf_path)
        if not mcf_path.exists():
            raise FileNotFoundError(f"MCF file not found: {mcf_path}")

        try:
            content = mcf_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"Failed to decode MCF file as UTF-8: {mcf_path}") from exc

        return self.parse(content)

    def parse(self, content: str) -> AnnotationDocument:
        """Parse MCF text into a structured document.

        Raises:
            FormatError: If the first line is not an MCF header
        """
        content = _strip_bom(content).replace("\r\n", "\n").replace("\r", "\n")
        lines = content.split("\n")

        header = lines[0].strip()
        if not header.startswith(MCF_HEADER):
            raise FormatError("Invalid MCF format: missing header")

        header_tokens = header.split()
        version = header_tokens[2] if len(header_tokens) > 2 else DEFAULT_MCF_VERSION

        metadata: dict[str, object] = {}
        markers: dict[str, int] = {}
        segments: list[DocumentSegment] = []

        in_note = False
        cue: _OpenCue | None = None

        for line_no, raw_line in enumerate(lines[1:], start=2):
            line = raw_line.strip()

            if in_note:
                if line:
                    self._apply_note_line(line, metadata, markers)
                else:
                    in_note = False
                continue

            if line == "NOTE" or line.startswith("NOTE "):
                self._flush(cue, segments)
                cue = None
                in_note = True
                continue

            timing = self._parse_timing(line)
            if timing is not None:
                self._flush(cue, segments)
                cue = _OpenCue(*timing)
                continue

            if not line:
                self._flush(cue, segments)
                cue = None
                continue

            if cue is None:
                logger.debug("Ignoring line %d outside a cue: %r", line_no, line)
                continue

            entry = self._parse_filter_line(line)
            if entry is None:
                logger.debug("Ignoring malformed filter line %d: %r", line_no, line)
                continue
            cue.filters.append(entry)

        self._flush(cue, segments)

        document = AnnotationDocument(
            version=version,
            metadata=DocumentMetadata(**metadata),
            markers=Markers(**markers),
            segments=segments,
        )
        logger.info(
            "Parsed MCF document: %d cues, %d filters",
            len(document.segments),
            document.filter_count,
        )
        return document

    def _flush(self, cue: _OpenCue | None, segments: list[DocumentSegment]) -> None:
        """Append an open cue to the output if it is usable."""
        if cue is None:
            return
        if not cue.filters:
            logger.debug("Dropping cue at %d ms with no filters", cue.start_ms)
            return
        if cue.end_ms <= cue.start_ms:
            logger.debug("Dropping cue with invalid range %d-%d", cue.start_ms, cue.end_ms)
            return
        segments.append(
            DocumentSegment(start_ms=cue.start_ms, end_ms=cue.end_ms, filters=cue.filters)
        )

    def _parse_timing(self, line: str) -> tuple[int, int] | None:
        """Parse a ``start --> end`` cue timing line."""
        if _CUE_SEPARATOR not in line:
            return None
        start_text, _, end_text = line.partition(_CUE_SEPARATOR)
        start_ms = try_parse_timestamp(start_text)
        end_ms = try_parse_timestamp(end_text)
        if start_ms is None or end_ms is None:
            return None
        return start_ms, end_ms

    def _apply_note_line(
        self,
        line: str,
        metadata: dict[str, object],
        markers: dict[str, int],
    ) -> None:
        """Apply one ``KEY value`` line of a NOTE block."""
        key, _, value = line.partition(" ")
        value = value.strip()
        if not value:
            return

        if key in _TEXT_KEYS:
            metadata[_TEXT_KEYS[key]] = value
        elif key in _INT_KEYS:
            try:
                metadata[_INT_KEYS[key]] = int(value)
            except ValueError:
                logger.debug("Ignoring non-numeric %s value: %r", key, value)
        elif key in _MARKER_KEYS:
            ms = try_parse_timestamp(value)
            if ms is not None:
                markers[_MARKER_KEYS[key]] = ms

    def _parse_filter_line(self, line: str) -> FilterEntry | None:
        """Parse ``category=severity=channel # comment``.

        Returns None if the line has no ``=`` or carries an unknown
        severity or channel token.
        """
        filter_part, _, comment = line.partition(_COMMENT_SEPARATOR)
        parts = [part.strip() for part in filter_part.strip().split("=")]
        if len(parts) < 2 or not parts[0]:
            return None

        category = parts[0]

        severity: Severity | None = None
        if parts[1]:
            try:
                severity = Severity(parts[1].lower())
            except ValueError:
                return None
            if severity is Severity.OFF:
                return None

        channel = Channel.BOTH
        if len(parts) > 2 and parts[2]:
            try:
                channel = Channel(parts[2].lower())
            except ValueError:
                return None

        return FilterEntry(
            category=category,
            parent_category=resolve_parent(category),
            severity=severity,
            channel=channel,
            comment=comment.strip() or None,
        )


def _format_filter_line(entry: FilterEntry) -> str:
    severity = entry.severity.value if entry.severity is not None else ""
    line = f"{entry.category}={severity}"
    if entry.channel is not Channel.BOTH:
        line += f"={entry.channel.value}"
    if entry.comment:
        line += f"{_COMMENT_SEPARATOR}{entry.comment}"
    return line


def generate_mcf(document: AnnotationDocument) -> str:
    """Serialize a document to MCF text.

    Emission order is fixed: header, metadata NOTE (if any field is set),
    markers NOTE (if any marker is set), then one block per cue.
    """
    lines = [f"{MCF_HEADER} {document.version}", ""]

    if not document.metadata.is_empty:
        lines.append("NOTE")
        for key, attr in _METADATA_ORDER:
            value = getattr(document.metadata, attr)
            if value is not None:
                lines.append(f"{key} {value}")
        lines.append("")

    if not document.markers.is_empty:
        lines.append("NOTE")
        if document.markers.start is not None:
            lines.append(f"START {format_timestamp(document.markers.start)}")
        if document.markers.end is not None:
            lines.append(f"END {format_timestamp(document.markers.end)}")
        lines.append("")

    for segment in document.segments:
        lines.append(
            f"{format_timestamp(segment.start_ms)}{_CUE_SEPARATOR}"
            f"{format_timestamp(segment.end_ms)}"
        )
        lines.extend(_format_filter_line(entry) for entry in segment.filters)
        lines.append("")

    return "\n".join(lines) + "\n"


def document_to_segments(document: AnnotationDocument) -> list[RawSegment]:
    """Flatten document cues into raw segments, one per filter line."""
    segments: list[RawSegment] = []
    for cue in document.segments:
        for entry in cue.filters:
            segments.append(
                RawSegment(
                    start_ms=cue.start_ms,
                    end_ms=cue.end_ms,
                    category=entry.parent_category or resolve_parent(entry.category),
                    subcategory=entry.category,
                    severity=entry.severity,
                    channel=entry.channel,
                    comment=entry.comment,
                )
            )
    return segments


def segments_to_document(
    segments: Iterable[RawSegment],
    metadata: DocumentMetadata | None = None,
    markers: Markers | None = None,
) -> AnnotationDocument:
    """Build a document with one cue per raw segment.

    The filter line names the subcategory only when it is a flag of the
    segment's category; free-text subcategories fall back to the category
    so that the cue parses back under the same parent. Segments with an
    OFF severity have no MCF form and are left out.
    """
    cues = []
    for seg in segments:
        if seg.severity is Severity.OFF:
            logger.debug(
                "Leaving out %s segment at %d ms with severity off", seg.category, seg.start_ms
            )
            continue
        flag = seg.subcategory
        if not flag or resolve_parent(flag) != seg.category:
            flag = seg.category
        cues.append(
            DocumentSegment(
                start_ms=seg.start_ms,
                end_ms=seg.end_ms,
                filters=[
                    FilterEntry(
                        category=flag,
                        parent_category=seg.category,
                        severity=seg.severity,
                        channel=seg.channel,
                        comment=seg.comment,
                    )
                ],
            )
        )
    return AnnotationDocument(
        metadata=metadata or DocumentMetadata(),
        markers=markers or Markers(),
        segments=cues,
    )
