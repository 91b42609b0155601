"""Tests for the MCF parser and generator."""

from pathlib import Path

import pytest

from cleanstream.errors import FormatError
from cleanstream.export.mcf import build_title_document
from cleanstream.models.document import (
    AnnotationDocument,
    DocumentMetadata,
    DocumentSegment,
    FilterEntry,
    Markers,
)
from cleanstream.models.segment import Channel, RawSegment, Severity
from cleanstream.services.mcf import (
    MCFParser,
    document_to_segments,
    generate_mcf,
    segments_to_document,
)
from cleanstream.services.skip_resolver import SkipResolver
from cleanstream.services.store import InMemorySegmentStore, validate_segment

SAMPLE_MCF = (
    "WEBVTT MovieContentFilter 1.1.0\n"
    "\n"
    "NOTE\n"
    "TITLE The Example\n"
    "YEAR 2004\n"
    "TYPE movie\n"
    "IMDB https://www.imdb.com/title/tt0000001/\n"
    "SOURCE Blu-ray\n"
    "RELEASE Director's Cut\n"
    "FOO ignored\n"
    "\n"
    "NOTE\n"
    "START 00:00:05.000\n"
    "END 01:30:00.000\n"
    "\n"
    "00:01:40.000 --> 00:02:40.000\n"
    "punching=high=video # bar fight\n"
    "swearing=medium\n"
    "\n"
    "00:10:00.000 --> 00:10:05.500\n"
    "kissing=low\n"
    "\n"
    "00:20:00.000 --> 00:20:01.000\n"
    "this line has no equals\n"
    "\n"
    "00:30:00.000 --> 00:31:00.000\n"
    "gore=high"
)


@pytest.fixture
def parser() -> MCFParser:
    return MCFParser()


class TestParse:
    def test_header_and_version(self, parser: MCFParser) -> None:
        document = parser.parse(SAMPLE_MCF)
        assert document.version == "1.1.0"

    def test_default_version(self, parser: MCFParser) -> None:
        document = parser.parse("WEBVTT MovieContentFilter\n\n00:00:01.000 --> 00:00:02.000\nnudity=high\n")
        assert document.version == "1.1.0"
        assert len(document.segments) == 1

    def test_missing_header(self, parser: MCFParser) -> None:
        with pytest.raises(FormatError):
            parser.parse("NOT A VALID HEADER\n\n00:00:01.000 --> 00:00:02.000\nnudity=high\n")

    def test_empty_input(self, parser: MCFParser) -> None:
        with pytest.raises(FormatError):
            parser.parse("")

    def test_metadata(self, parser: MCFParser) -> None:
        meta = parser.parse(SAMPLE_MCF).metadata
        assert meta.title == "The Example"
        assert meta.year == 2004
        assert meta.type == "movie"
        assert meta.imdb == "https://www.imdb.com/title/tt0000001/"
        assert meta.source == "Blu-ray"
        assert meta.release == "Director's Cut"
        assert meta.season is None

    def test_markers(self, parser: MCFParser) -> None:
        markers = parser.parse(SAMPLE_MCF).markers
        assert markers.start == 5_000
        assert markers.end == 5_400_000

    def test_segments(self, parser: MCFParser) -> None:
        segments = parser.parse(SAMPLE_MCF).segments
        # the cue without valid filter lines is dropped
        assert [s.start_ms for s in segments] == [100_000, 600_000, 1_800_000]
        assert segments[0].end_ms == 160_000
        assert segments[1].end_ms == 605_500

    def test_filter_fields(self, parser: MCFParser) -> None:
        first = parser.parse(SAMPLE_MCF).segments[0]
        assert len(first.filters) == 2

        punching, swearing = first.filters
        assert punching.category == "punching"
        assert punching.parent_category == "violence"
        assert punching.severity is Severity.HIGH
        assert punching.channel is Channel.VIDEO
        assert punching.comment == "bar fight"

        assert swearing.parent_category == "language"
        assert swearing.severity is Severity.MEDIUM
        assert swearing.channel is Channel.BOTH
        assert swearing.comment is None

    def test_last_cue_without_trailing_newline(self, parser: MCFParser) -> None:
        last = parser.parse(SAMPLE_MCF).segments[-1]
        assert last.filters[0].category == "gore"
        assert last.filters[0].parent_category == "gore"

    def test_bom_and_crlf(self, parser: MCFParser) -> None:
        content = "\ufeff" + SAMPLE_MCF.replace("\n", "\r\n")
        document = parser.parse(content)
        assert document.metadata.title == "The Example"
        assert len(document.segments) == 3

    def test_empty_severity(self, parser: MCFParser) -> None:
        document = parser.parse(
            "WEBVTT MovieContentFilter 1.1.0\n\n00:00:01.000 --> 00:00:02.000\nviolence=\n"
        )
        assert document.segments[0].filters[0].severity is None

    def test_unknown_severity_and_channel_dropped(self, parser: MCFParser) -> None:
        document = parser.parse(
            "WEBVTT MovieContentFilter 1.1.0\n\n"
            "00:00:01.000 --> 00:00:02.000\n"
            "violence=extreme\n"
            "violence=high=smell\n"
            "nudity=low\n"
        )
        filters = document.segments[0].filters
        assert [f.category for f in filters] == ["nudity"]

    def test_invalid_range_dropped(self, parser: MCFParser) -> None:
        document = parser.parse(
            "WEBVTT MovieContentFilter 1.1.0\n\n00:00:05.000 --> 00:00:02.000\nviolence=high\n"
        )
        assert document.segments == []

    def test_back_to_back_cues(self, parser: MCFParser) -> None:
        document = parser.parse(
            "WEBVTT MovieContentFilter 1.1.0\n\n"
            "00:00:01.000 --> 00:00:02.000\n"
            "violence=high\n"
            "00:00:03.000 --> 00:00:04.000\n"
            "nudity=low\n"
        )
        assert [s.start_ms for s in document.segments] == [1_000, 3_000]

    def test_stray_lines_ignored(self, parser: MCFParser) -> None:
        document = parser.parse(
            "WEBVTT MovieContentFilter 1.1.0\n\n"
            "random text\n"
            "violence=high\n"
            "\n"
            "00:00:01.000 --> 00:00:02.000\n"
            "nudity=low\n"
        )
        assert len(document.segments) == 1
        assert document.filter_count == 1

    def test_invalid_year_ignored(self, parser: MCFParser) -> None:
        document = parser.parse("WEBVTT MovieContentFilter 1.1.0\n\nNOTE\nYEAR soon\nTITLE X\n\n")
        assert document.metadata.year is None
        assert document.metadata.title == "X"

    def test_parse_file(self, parser: MCFParser, tmp_path: Path) -> None:
        mcf_file = tmp_path / "movie.mcf"
        mcf_file.write_text(SAMPLE_MCF, encoding="utf-8")
        assert len(parser.parse_file(mcf_file).segments) == 3

    def test_parse_file_not_found(self, parser: MCFParser) -> None:
        with pytest.raises(FileNotFoundError):
            parser.parse_file(Path("/nonexistent/file.mcf"))

    def test_parse_file_not_utf8(self, parser: MCFParser, tmp_path: Path) -> None:
        mcf_file = tmp_path / "bad.mcf"
        mcf_file.write_bytes(b"WEBVTT MovieContentFilter 1.1.0\n\xff\xfe\xfa")
        with pytest.raises(FormatError):
            parser.parse_file(mcf_file)


def _full_document() -> AnnotationDocument:
    return AnnotationDocument(
        version="1.1.0",
        metadata=DocumentMetadata(
            title="Some Show",
            year=2019,
            type="episode",
            season=2,
            episode=7,
            imdb="https://www.imdb.com/title/tt1234567/",
            source="WEB-DL",
            release="Extended",
        ),
        markers=Markers(start=0, end=3_000_000),
        segments=[
            DocumentSegment(
                start_ms=61_000,
                end_ms=65_250,
                filters=[
                    FilterEntry(
                        category="weapons",
                        parent_category="violence",
                        severity=Severity.HIGH,
                        channel=Channel.VIDEO,
                        comment="gun # pointed at camera",
                    ),
                    FilterEntry(category="blasphemy", parent_category="language", severity=Severity.LOW),
                ],
            ),
            DocumentSegment(
                start_ms=90_000_000,
                end_ms=90_000_001,
                filters=[
                    FilterEntry(
                        category="cigarettes",
                        parent_category="drugs",
                        severity=None,
                        channel=Channel.AUDIO,
                    )
                ],
            ),
        ],
    )


class TestGenerate:
    def test_exact_output(self) -> None:
        document = AnnotationDocument(
            metadata=DocumentMetadata(title="Film", year=2001),
            markers=Markers(start=0),
            segments=[
                DocumentSegment(
                    start_ms=1_000,
                    end_ms=2_500,
                    filters=[
                        FilterEntry(category="kissing", parent_category="sex", severity=Severity.LOW),
                        FilterEntry(
                            category="weapons",
                            parent_category="violence",
                            severity=Severity.HIGH,
                            channel=Channel.VIDEO,
                            comment="gun",
                        ),
                    ],
                )
            ],
        )
        assert generate_mcf(document) == (
            "WEBVTT MovieContentFilter 1.1.0\n"
            "\n"
            "NOTE\n"
            "TITLE Film\n"
            "YEAR 2001\n"
            "\n"
            "NOTE\n"
            "START 00:00:00.000\n"
            "\n"
            "00:00:01.000 --> 00:00:02.500\n"
            "kissing=low\n"
            "weapons=high=video # gun\n"
            "\n"
        )

    def test_empty_document(self) -> None:
        assert generate_mcf(AnnotationDocument()) == "WEBVTT MovieContentFilter 1.1.0\n\n"

    def test_metadata_order(self) -> None:
        text = generate_mcf(_full_document())
        keys = [line.split(" ")[0] for line in text.split("\n")[3:11]]
        assert keys == ["TITLE", "YEAR", "TYPE", "SEASON", "EPISODE", "IMDB", "SOURCE", "RELEASE"]

    def test_round_trip(self) -> None:
        document = _full_document()
        assert MCFParser().parse(generate_mcf(document)) == document

    def test_round_trip_sample(self) -> None:
        parser = MCFParser()
        document = parser.parse(SAMPLE_MCF)
        assert parser.parse(generate_mcf(document)) == document


class TestConversion:
    def test_document_to_segments(self) -> None:
        segments = document_to_segments(MCFParser().parse(SAMPLE_MCF))
        assert len(segments) == 4

        first = segments[0]
        assert first.category == "violence"
        assert first.subcategory == "punching"
        assert first.start_ms == 100_000
        assert first.end_ms == 160_000
        assert first.channel is Channel.VIDEO
        assert first.comment == "bar fight"

        assert segments[1].category == "language"
        assert segments[1].start_ms == 100_000

    def test_segments_to_document(self) -> None:
        segments = [
            RawSegment(
                start_ms=1_000,
                end_ms=2_000,
                category="violence",
                subcategory="stabbing",
                severity=Severity.HIGH,
            ),
            RawSegment(start_ms=5_000, end_ms=6_000, category="nudity", severity=Severity.LOW),
        ]
        document = segments_to_document(segments, metadata=DocumentMetadata(title="X"))

        assert document.metadata.title == "X"
        assert len(document.segments) == 2
        assert document.segments[0].filters[0].category == "stabbing"
        assert document.segments[0].filters[0].parent_category == "violence"
        assert document.segments[1].filters[0].category == "nudity"

    def test_segments_survive_text_round_trip(self) -> None:
        segments = document_to_segments(MCFParser().parse(SAMPLE_MCF))
        text = generate_mcf(segments_to_document(segments))
        again = document_to_segments(MCFParser().parse(text))
        assert again == segments

    def test_free_text_subcategory_falls_back_to_category(self) -> None:
        segment = RawSegment(
            start_ms=1_000,
            end_ms=2_000,
            category="violence",
            subcategory="bar fight",
            severity=Severity.HIGH,
        )
        document = segments_to_document([segment])
        assert document.segments[0].filters[0].category == "violence"

    def test_off_segments_left_out(self) -> None:
        segments = [
            RawSegment(start_ms=1_000, end_ms=2_000, category="violence", severity=Severity.OFF),
            RawSegment(start_ms=3_000, end_ms=4_000, category="violence", severity=Severity.LOW),
        ]
        document = segments_to_document(segments)
        assert [cue.start_ms for cue in document.segments] == [3_000]

    def test_stored_title_export_reimports(self) -> None:
        store = InMemorySegmentStore()
        store.update_metadata("tt1", title="Film", year=2001)
        store.put(
            "tt1",
            {
                "start_ms": 100_000,
                "end_ms": 160_000,
                "category": "violence",
                "subcategory": "bar fight",
                "severity": "high",
            },
        )
        store.put(
            "tt1",
            {
                "start_ms": 200_000,
                "end_ms": 205_000,
                "category": "language",
                "subcategory": "swearing",
                "severity": "medium",
            },
        )
        record = store.get("tt1")
        assert record is not None

        text = generate_mcf(build_title_document(record))
        again = document_to_segments(MCFParser().parse(text))

        assert [s.category for s in again] == ["violence", "language"]
        assert again[1].subcategory == "swearing"
        for segment in again:
            validate_segment(segment)

        skips = SkipResolver().resolve(again, {"violence": "low"})
        assert len(skips) == 1
        assert skips[0].start_ms == 100_000
