"""CleanStream command-line interface with subcommands.

Usage:
    cleanstream-cli check <file.mcf>
    cleanstream-cli resolve <file.mcf> [-p violence=medium ...] [-f json|vtt|mcf] [-o out] [--title-id ID]
"""

import argparse
import logging
import sys
from pathlib import Path

from cleanstream.config import settings
from cleanstream.errors import FormatError
from cleanstream.export import RENDERERS
from cleanstream.export.vtt import VTTSkipRenderer
from cleanstream.models.document import AnnotationDocument
from cleanstream.services.mcf import MCFParser, document_to_segments
from cleanstream.services.preferences import (
    FAMILY_FRIENDLY_PREFERENCES,
    UserPreferenceMap,
    parse_preferences,
)
from cleanstream.services.skip_resolver import SkipResolver
from cleanstream.services.timestamp import format_timestamp


def _load_document(path_str: str) -> AnnotationDocument:
    """Parse an MCF file, exiting with status 1 on failure."""
    mcf_path = Path(path_str).resolve()
    try:
        return MCFParser().parse_file(mcf_path)
    except FileNotFoundError:
        print(f"Error: file not found: {mcf_path}", file=sys.stderr)
        sys.exit(1)
    except FormatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _parse_pref_args(pairs: list[str]) -> UserPreferenceMap:
    """Layer ``category=threshold`` arguments over the family-friendly profile."""
    raw: dict[str, str] = {}
    for pair in pairs:
        category, sep, threshold = pair.partition("=")
        if not sep or not category:
            print(f"Error: expected category=threshold, got: {pair}", file=sys.stderr)
            sys.exit(1)
        raw[category.strip()] = threshold.strip()
    return parse_preferences(raw, FAMILY_FRIENDLY_PREFERENCES)


# --- check subcommand ---

def cmd_check(args: argparse.Namespace) -> None:
    """Parse an MCF file and print a summary."""
    document = _load_document(args.input)
    meta = document.metadata

    print(f"MCF version: {document.version}")
    if meta.title:
        year = f" ({meta.year})" if meta.year else ""
        print(f"  Title: {meta.title}{year}")
    if meta.imdb:
        print(f"  IMDB: {meta.imdb}")
    if document.markers.start is not None:
        print(f"  Start marker: {format_timestamp(document.markers.start)}")
    if document.markers.end is not None:
        print(f"  End marker: {format_timestamp(document.markers.end)}")
    print(f"  Cues: {len(document.segments)}")
    print(f"  Filters: {document.filter_count}")

    by_category: dict[str, int] = {}
    for segment in document_to_segments(document):
        by_category[segment.category] = by_category.get(segment.category, 0) + 1
    for category, count in sorted(by_category.items()):
        print(f"    {category}: {count}")


# --- resolve subcommand ---

def cmd_resolve(args: argparse.Namespace) -> None:
    """Resolve an MCF file against preferences and render the skips."""
    document = _load_document(args.input)
    preferences = _parse_pref_args(args.pref or [])

    resolver = SkipResolver(merge_gap_ms=args.merge_gap)
    skips = resolver.resolve(document_to_segments(document), preferences)

    if args.format == "vtt":
        renderer = VTTSkipRenderer(warning_lead_ms=settings.warning_lead_ms)
    else:
        renderer = RENDERERS[args.format]()

    title_id = args.title_id or Path(args.input).stem
    metadata = document.metadata.model_dump(exclude_none=True)

    if args.output:
        output_path = renderer.save(skips, title_id, Path(args.output), metadata)
        print(f"{len(skips)} skips written to {output_path}", file=sys.stderr)
    else:
        sys.stdout.write(renderer.render(skips, title_id, metadata))


# --- Main CLI ---

def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cleanstream-cli",
        description="CleanStream - content filter skip tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- check ---
    p_check = subparsers.add_parser("check", help="Parse an MCF file and print a summary")
    p_check.add_argument("input", type=str, help="Input MCF file")

    # --- resolve ---
    p_resolve = subparsers.add_parser("resolve", help="Resolve skips from an MCF file")
    p_resolve.add_argument("input", type=str, help="Input MCF file")
    p_resolve.add_argument(
        "-p", "--pref", action="append",
        help=(
            "Threshold per category, e.g. violence=medium (repeatable). "
            "Applied over the family-friendly profile; use violence=off to disable a category"
        ),
    )
    p_resolve.add_argument("-f", "--format", choices=sorted(RENDERERS), default="json", help="Output format (default: json)")
    p_resolve.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    p_resolve.add_argument("--title-id", type=str, help="Title identifier (default: input file name)")
    p_resolve.add_argument("--merge-gap", type=int, default=settings.merge_gap_ms, help="Merge gap in ms")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Dispatch
    if args.command == "check":
        cmd_check(args)
    elif args.command == "resolve":
        cmd_resolve(args)


if __name__ == "__main__":
    main()
