"""WebVTT-style timestamp codec (HH:MM:SS.mmm <-> milliseconds)."""

import re

_TIMESTAMP_RE = re.compile(r"(\d{2,}):(\d{2}):(\d{2})\.(\d{3})")


def try_parse_timestamp(text: str) -> int | None:
    """Parse ``HH:MM:SS.mmm`` into milliseconds (hours may be wider).

    Returns None when the text holds no timestamp, so callers can tell a
    malformed value from a genuine ``00:00:00.000``.
    """
    match = _TIMESTAMP_RE.search(text)
    if match is None:
        return None
    hours, minutes, seconds, millis = (int(g) for g in match.groups())
    return (hours * 3600 + minutes * 60 + seconds) * 1000 + millis


def parse_timestamp(text: str) -> int:
    """Parse ``HH:MM:SS.mmm`` into milliseconds, returning 0 on mismatch."""
    ms = try_parse_timestamp(text)
    return 0 if ms is None else ms


def format_timestamp(ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS.mmm``. Hours are not capped."""
    if ms < 0:
        raise ValueError(f"timestamp must be non-negative, got {ms}")
    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    seconds = (ms % 60_000) // 1_000
    millis = ms % 1_000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_display_time(ms: int) -> str:
    """Format milliseconds as a short ``M:SS`` display string."""
    total_seconds = max(ms, 0) // 1_000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
