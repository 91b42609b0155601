"""FastAPI dependencies."""

from __future__ import annotations

from cleanstream.config import settings
from cleanstream.services.interfaces import ISegmentStore
from cleanstream.services.skip_resolver import SkipResolver
from cleanstream.services.store import InMemorySegmentStore

_store: ISegmentStore | None = None


def init_store(store: ISegmentStore | None = None) -> ISegmentStore:
    """Initialize the global segment store (called at app startup)."""
    global _store
    _store = store if store is not None else InMemorySegmentStore()
    return _store


def get_store() -> ISegmentStore:
    """Dependency that provides the segment store."""
    if _store is None:
        raise RuntimeError("Segment store not initialized; call init_store() first")
    return _store


def get_resolver() -> SkipResolver:
    """Dependency that provides a resolver configured from settings."""
    return SkipResolver(merge_gap_ms=settings.merge_gap_ms)
