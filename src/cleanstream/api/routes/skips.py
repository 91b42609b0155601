"""Skip and raw filter endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from cleanstream.api.deps import get_resolver, get_store
from cleanstream.api.schemas import (
    MetadataUpdateRequest,
    MetadataUpdateResponse,
    StatsResponse,
    TitleListResponse,
)
from cleanstream.config import settings
from cleanstream.export.json_report import generate_skip_json
from cleanstream.export.mcf import build_title_document
from cleanstream.export.vtt import VTTSkipRenderer
from cleanstream.models.skip import SkipInterval
from cleanstream.models.title import TitleRecord
from cleanstream.services.interfaces import ISegmentStore
from cleanstream.services.mcf import generate_mcf
from cleanstream.services.preferences import preferences_from_query
from cleanstream.services.skip_resolver import SkipResolver

router = APIRouter(prefix="/api/v1", tags=["skips"])


def _resolve(
    title_id: str,
    request: Request,
    store: ISegmentStore,
    resolver: SkipResolver,
) -> tuple[list[SkipInterval], TitleRecord | None]:
    """Resolve a title's segments against the preferences in the query."""
    preferences = preferences_from_query(request.query_params)
    record = store.get(title_id)
    segments = record.segments if record is not None else []
    return resolver.resolve(segments, preferences), record


def _title_metadata(record: TitleRecord | None) -> dict[str, Any]:
    if record is None:
        return {}
    fields = {"title": record.title, "year": record.year, "type": record.type}
    return {key: value for key, value in fields.items() if value is not None}


# ------------------------------------------------------------------
# Resolved skips
# ------------------------------------------------------------------


@router.get("/skips/{title_id}")
async def get_skips(
    title_id: str,
    request: Request,
    store: ISegmentStore = Depends(get_store),
    resolver: SkipResolver = Depends(get_resolver),
) -> dict:
    skips, record = _resolve(title_id, request, store, resolver)
    return generate_skip_json(skips, title_id, _title_metadata(record))


@router.get("/skips/{title_id}/json")
async def get_skips_json(
    title_id: str,
    request: Request,
    store: ISegmentStore = Depends(get_store),
    resolver: SkipResolver = Depends(get_resolver),
) -> dict:
    return await get_skips(title_id, request, store, resolver)


@router.get("/skips/{title_id}/vtt", response_class=PlainTextResponse)
async def get_skips_vtt(
    title_id: str,
    request: Request,
    store: ISegmentStore = Depends(get_store),
    resolver: SkipResolver = Depends(get_resolver),
) -> PlainTextResponse:
    skips, _ = _resolve(title_id, request, store, resolver)
    renderer = VTTSkipRenderer(warning_lead_ms=settings.warning_lead_ms)
    return PlainTextResponse(
        renderer.render(skips, title_id),
        media_type=renderer.media_type,
        headers={"Access-Control-Allow-Origin": "*"},
    )


@router.get("/skips/{title_id}/mcf", response_class=PlainTextResponse)
async def get_skips_mcf(
    title_id: str,
    store: ISegmentStore = Depends(get_store),
) -> PlainTextResponse:
    record = store.get(title_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No filter data found for this ID")

    return PlainTextResponse(
        generate_mcf(build_title_document(record)),
        headers={"Content-Disposition": f'attachment; filename="{title_id}.mcf"'},
    )


# ------------------------------------------------------------------
# Raw filter data
# ------------------------------------------------------------------


@router.get("/filters", response_model=TitleListResponse)
async def list_filters(
    store: ISegmentStore = Depends(get_store),
) -> TitleListResponse:
    titles = store.list_titles(limit=100)
    return TitleListResponse(count=len(titles), filters=titles)


@router.get("/filters/{title_id}", response_model=TitleRecord)
async def get_filters(
    title_id: str,
    store: ISegmentStore = Depends(get_store),
) -> TitleRecord:
    record = store.get(title_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No filter data found for this ID")
    return record


@router.put("/filters/{title_id}/metadata", response_model=MetadataUpdateResponse)
async def update_filter_metadata(
    title_id: str,
    req: MetadataUpdateRequest,
    store: ISegmentStore = Depends(get_store),
) -> MetadataUpdateResponse:
    record = store.update_metadata(title_id, title=req.title, year=req.year, type=req.type)
    return MetadataUpdateResponse(message="Metadata updated", filter_data=record)


# ------------------------------------------------------------------
# Statistics
# ------------------------------------------------------------------


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    store: ISegmentStore = Depends(get_store),
) -> StatsResponse:
    stats = store.stats()
    return StatsResponse(total_titles=stats.total_titles, total_segments=stats.total_segments)
