"""Community contribution endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cleanstream.api.deps import get_store
from cleanstream.api.schemas import ContributeRequest, ContributeResponse, ImportResponse
from cleanstream.errors import FormatError, ValidationError
from cleanstream.services.interfaces import ISegmentStore
from cleanstream.services.mcf import MCFParser, document_to_segments

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/contribute", tags=["contribute"])


@router.post("/{title_id}", response_model=ContributeResponse, status_code=201)
async def contribute_segment(
    title_id: str,
    req: ContributeRequest,
    store: ISegmentStore = Depends(get_store),
) -> ContributeResponse:
    try:
        segment = store.put(title_id, req.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ContributeResponse(message="Segment added successfully", segment=segment)


@router.post("/{title_id}/mcf", response_model=ImportResponse, status_code=201)
async def import_mcf(
    title_id: str,
    request: Request,
    contributor: str = Query("mcf-import", description="Contributor name"),
    store: ISegmentStore = Depends(get_store),
) -> ImportResponse:
    body = await request.body()
    try:
        document = MCFParser().parse(body.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="Invalid MCF format: not UTF-8") from exc
    except FormatError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid MCF format: {exc}") from exc

    store.update_metadata(
        title_id,
        title=document.metadata.title,
        year=document.metadata.year,
        type=document.metadata.type,
    )

    added = 0
    skipped = 0
    for segment in document_to_segments(document):
        try:
            store.put(title_id, segment.model_copy(update={"contributor": contributor}))
        except ValidationError as exc:
            skipped += 1
            logger.warning("Skipping imported segment for %s: %s", title_id, exc)
            continue
        added += 1

    logger.info("Imported MCF for %s: %d added, %d skipped", title_id, added, skipped)
    return ImportResponse(
        message="MCF imported successfully",
        segments_added=added,
        segments_skipped=skipped,
    )
