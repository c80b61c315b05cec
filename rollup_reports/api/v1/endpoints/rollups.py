"""
Rollup endpoints across all campaigns (optionally filtered to one).
"""
from __future__ import annotations
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request, Response
from rollup_reports.api.deps import get_rollup_store
from rollup_reports.config import EXPORT_SETTINGS
from rollup_reports.models.db.enums import RollupType
from rollup_reports.models.schemas.rollups import (
    AppRollupRead,
    GenreRollupRead,
    ContentRollupRead,
    RollupResponse,
)
from rollup_reports.services.csv_export import rollup_fieldnames, rollups_to_csv
from rollup_reports.services.rollup_engine import AppRollup, GenreRollup, ContentRollup
from rollup_reports.services.rollup_service import build_rollup
from rollup_reports.stores import RollupStore
from rollup_reports.utils import get_logger

router = APIRouter()
logger = get_logger(__name__)

READ_SCHEMAS = {
    RollupType.APP: AppRollupRead,
    RollupType.GENRE: GenreRollupRead,
    RollupType.CONTENT: ContentRollupRead,
}

RECORD_TYPES = {
    RollupType.APP: AppRollup,
    RollupType.GENRE: GenreRollup,
    RollupType.CONTENT: ContentRollup,
}


def parse_rollup_type(value: str) -> RollupType:
    try:
        return RollupType(value.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid rollup type '{value}'. Expected one of: {', '.join(t.value for t in RollupType)}"
        )


def serialize_rollup(rollup_type: RollupType, records: Sequence[Any]) -> List[Dict[str, Any]]:
    schema = READ_SCHEMAS[rollup_type]
    return [schema.model_validate(asdict(r)).model_dump() for r in records]


def csv_attachment(rollup_type: RollupType, records: Sequence[Any]) -> Response:
    """CSV download for a rollup; 404 when there is nothing to export."""
    if not records:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data to export"
        )
    filename = EXPORT_SETTINGS["filenames"][rollup_type.value]
    body = rollups_to_csv(records, fieldnames=rollup_fieldnames(RECORD_TYPES[rollup_type]))
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{rollup_type}",
    response_model=RollupResponse,
    summary="Get a rollup across campaigns"
)
async def get_rollup(
    rollup_type: str,
    request: Request,
    campaign_id: Optional[str] = Query(None, description="Restrict to one campaign"),
    store: RollupStore = Depends(get_rollup_store),
) -> RollupResponse:
    """App, genre or content rollup over every campaign's rows, or one campaign's."""
    request_id = request.headers.get("X-Request-ID", "unknown")
    kind = parse_rollup_type(rollup_type)

    records = build_rollup(store, kind, campaign_id)

    logger.info(
        "Rollup served",
        rollup_type=kind.value,
        campaign_id=campaign_id,
        groups=len(records),
        request_id=request_id
    )
    return RollupResponse(
        rollup_type=kind.value,
        campaign_id=campaign_id,
        count=len(records),
        rollup=serialize_rollup(kind, records),
    )


@router.get(
    "/{rollup_type}/export",
    summary="Export a rollup as CSV",
    response_class=Response,
)
async def export_rollup(
    rollup_type: str,
    request: Request,
    campaign_id: Optional[str] = Query(None, description="Restrict to one campaign"),
    store: RollupStore = Depends(get_rollup_store),
) -> Response:
    request_id = request.headers.get("X-Request-ID", "unknown")
    kind = parse_rollup_type(rollup_type)
    records = build_rollup(store, kind, campaign_id)
    logger.info(
        "Rollup export requested",
        rollup_type=kind.value,
        campaign_id=campaign_id,
        rows=len(records),
        request_id=request_id
    )
    return csv_attachment(kind, records)
