"""
Campaign endpoints: delivery log ingestion, listing, per-campaign rollups and exports.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request, Response
from sqlalchemy.orm import Session
import time
from rollup_reports.api.deps import get_db, get_rollup_store, get_campaign_or_404
from rollup_reports.api.v1.endpoints.rollups import parse_rollup_type, serialize_rollup, csv_attachment
from rollup_reports.models.db import Campaign, CampaignUpload
from rollup_reports.models.schemas.base import ResponseBase
from rollup_reports.models.schemas.campaigns import (
    CampaignRead,
    CampaignUploadRead,
    DeliveryLogUpload,
    IngestCounts,
    IngestResponse,
)
from rollup_reports.models.schemas.rollups import CampaignReportRead, CampaignStatsRead, RollupResponse
from rollup_reports.services.ingestion import ingest_delivery_log
from rollup_reports.services.rollup_service import build_campaign_report, build_campaign_stats, build_rollup
from rollup_reports.stores import RollupStore
from rollup_reports.utils import get_logger, log_business_event, log_performance

router = APIRouter()
logger = get_logger(__name__)

@router.post(
    "/ingest",
    response_model=IngestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ingest a delivery log",
    description="Create a campaign from a CSV delivery log and store its raw rows"
)
async def ingest_campaign(
    payload: DeliveryLogUpload,
    request: Request,
    db: Session = Depends(get_db)
) -> IngestResponse:
    request_id = request.headers.get("X-Request-ID", "unknown")

    logger.info(
        "Campaign ingestion started",
        file_name=payload.file_name,
        campaign_name=payload.campaign_name,
        request_id=request_id
    )

    try:
        result = ingest_delivery_log(
            db,
            file_name=payload.file_name,
            csv_text=payload.csv_text,
            campaign_name=payload.campaign_name,
            request_id=request_id,
        )
    except ValueError as e:
        logger.warning(
            "Campaign ingestion rejected",
            file_name=payload.file_name,
            error=str(e),
            request_id=request_id
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    campaign = db.get(Campaign, result.campaign_id)
    upload = db.get(CampaignUpload, result.upload_id)

    logger.info(
        "Campaign ingestion completed",
        campaign_id=result.campaign_id,
        rows_inserted=result.rows_inserted,
        request_id=request_id
    )

    return IngestResponse(
        campaign=CampaignRead.model_validate(campaign),
        upload=CampaignUploadRead.model_validate(upload),
        content=IngestCounts(
            rows_processed=result.rows_processed,
            rows_inserted=result.rows_inserted,
            parse_errors=result.parse_errors,
        ),
    )

@router.get(
    "/",
    response_model=List[CampaignRead],
    summary="List campaigns"
)
async def list_campaigns(
    request: Request,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
) -> List[CampaignRead]:
    """List campaigns, newest first."""
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID", "unknown")

    campaigns = (
        db.query(Campaign)
        .order_by(Campaign.created_at.desc(), Campaign.campaign_id)
        .offset(offset)
        .limit(limit)
        .all()
    )

    duration_ms = (time.time() - start_time) * 1000
    log_performance(
        operation="list_campaigns",
        duration_ms=duration_ms,
        additional_data={"campaigns_returned": len(campaigns)}
    )
    logger.info(
        "Campaign list completed",
        campaigns_returned=len(campaigns),
        request_id=request_id
    )
    return [CampaignRead.model_validate(c) for c in campaigns]

@router.get(
    "/{campaign_id}",
    response_model=CampaignRead,
    summary="Get campaign"
)
async def get_campaign(campaign: Campaign = Depends(get_campaign_or_404)) -> CampaignRead:
    return CampaignRead.model_validate(campaign)

@router.delete(
    "/{campaign_id}",
    response_model=ResponseBase,
    summary="Delete campaign",
    description="Delete a campaign together with its uploads and raw rows"
)
async def delete_campaign(
    request: Request,
    campaign: Campaign = Depends(get_campaign_or_404),
    db: Session = Depends(get_db)
) -> ResponseBase:
    request_id = request.headers.get("X-Request-ID", "unknown")
    campaign_id = campaign.campaign_id
    row_count = len(campaign.content_rows)

    # get_campaign_or_404 shares this request's session
    db.delete(campaign)
    db.commit()

    log_business_event(
        event_type="campaign_deleted",
        details={"campaign_id": campaign_id, "rows_deleted": row_count},
        request_id=request_id
    )
    return ResponseBase(
        message=f"Deleted campaign '{campaign_id}'",
        data={"campaign_id": campaign_id, "rows_deleted": row_count},
    )

@router.get(
    "/{campaign_id}/rollups/{rollup_type}",
    response_model=RollupResponse,
    summary="Get one rollup for a campaign"
)
async def get_campaign_rollup(
    rollup_type: str,
    request: Request,
    campaign: Campaign = Depends(get_campaign_or_404),
    store: RollupStore = Depends(get_rollup_store),
) -> RollupResponse:
    request_id = request.headers.get("X-Request-ID", "unknown")
    kind = parse_rollup_type(rollup_type)
    records = build_rollup(store, kind, campaign.campaign_id)

    logger.info(
        "Campaign rollup served",
        campaign_id=campaign.campaign_id,
        rollup_type=kind.value,
        groups=len(records),
        request_id=request_id
    )
    return RollupResponse(
        rollup_type=kind.value,
        campaign_id=campaign.campaign_id,
        count=len(records),
        rollup=serialize_rollup(kind, records),
    )

@router.get(
    "/{campaign_id}/report",
    response_model=CampaignReportRead,
    summary="All rollups and stats for a campaign"
)
async def get_campaign_report(
    campaign: Campaign = Depends(get_campaign_or_404),
    store: RollupStore = Depends(get_rollup_store),
) -> CampaignReportRead:
    report = build_campaign_report(store, campaign.campaign_id)
    result = CampaignReportRead.model_validate(report)
    result.campaign_name = campaign.campaign_name
    return result

@router.get(
    "/{campaign_id}/stats",
    response_model=CampaignStatsRead,
    summary="Headline totals for a campaign"
)
async def get_campaign_stats(
    campaign: Campaign = Depends(get_campaign_or_404),
    store: RollupStore = Depends(get_rollup_store),
) -> CampaignStatsRead:
    return CampaignStatsRead.model_validate(build_campaign_stats(store, campaign.campaign_id))

@router.get(
    "/{campaign_id}/export",
    summary="Export a campaign rollup as CSV",
    response_class=Response,
)
async def export_campaign_rollup(
    request: Request,
    rollup_type: str = Query("app", alias="type", description="app, genre or content"),
    campaign: Campaign = Depends(get_campaign_or_404),
    store: RollupStore = Depends(get_rollup_store),
) -> Response:
    request_id = request.headers.get("X-Request-ID", "unknown")
    kind = parse_rollup_type(rollup_type)
    records = build_rollup(store, kind, campaign.campaign_id)
    logger.info(
        "Campaign export requested",
        campaign_id=campaign.campaign_id,
        rollup_type=kind.value,
        rows=len(records),
        request_id=request_id
    )
    return csv_attachment(kind, records)
