"""
Mapping management endpoints: content network aliases, genre map and content aliases.

Changes take effect on the next rollup request; nothing is cached.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from rollup_reports.api.deps import get_db, get_rollup_store
from rollup_reports.models.db import ContentAlias, ContentNetworkAlias, GenreMap
from rollup_reports.models.schemas.base import ResponseBase
from rollup_reports.models.schemas.mappings import (
    ContentAliasRead,
    ContentAliasUpsert,
    ContentNetworksRead,
    GenreMapRead,
    GenreMapUpsert,
    NetworkAliasCreate,
    NetworkAliasRead,
)
from rollup_reports.services.alias_resolver import canonicalize_title
from rollup_reports.stores import RollupStore
from rollup_reports.utils import get_logger, log_business_event

router = APIRouter()
logger = get_logger(__name__)

@router.get(
    "/content-networks",
    response_model=ContentNetworksRead,
    summary="Raw network names and their aliases"
)
async def list_content_networks(
    campaign_id: Optional[str] = Query(None, description="Only names seen in this campaign"),
    db: Session = Depends(get_db),
    store: RollupStore = Depends(get_rollup_store),
) -> ContentNetworksRead:
    names = store.list_network_names(campaign_id)
    aliases = db.query(ContentNetworkAlias).order_by(ContentNetworkAlias.alias).all()
    return ContentNetworksRead(
        network_names=names,
        aliases=[NetworkAliasRead.model_validate(a) for a in aliases],
    )

@router.post(
    "/content-networks",
    response_model=NetworkAliasRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create or replace a network alias"
)
async def save_network_alias(
    payload: NetworkAliasCreate,
    request: Request,
    db: Session = Depends(get_db)
) -> NetworkAliasRead:
    """
    Save an alias and the raw network names it covers.
    An existing alias with the same name has its network list replaced.
    """
    request_id = request.headers.get("X-Request-ID", "unknown")

    existing = db.query(ContentNetworkAlias).filter(ContentNetworkAlias.alias == payload.alias).first()
    if existing:
        existing.network_names = payload.network_names
        alias = existing
        action = "replaced"
    else:
        alias = ContentNetworkAlias(alias=payload.alias, network_names=payload.network_names)
        db.add(alias)
        action = "created"

    db.commit()
    db.refresh(alias)

    # first match wins at lookup time, so overlapping aliases are only reported
    others = db.query(ContentNetworkAlias).filter(ContentNetworkAlias.id != alias.id).all()
    overlapping = sorted({
        name for other in others for name in (other.network_names or []) if name in payload.network_names
    })
    if overlapping:
        logger.warning(
            "Network names already mapped by another alias",
            alias=payload.alias,
            network_names=overlapping,
            request_id=request_id
        )

    log_business_event(
        event_type=f"network_alias_{action}",
        details={"alias": alias.alias, "network_names": alias.network_names},
        request_id=request_id
    )
    return NetworkAliasRead.model_validate(alias)

@router.delete(
    "/content-networks",
    response_model=ResponseBase,
    summary="Delete a network alias"
)
async def delete_network_alias(
    request: Request,
    alias: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
) -> ResponseBase:
    request_id = request.headers.get("X-Request-ID", "unknown")

    deleted = db.query(ContentNetworkAlias).filter(ContentNetworkAlias.alias == alias).delete()
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Alias '{alias}' not found"
        )
    db.commit()

    log_business_event(
        event_type="network_alias_deleted",
        details={"alias": alias},
        request_id=request_id
    )
    return ResponseBase(message=f"Deleted alias '{alias}'")

@router.get(
    "/genres",
    response_model=List[GenreMapRead],
    summary="List genre mappings"
)
async def list_genre_map(db: Session = Depends(get_db)) -> List[GenreMapRead]:
    rows = db.query(GenreMap).order_by(GenreMap.raw_genre).all()
    return [GenreMapRead.model_validate(r) for r in rows]

@router.post(
    "/genres",
    response_model=GenreMapRead,
    summary="Create or update a genre mapping"
)
async def upsert_genre_mapping(
    payload: GenreMapUpsert,
    request: Request,
    db: Session = Depends(get_db)
) -> GenreMapRead:
    request_id = request.headers.get("X-Request-ID", "unknown")

    mapping = db.query(GenreMap).filter(GenreMap.raw_genre == payload.raw_genre).first()
    if mapping:
        mapping.genre_canon = payload.genre_canon
    else:
        mapping = GenreMap(raw_genre=payload.raw_genre, genre_canon=payload.genre_canon)
        db.add(mapping)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Genre mapping for '{payload.raw_genre}' was modified concurrently"
        )
    db.refresh(mapping)

    log_business_event(
        event_type="genre_mapping_saved",
        details={"raw_genre": mapping.raw_genre, "genre_canon": mapping.genre_canon},
        request_id=request_id
    )
    return GenreMapRead.model_validate(mapping)

@router.get(
    "/content-aliases",
    response_model=List[ContentAliasRead],
    summary="List content aliases"
)
async def list_content_aliases(db: Session = Depends(get_db)) -> List[ContentAliasRead]:
    rows = db.query(ContentAlias).order_by(ContentAlias.content_title_canon).all()
    return [ContentAliasRead.model_validate(r) for r in rows]

@router.post(
    "/content-aliases",
    response_model=ContentAliasRead,
    summary="Create or update a content alias"
)
async def upsert_content_alias(
    payload: ContentAliasUpsert,
    request: Request,
    db: Session = Depends(get_db)
) -> ContentAliasRead:
    """Map a title (any spelling) to a content key. The title is stored canonicalized."""
    request_id = request.headers.get("X-Request-ID", "unknown")

    canon = canonicalize_title(payload.content_title)
    if not canon:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="content_title has no letters, digits or spaces after canonicalization"
        )

    alias = db.get(ContentAlias, canon)
    if alias:
        alias.content_key = payload.content_key
    else:
        alias = ContentAlias(content_title_canon=canon, content_key=payload.content_key)
        db.add(alias)
    db.commit()
    db.refresh(alias)

    log_business_event(
        event_type="content_alias_saved",
        details={"content_title_canon": canon, "content_key": payload.content_key},
        request_id=request_id
    )
    return ContentAliasRead.model_validate(alias)
