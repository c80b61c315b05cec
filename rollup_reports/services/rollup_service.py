"""Rollup orchestration over a ``RollupStore``.

Fetches the rows and the one mapping table each rollup needs, runs the pure
engine function and logs timings. ``RowSourceUnavailable`` from the store is
logged and re-raised untouched.

``build_campaign_report`` reads a single snapshot (rows and all mapping
tables fetched once) and derives the three rollups plus stats from it.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from rollup_reports.models.db.enums import RollupType
from rollup_reports.services.rollup_engine import (
    AppRollup,
    CampaignStats,
    ContentRollup,
    GenreRollup,
    compute_app_rollup,
    compute_campaign_stats,
    compute_content_rollup,
    compute_genre_rollup,
)
from rollup_reports.stores.base import RollupStore, RowSourceUnavailable
from rollup_reports.utils import get_logger, log_performance

logger = get_logger(__name__)


@dataclass
class CampaignReport:
    campaign_id: str
    app: list[AppRollup] = field(default_factory=list)
    genre: list[GenreRollup] = field(default_factory=list)
    content: list[ContentRollup] = field(default_factory=list)
    stats: Optional[CampaignStats] = None


def build_rollup(
    store: RollupStore,
    rollup_type: RollupType,
    campaign_id: Optional[str] = None,
) -> list[AppRollup] | list[GenreRollup] | list[ContentRollup]:
    """Build one rollup, globally or for a single campaign."""
    start = time.time()
    try:
        rows = store.fetch_raw_rows(campaign_id)
        if rollup_type == RollupType.APP:
            result = compute_app_rollup(rows, store.fetch_network_aliases(), campaign_id)
        elif rollup_type == RollupType.GENRE:
            result = compute_genre_rollup(rows, store.fetch_genre_map(), campaign_id)
        else:
            result = compute_content_rollup(rows, store.fetch_content_alias_map(), campaign_id)
    except RowSourceUnavailable as e:
        logger.error(
            "Rollup build aborted: row source unavailable",
            rollup_type=rollup_type.value,
            campaign_id=campaign_id,
            source=e.source,
        )
        raise

    duration_ms = (time.time() - start) * 1000
    log_performance(
        operation=f"build_{rollup_type.value}_rollup",
        duration_ms=duration_ms,
        additional_data={"campaign_id": campaign_id, "raw_rows": len(rows), "groups": len(result)},
    )
    return result


def build_app_rollup(store: RollupStore, campaign_id: Optional[str] = None) -> list[AppRollup]:
    return build_rollup(store, RollupType.APP, campaign_id)  # type: ignore[return-value]


def build_genre_rollup(store: RollupStore, campaign_id: Optional[str] = None) -> list[GenreRollup]:
    return build_rollup(store, RollupType.GENRE, campaign_id)  # type: ignore[return-value]


def build_content_rollup(store: RollupStore, campaign_id: Optional[str] = None) -> list[ContentRollup]:
    return build_rollup(store, RollupType.CONTENT, campaign_id)  # type: ignore[return-value]


def build_campaign_stats(store: RollupStore, campaign_id: str) -> CampaignStats:
    return compute_campaign_stats(store.fetch_raw_rows(campaign_id), store.fetch_genre_map(), campaign_id)


def build_campaign_report(store: RollupStore, campaign_id: str) -> CampaignReport:
    """All three rollups and stats for one campaign from one snapshot."""
    start = time.time()
    rows = store.fetch_raw_rows(campaign_id)
    network_aliases = store.fetch_network_aliases()
    genre_map = store.fetch_genre_map()
    content_aliases = store.fetch_content_alias_map()

    report = CampaignReport(
        campaign_id=campaign_id,
        app=compute_app_rollup(rows, network_aliases, campaign_id),
        genre=compute_genre_rollup(rows, genre_map, campaign_id),
        content=compute_content_rollup(rows, content_aliases, campaign_id),
        stats=compute_campaign_stats(rows, genre_map, campaign_id),
    )

    zero_impression_rows = sum(1 for r in rows if r.impression <= 0)
    log_performance(
        operation="build_campaign_report",
        duration_ms=(time.time() - start) * 1000,
        additional_data={
            "campaign_id": campaign_id,
            "raw_rows": len(rows),
            "zero_impression_rows": zero_impression_rows,
            "app_groups": len(report.app),
            "genre_groups": len(report.genre),
            "content_groups": len(report.content),
        },
    )
    return report


__all__ = [
    "CampaignReport",
    "build_rollup",
    "build_app_rollup",
    "build_genre_rollup",
    "build_content_rollup",
    "build_campaign_stats",
    "build_campaign_report",
]
