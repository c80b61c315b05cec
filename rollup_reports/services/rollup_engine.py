"""Rollup aggregation engine.

Pure functions turning raw delivery rows plus mapping tables into sorted
aggregate lists:

* ``compute_app_rollup``: per content network (alias-aware), with long-tail
  rows folded into a synthetic "Other" record.
* ``compute_genre_rollup``: per canonical genre.
* ``compute_content_rollup``: per (content key, network).
* ``compute_campaign_stats``: headline totals for one campaign.

Shared shape for the three rollups:
1. Keep rows with ``impression > 0`` (and the requested campaign, if any).
2. Group by a rollup-specific key, summing impressions / completes and
   counting contributing rows.
3. Derive ``avg_vcr`` once all rows are accumulated.
4. Sort by impressions descending (stable for ties).

Each call builds and discards its own accumulation map; nothing is cached.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TypeVar

from rollup_reports.config import ROLLUP_SETTINGS
from rollup_reports.models.domain import (
    ContentAliasMapping,
    GenreMapping,
    NetworkAlias,
    RawContentRow,
)
from rollup_reports.services.alias_resolver import AliasResolver
from rollup_reports.utils.metrics import completion_rate_pct, round_half_up


@dataclass
class AppRollup:
    app_name: str
    impressions: int = 0
    completes: int = 0
    avg_vcr: float = 0.0
    content_count: int = 0


@dataclass
class GenreRollup:
    genre_canon: str
    impressions: int = 0
    completes: int = 0
    avg_vcr: float = 0.0
    content_count: int = 0


@dataclass
class ContentRollup:
    content_key: str
    content_title: str
    content_network_name: str
    impressions: int = 0
    completes: int = 0
    avg_vcr: float = 0.0


@dataclass
class CampaignStats:
    campaign_id: str
    total_impressions: int = 0
    total_completes: int = 0
    overall_vcr: float = 0.0
    mapped_genres: int = 0
    total_rows: int = 0
    mapped_percentage: float = 0.0


RollupRecord = TypeVar("RollupRecord", AppRollup, GenreRollup, ContentRollup)


# ----------------------------- helper utilities ----------------------------- #

def _eligible_rows(rows: Iterable[RawContentRow], campaign_id: Optional[str]) -> Iterator[RawContentRow]:
    for row in rows:
        if (row.impression or 0) <= 0:
            continue
        if campaign_id is not None and row.campaign_id != campaign_id:
            continue
        yield row


def _network_name(row: RawContentRow) -> str:
    name = row.content_network_name or ""
    return name if name.strip() else str(ROLLUP_SETTINGS["unknown_label"])


def _group_key(name: str) -> str:
    return name.lower().strip()


def _finalize(records: Iterable[RollupRecord]) -> list[RollupRecord]:
    result = list(records)
    for record in result:
        record.avg_vcr = completion_rate_pct(record.completes, record.impressions)
    # list.sort is stable so equal-impression records keep first-seen order
    result.sort(key=lambda r: r.impressions, reverse=True)
    return result


# ------------------------------ rollup builders ------------------------------ #

def compute_app_rollup(
    rows: Iterable[RawContentRow],
    network_aliases: Iterable[NetworkAlias] = (),
    campaign_id: Optional[str] = None,
    *,
    other_threshold: Optional[int] = None,
) -> list[AppRollup]:
    """Aggregate rows per content network display name.

    Rows whose network is not covered by an alias and that delivered fewer
    than ``other_threshold`` impressions are accumulated into a single
    "Other" record instead of their own group. Aliased rows always keep
    their group. A network whose display name is "Other" is merged into
    that same record, so the label appears once. "Other" is only emitted when
    it received impressions.
    """
    threshold = int(ROLLUP_SETTINGS["other_threshold_impressions"]) if other_threshold is None else other_threshold
    resolver = AliasResolver(network_aliases=network_aliases)

    groups: dict[str, AppRollup] = {}
    other = AppRollup(app_name=str(ROLLUP_SETTINGS["other_label"]))
    other_key = _group_key(other.app_name)

    for row in _eligible_rows(rows, campaign_id):
        raw_name = _network_name(row)
        impression = row.impression or 0
        completes = row.quartile100 or 0

        if not resolver.is_network_aliased(raw_name) and impression < threshold:
            target = other
        else:
            display_name = resolver.resolve_network_alias(raw_name)
            key = _group_key(display_name)
            # a network reported as "Other" shares the long-tail record
            if key == other_key:
                target = other
            else:
                target = groups.get(key)
                if target is None:
                    target = groups[key] = AppRollup(app_name=display_name)

        target.impressions += impression
        target.completes += completes
        target.content_count += 1

    records = list(groups.values())
    if other.impressions > 0:
        records.append(other)
    return _finalize(records)


def compute_genre_rollup(
    rows: Iterable[RawContentRow],
    genre_map: Iterable[GenreMapping] = (),
    campaign_id: Optional[str] = None,
) -> list[GenreRollup]:
    """Aggregate rows per canonical genre.

    The ingested schema carries no genre column, so the genre map is keyed by
    the row's content network name. Unmapped rows land in "Unknown".
    """
    resolver = AliasResolver(genre_map=genre_map)
    groups: dict[str, GenreRollup] = {}

    for row in _eligible_rows(rows, campaign_id):
        genre = resolver.resolve_genre(row.content_network_name)
        target = groups.get(genre)
        if target is None:
            target = groups[genre] = GenreRollup(genre_canon=genre)
        target.impressions += row.impression or 0
        target.completes += row.quartile100 or 0
        target.content_count += 1

    return _finalize(groups.values())


def compute_content_rollup(
    rows: Iterable[RawContentRow],
    content_aliases: Iterable[ContentAliasMapping] = (),
    campaign_id: Optional[str] = None,
) -> list[ContentRollup]:
    """Aggregate rows per (content key, network).

    Titles are canonicalized before lookup so ``"Show A"`` and ``"show a  "``
    on the same network share a record. Rows without a title are reported as
    ``"<network> - Unknown Content"``. The record keeps the first-seen title
    and network spelling for display.
    """
    resolver = AliasResolver(content_aliases=content_aliases)
    suffix = str(ROLLUP_SETTINGS["unknown_content_suffix"])
    groups: dict[tuple[str, str], ContentRollup] = {}

    for row in _eligible_rows(rows, campaign_id):
        network_name = _network_name(row)
        content_title = row.content_title or f"{network_name} - {suffix}"
        content_key = resolver.resolve_content_key(content_title)
        key = (content_key, _group_key(network_name))

        target = groups.get(key)
        if target is None:
            target = groups[key] = ContentRollup(
                content_key=content_key,
                content_title=content_title,
                content_network_name=network_name,
            )
        target.impressions += row.impression or 0
        target.completes += row.quartile100 or 0

    return _finalize(groups.values())


def compute_campaign_stats(
    rows: Iterable[RawContentRow],
    genre_map: Iterable[GenreMapping],
    campaign_id: str,
) -> CampaignStats:
    """Headline totals over every raw row of one campaign (no impression filter)."""
    resolver = AliasResolver(genre_map=genre_map)
    stats = CampaignStats(campaign_id=campaign_id)
    mapped_rows = 0
    genres: set[str] = set()

    for row in rows:
        if row.campaign_id != campaign_id:
            continue
        stats.total_rows += 1
        stats.total_impressions += row.impression or 0
        stats.total_completes += row.quartile100 or 0
        genre = resolver.resolve_genre(row.content_network_name)
        if genre != resolver.unknown_label:
            mapped_rows += 1
            genres.add(genre)

    stats.overall_vcr = completion_rate_pct(stats.total_completes, stats.total_impressions)
    stats.mapped_genres = len(genres)
    if stats.total_rows:
        stats.mapped_percentage = round_half_up(mapped_rows / stats.total_rows * 100, 0)
    return stats


__all__ = [
    "AppRollup",
    "GenreRollup",
    "ContentRollup",
    "CampaignStats",
    "compute_app_rollup",
    "compute_genre_rollup",
    "compute_content_rollup",
    "compute_campaign_stats",
]
