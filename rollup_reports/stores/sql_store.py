"""SQLAlchemy-backed rollup store.

Reads raw rows and mapping tables through the request's ORM session. Any
database failure while reading is logged and surfaced as
``RowSourceUnavailable``; an empty result always means "nothing matched".
"""
from __future__ import annotations

from typing import Callable, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollup_reports.models.db import CampaignContentRaw, ContentAlias, ContentNetworkAlias, GenreMap
from rollup_reports.models.domain import (
    ContentAliasMapping,
    GenreMapping,
    NetworkAlias,
    RawContentRow,
)
from rollup_reports.stores.base import RollupStore, RowSourceUnavailable
from rollup_reports.utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class SqlRollupStore(RollupStore):
    def __init__(self, session: Session):
        self.session = session

    def _read(self, source: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except SQLAlchemyError as e:
            logger.error("Rollup store read failed", source=source, error=str(e), exc_info=True)
            self.session.rollback()
            raise RowSourceUnavailable(f"Unable to read {source}: {e.__class__.__name__}", source=source) from e

    def fetch_raw_rows(self, campaign_id: Optional[str] = None) -> list[RawContentRow]:
        def _query() -> list[RawContentRow]:
            stmt = select(CampaignContentRaw).order_by(CampaignContentRaw.id)
            if campaign_id is not None:
                stmt = stmt.where(CampaignContentRaw.campaign_id == campaign_id)
            return [
                RawContentRow.from_mapping({
                    "campaign_id": r.campaign_id,
                    "campaign_name_src": r.campaign_name_src,
                    "content_title": r.content_title,
                    "content_network_name": r.content_network_name,
                    "impression": r.impression,
                    "quartile100": r.quartile100,
                })
                for r in self.session.scalars(stmt)
            ]

        rows = self._read("campaign_content_raw", _query)
        logger.debug("Raw rows fetched", campaign_id=campaign_id, rows=len(rows))
        return rows

    def fetch_network_aliases(self) -> list[NetworkAlias]:
        def _query() -> list[NetworkAlias]:
            stmt = select(ContentNetworkAlias).order_by(ContentNetworkAlias.id)
            return [NetworkAlias.of(a.alias, a.network_names or []) for a in self.session.scalars(stmt)]

        return self._read("content_network_aliases", _query)

    def fetch_genre_map(self) -> list[GenreMapping]:
        def _query() -> list[GenreMapping]:
            stmt = select(GenreMap).order_by(GenreMap.id)
            return [GenreMapping(raw=g.raw_genre, genre_canon=g.genre_canon) for g in self.session.scalars(stmt)]

        return self._read("genre_map", _query)

    def fetch_content_alias_map(self) -> list[ContentAliasMapping]:
        def _query() -> list[ContentAliasMapping]:
            stmt = select(ContentAlias).order_by(ContentAlias.content_title_canon)
            return [
                ContentAliasMapping(content_title_canon=c.content_title_canon, content_key=c.content_key)
                for c in self.session.scalars(stmt)
            ]

        return self._read("content_aliases", _query)

    def list_network_names(self, campaign_id: Optional[str] = None) -> list[str]:
        def _query() -> list[str]:
            stmt = select(CampaignContentRaw.content_network_name).distinct()
            if campaign_id is not None:
                stmt = stmt.where(CampaignContentRaw.campaign_id == campaign_id)
            return sorted(name for name in self.session.scalars(stmt) if name)

        return self._read("campaign_content_raw", _query)


__all__ = ["SqlRollupStore"]
