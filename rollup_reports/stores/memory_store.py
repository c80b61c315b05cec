"""Instance-scoped in-memory rollup store.

Every collection belongs to the store object, so two stores never share
rows. Useful for fixtures, scripts and embedding the engine without a
database. ``available=False`` makes every read raise ``RowSourceUnavailable``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from rollup_reports.models.domain import (
    ContentAliasMapping,
    GenreMapping,
    NetworkAlias,
    RawContentRow,
)
from rollup_reports.services.alias_resolver import canonicalize_title
from rollup_reports.stores.base import RollupStore, RowSourceUnavailable


class InMemoryRollupStore(RollupStore):
    def __init__(
        self,
        rows: Iterable[RawContentRow] = (),
        network_aliases: Iterable[NetworkAlias] = (),
        genre_map: Iterable[GenreMapping] = (),
        content_aliases: Iterable[ContentAliasMapping] = (),
        *,
        available: bool = True,
    ):
        self._rows: list[RawContentRow] = list(rows)
        self._network_aliases: list[NetworkAlias] = list(network_aliases)
        self._genre_map: dict[str, str] = {g.raw: g.genre_canon for g in genre_map}
        self._content_aliases: dict[str, str] = {c.content_title_canon: c.content_key for c in content_aliases}
        self.available = available

    def _ensure_available(self) -> None:
        if not self.available:
            raise RowSourceUnavailable("In-memory store marked unavailable", source="memory")

    # --------------------------------- writes --------------------------------- #

    def add_rows(self, rows: Iterable[RawContentRow]) -> int:
        new_rows = list(rows)
        self._rows.extend(new_rows)
        return len(new_rows)

    def delete_campaign(self, campaign_id: str) -> int:
        before = len(self._rows)
        self._rows = [r for r in self._rows if r.campaign_id != campaign_id]
        return before - len(self._rows)

    def upsert_network_alias(self, alias: str, network_names: Iterable[str]) -> NetworkAlias:
        """Replace an existing alias in place so lookup precedence is unchanged."""
        entry = NetworkAlias.of(alias, network_names)
        for index, existing in enumerate(self._network_aliases):
            if existing.alias == alias:
                self._network_aliases[index] = entry
                return entry
        self._network_aliases.append(entry)
        return entry

    def delete_network_alias(self, alias: str) -> bool:
        before = len(self._network_aliases)
        self._network_aliases = [a for a in self._network_aliases if a.alias != alias]
        return len(self._network_aliases) != before

    def upsert_genre(self, raw_genre: str, genre_canon: str) -> None:
        self._genre_map[raw_genre] = genre_canon

    def upsert_content_alias(self, content_title: str, content_key: str) -> str:
        canon = canonicalize_title(content_title)
        self._content_aliases[canon] = content_key
        return canon

    # --------------------------------- reads ---------------------------------- #

    def fetch_raw_rows(self, campaign_id: Optional[str] = None) -> list[RawContentRow]:
        self._ensure_available()
        if campaign_id is None:
            return list(self._rows)
        return [r for r in self._rows if r.campaign_id == campaign_id]

    def fetch_network_aliases(self) -> list[NetworkAlias]:
        self._ensure_available()
        return list(self._network_aliases)

    def fetch_genre_map(self) -> list[GenreMapping]:
        self._ensure_available()
        return [GenreMapping(raw=k, genre_canon=v) for k, v in self._genre_map.items()]

    def fetch_content_alias_map(self) -> list[ContentAliasMapping]:
        self._ensure_available()
        return [ContentAliasMapping(content_title_canon=k, content_key=v) for k, v in self._content_aliases.items()]

    def list_network_names(self, campaign_id: Optional[str] = None) -> list[str]:
        return sorted({r.content_network_name for r in self.fetch_raw_rows(campaign_id) if r.content_network_name})


__all__ = ["InMemoryRollupStore"]
