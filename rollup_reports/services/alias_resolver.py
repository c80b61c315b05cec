"""Name normalization lookups used while building rollups.

Three independent mapping tables are indexed once per resolver:

* content-network aliases: many raw network names -> one display alias
* genre map: raw string -> canonical genre (``"Unknown"`` when unmapped)
* content aliases: canonical title -> content key

Every lookup is total. A miss falls back to the raw value (networks), to
``"Unknown"`` (genres) or to the canonical title itself (content), never to an
exception.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional

from rollup_reports.config import ROLLUP_SETTINGS
from rollup_reports.models.domain import ContentAliasMapping, GenreMapping, NetworkAlias
from rollup_reports.utils import get_logger

logger = get_logger(__name__)

_NON_TITLE_CHARS = re.compile(r"[^a-z0-9 ]")


def canonicalize_title(title: Optional[str]) -> str:
    """Lower-case, trim, then drop everything outside ``[a-z0-9 ]``.

    Internal runs of spaces are kept: ``" Show:  A "`` -> ``"show  a"``.
    """
    if not title:
        return ""
    return _NON_TITLE_CHARS.sub("", title.lower().strip())


class AliasResolver:
    """In-memory index over the three mapping tables."""

    def __init__(
        self,
        network_aliases: Iterable[NetworkAlias] = (),
        genre_map: Iterable[GenreMapping] = (),
        content_aliases: Iterable[ContentAliasMapping] = (),
    ):
        self.unknown_label = str(ROLLUP_SETTINGS["unknown_label"])

        self._network_index: dict[str, str] = {}
        for entry in network_aliases:
            for raw_name in entry.network_names:
                existing = self._network_index.get(raw_name)
                if existing is None:
                    self._network_index[raw_name] = entry.alias
                elif existing != entry.alias:
                    logger.warning(
                        "Network name mapped by more than one alias; keeping first",
                        network_name=raw_name,
                        kept_alias=existing,
                        ignored_alias=entry.alias,
                    )

        self._genre_index: dict[str, str] = {}
        for mapping in genre_map:
            self._genre_index.setdefault(mapping.raw, mapping.genre_canon)

        self._content_index: dict[str, str] = {}
        for mapping in content_aliases:
            self._content_index.setdefault(mapping.content_title_canon, mapping.content_key)

    def is_network_aliased(self, raw_name: Optional[str]) -> bool:
        return raw_name is not None and raw_name in self._network_index

    def resolve_network_alias(self, raw_name: Optional[str]) -> str:
        if raw_name is None:
            return self.unknown_label
        return self._network_index.get(raw_name, raw_name)

    def resolve_genre(self, raw: Optional[str]) -> str:
        if raw is None:
            return self.unknown_label
        return self._genre_index.get(raw) or self.unknown_label

    def resolve_content_key(self, content_title: Optional[str]) -> str:
        canon = canonicalize_title(content_title)
        return self._content_index.get(canon) or canon


__all__ = ["AliasResolver", "canonicalize_title"]
