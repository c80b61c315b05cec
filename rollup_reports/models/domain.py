"""Typed in-memory records passed between stores, the alias resolver and the rollup engine.

Loose values (CSV cells, ORM attributes, JSON) are coerced once through the
``from_mapping`` constructors so downstream code never sees ``None`` counts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def coerce_count(value: Any) -> int:
    """Best-effort non-negative integer: ``"12" -> 12``, ``"12.9" -> 12``, junk/None/negative -> 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    try:
        parsed = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(parsed, 0)


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class RawContentRow:
    campaign_id: str
    content_title: str = ""
    content_network_name: str = ""
    impression: int = 0
    quartile100: int = 0
    campaign_name_src: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawContentRow":
        src = data.get("campaign_name_src")
        return cls(
            campaign_id=coerce_text(data.get("campaign_id")),
            content_title=coerce_text(data.get("content_title")),
            content_network_name=coerce_text(data.get("content_network_name")),
            impression=coerce_count(data.get("impression")),
            quartile100=coerce_count(data.get("quartile100")),
            campaign_name_src=str(src) if src not in (None, "") else None,
        )


@dataclass(frozen=True)
class NetworkAlias:
    alias: str
    network_names: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, alias: str, network_names) -> "NetworkAlias":
        return cls(alias=alias, network_names=frozenset(n for n in network_names if n is not None))


@dataclass(frozen=True)
class GenreMapping:
    raw: str
    genre_canon: str


@dataclass(frozen=True)
class ContentAliasMapping:
    content_title_canon: str
    content_key: str


__all__ = [
    "coerce_count",
    "coerce_text",
    "RawContentRow",
    "NetworkAlias",
    "GenreMapping",
    "ContentAliasMapping",
]
