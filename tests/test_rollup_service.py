import pytest
from rollup_reports.models.db.enums import RollupType
from rollup_reports.models.domain import GenreMapping, NetworkAlias, RawContentRow
from rollup_reports.services.rollup_service import (
    build_app_rollup,
    build_campaign_report,
    build_campaign_stats,
    build_content_rollup,
    build_genre_rollup,
    build_rollup,
)
from rollup_reports.stores import InMemoryRollupStore, RowSourceUnavailable, SqlRollupStore


def _rows():
    return [
        RawContentRow(campaign_id="c1", content_title="Show A", content_network_name="Hulu", impression=1000, quartile100=500),
        RawContentRow(campaign_id="c1", content_title="Show B", content_network_name="tiny-net", impression=10, quartile100=1),
        RawContentRow(campaign_id="c1", content_title="Show C", content_network_name="Hulu", impression=0, quartile100=0),
        RawContentRow(campaign_id="c2", content_title="Show A", content_network_name="roku-ctv", impression=20, quartile100=5),
    ]


def test_store_returns_zero_impression_rows():
    store = InMemoryRollupStore(_rows())

    assert len(store.fetch_raw_rows("c1")) == 3
    assert len(store.fetch_raw_rows()) == 4


def test_build_rollups_from_memory_store():
    store = InMemoryRollupStore(
        _rows(),
        network_aliases=[NetworkAlias.of("Roku", ["roku-ctv"])],
        genre_map=[GenreMapping(raw="Hulu", genre_canon="Drama")],
    )

    app = build_app_rollup(store)
    assert [(r.app_name, r.impressions) for r in app] == [("Hulu", 1000), ("Roku", 20), ("Other", 10)]

    genre = build_genre_rollup(store, "c1")
    assert [(r.genre_canon, r.impressions) for r in genre] == [("Drama", 1000), ("Unknown", 10)]

    content = build_content_rollup(store, "c2")
    assert [(r.content_key, r.content_network_name) for r in content] == [("show a", "roku-ctv")]


def test_mapping_changes_apply_on_next_build():
    store = InMemoryRollupStore(_rows())
    assert "Other" in [r.app_name for r in build_app_rollup(store, "c1")]

    store.upsert_network_alias("Tiny", ["tiny-net"])
    assert [r.app_name for r in build_app_rollup(store, "c1")] == ["Hulu", "Tiny"]

    assert store.delete_network_alias("Tiny")
    assert not store.delete_network_alias("Tiny")


def test_network_alias_update_keeps_lookup_precedence():
    store = InMemoryRollupStore(_rows())
    store.upsert_network_alias("Roku", ["roku-ctv"])
    store.upsert_network_alias("Roku Channel", ["roku-ctv"])

    updated = store.upsert_network_alias("Roku", ["roku-ctv", "roku-tv"])

    assert updated.network_names == frozenset({"roku-ctv", "roku-tv"})
    assert [a.alias for a in store.fetch_network_aliases()] == ["Roku", "Roku Channel"]
    assert [r.app_name for r in build_app_rollup(store, "c2")] == ["Roku"]


def test_content_alias_upsert_canonicalizes():
    store = InMemoryRollupStore(_rows())

    canon = store.upsert_content_alias("SHOW A!", "show-a")

    assert canon == "show a"
    keys = {r.content_key for r in build_content_rollup(store)}
    assert "show-a" in keys


def test_campaign_report_and_stats():
    store = InMemoryRollupStore(_rows(), genre_map=[GenreMapping(raw="Hulu", genre_canon="Drama")])

    report = build_campaign_report(store, "c1")

    assert report.campaign_id == "c1"
    assert [r.app_name for r in report.app] == ["Hulu", "Other"]
    assert report.stats.total_rows == 3
    assert report.stats.mapped_genres == 1
    assert report.stats == build_campaign_stats(store, "c1")


def test_delete_campaign_rows():
    store = InMemoryRollupStore(_rows())

    assert store.delete_campaign("c1") == 3
    assert build_app_rollup(store, "c1") == []


@pytest.mark.parametrize("rollup_type", list(RollupType))
def test_unavailable_store_raises_instead_of_returning_empty(rollup_type):
    store = InMemoryRollupStore(_rows(), available=False)

    with pytest.raises(RowSourceUnavailable) as exc:
        build_rollup(store, rollup_type, "c1")
    assert exc.value.source == "memory"


def test_sql_store_reads_rows_and_mappings(db_session, campaign_factory, network_alias_factory, genre_factory, content_alias_factory):
    campaign_factory("c1", [("Show A", "Hulu", 1000, 500), ("", "roku-ctv", 0, 0)])
    network_alias_factory("Roku", ["roku-ctv"])
    genre_factory("Hulu", "Drama")
    content_alias_factory("show a", "SHOW-A")
    store = SqlRollupStore(db_session)

    rows = store.fetch_raw_rows("c1")
    assert [(r.content_network_name, r.impression) for r in rows] == [("Hulu", 1000), ("roku-ctv", 0)]
    assert store.fetch_raw_rows("missing") == []
    assert store.fetch_network_aliases()[0].network_names == frozenset({"roku-ctv"})
    assert store.fetch_genre_map()[0].genre_canon == "Drama"
    assert store.fetch_content_alias_map()[0].content_key == "SHOW-A"
    assert store.list_network_names("c1") == ["Hulu", "roku-ctv"]


def test_sql_store_wraps_database_errors(db_session, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "scalars", _boom)
    store = SqlRollupStore(db_session)

    with pytest.raises(RowSourceUnavailable) as exc:
        store.fetch_raw_rows("c1")
    assert exc.value.source == "campaign_content_raw"
