from rollup_reports.services.csv_export import rollup_fieldnames, rollups_to_csv
from rollup_reports.services.rollup_engine import AppRollup, ContentRollup


def test_header_then_one_line_per_record():
    records = [
        AppRollup(app_name="Hulu", impressions=1000, completes=500, avg_vcr=50.0, content_count=1),
        AppRollup(app_name="Other", impressions=10, completes=1, avg_vcr=10.5, content_count=1),
    ]

    text = rollups_to_csv(records)

    assert text.splitlines() == [
        "app_name,impressions,completes,avg_vcr,content_count",
        "Hulu,1000,500,50,1",
        "Other,10,1,10.5,1",
    ]


def test_commas_and_quotes_are_escaped():
    records = [
        ContentRollup(
            content_key="k",
            content_title='Say "Hi", World',
            content_network_name="Net, Inc",
            impressions=5,
            completes=1,
            avg_vcr=20.0,
        )
    ]

    lines = rollups_to_csv(records).splitlines()

    assert lines[1] == 'k,"Say ""Hi"", World","Net, Inc",5,1,20'


def test_empty_records():
    assert rollups_to_csv([]) == ""
    assert rollups_to_csv([], fieldnames=rollup_fieldnames(AppRollup)) == (
        "app_name,impressions,completes,avg_vcr,content_count\n"
    )


def test_mappings_are_accepted():
    text = rollups_to_csv([{"genre_canon": "Sports", "impressions": 3}])

    assert text == "genre_canon,impressions\nSports,3\n"
