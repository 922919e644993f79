import pandas as pd

from storm_impact.data.filters import damage_reported, since_year, apply_filters
from storm_impact.data.quality import DataQualityReport


def test_damage_reported(records):
    kept = damage_reported(records)
    assert kept["event_type"].tolist() == [
        "TSTM WIND", "RIVER FLOOD", "EXCESSIVE HEAT", "ICE STORM WIND",
    ]


def test_damage_reported_each_field_counts():
    df = pd.DataFrame({
        "fatalities": [1, 0, 0, 0, 0],
        "injuries": [0, 1, 0, 0, 0],
        "property_damage": [0.0, 0.0, 0.5, 0.0, 0.0],
        "crop_damage": [0.0, 0.0, 0.0, 2.0, 0.0],
    })
    assert damage_reported(df).index.tolist() == [0, 1, 2, 3]


def test_damage_reported_idempotent(records):
    once = damage_reported(records)
    pd.testing.assert_frame_equal(damage_reported(once), once)


def test_since_year(records):
    assert since_year(records, 1995)["year"].tolist() == [1995, 2000, 2001]
    assert since_year(records, 1990)["year"].tolist() == [1995, 1994, 1990, 2000, 2001]


def test_apply_filters(records):
    report = DataQualityReport()
    out = apply_filters(records, 1993, report)
    # order preserved, 1990 heat record dropped, no-damage record dropped
    assert out["event_type"].tolist() == ["TSTM WIND", "RIVER FLOOD", "ICE STORM WIND"]
    assert report.rows_after_damage_filter == 4
    assert report.rows_after_year_filter == 3
