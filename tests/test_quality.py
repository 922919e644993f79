import pandas as pd
import pytest

from storm_impact.data.loader import prepare_records
from storm_impact.data.normalize import normalize_columns
from storm_impact.data.quality import (
    DataQualityReport,
    MalformedDateError,
    MissingNumericFieldError,
    InvalidNumericFieldError,
    check_dates,
    check_numeric_fields,
    check_numeric_values,
)


def _with_bad_date(raw_frame):
    raw_frame.loc[1, "BGN_DATE"] = "13/45/1994 0:00:00"
    return raw_frame


def test_check_dates_rejects_and_counts(raw_frame):
    raw = _with_bad_date(raw_frame)
    report = DataQualityReport()
    df = check_dates(normalize_columns(raw), raw["BGN_DATE"], report)
    assert len(df) == 3
    assert "RIVER FLOOD" not in df["event_type"].tolist()
    assert report.malformed_dates == 1
    assert report.rows_rejected == 1


def test_check_dates_strict_raises(raw_frame):
    raw = _with_bad_date(raw_frame)
    with pytest.raises(MalformedDateError) as exc:
        check_dates(normalize_columns(raw), raw["BGN_DATE"], DataQualityReport(), strict=True)
    assert exc.value.count == 1
    assert exc.value.examples == ["13/45/1994 0:00:00"]


def test_check_dates_clean_frame_unchanged(raw_frame):
    report = DataQualityReport()
    df = normalize_columns(raw_frame)
    assert check_dates(df, raw_frame["BGN_DATE"], report) is df
    assert report.malformed_dates == 0


def test_check_numeric_fields_rejects_missing(raw_frame):
    raw_frame.loc[0, "INJURIES"] = None
    raw_frame.loc[3, "CROPDMG"] = None
    report = DataQualityReport()
    df = check_numeric_fields(normalize_columns(raw_frame), report)
    assert df["event_type"].tolist() == ["RIVER FLOOD", "EXCESSIVE HEAT"]
    assert report.missing_numeric == {
        "fatalities": 0, "injuries": 1, "property_damage": 0, "crop_damage": 1,
    }
    assert report.rows_rejected == 2


def test_check_numeric_fields_missing_is_not_zero(raw_frame):
    raw_frame.loc[2, "FATALITIES"] = None
    df = check_numeric_fields(normalize_columns(raw_frame), DataQualityReport())
    assert "EXCESSIVE HEAT" not in df["event_type"].tolist()


def test_check_numeric_fields_strict_raises(raw_frame):
    raw_frame.loc[0, "PROPDMG"] = None
    with pytest.raises(MissingNumericFieldError) as exc:
        check_numeric_fields(normalize_columns(raw_frame), DataQualityReport(), strict=True)
    assert exc.value.count == 1
    assert exc.value.by_column["property_damage"] == 1
    assert "property_damage=1" in str(exc.value)


def test_prepare_records(raw_frame):
    raw_frame.loc[3, "BGN_DATE"] = None
    report = DataQualityReport()
    df = prepare_records(raw_frame, report)
    assert report.rows_loaded == 4
    assert report.malformed_dates == 1
    assert len(df) == 3
    assert df["year"].dtype == "int16"
    assert df["fatalities"].dtype == "int32"
    assert df["property_damage_exp"].dtype.name == "category"


def test_prepare_records_leaves_raw_untouched(raw_frame):
    before = raw_frame.copy()
    prepare_records(raw_frame)
    pd.testing.assert_frame_equal(raw_frame, before)


def test_report_rows():
    report = DataQualityReport(rows_loaded=10, malformed_dates=1, rows_rejected=2,
                               missing_numeric={"injuries": 1})
    rows = {r["metric"]: r["value"] for r in report.as_rows()}
    assert rows["Rows loaded"] == 10
    assert rows["Missing injuries"] == 1
    assert rows["Rows rejected"] == 2


def test_check_numeric_values_rejects_fractional_counts(make_row):
    raw = pd.DataFrame([
        make_row("1/1/2000 0:00:00", "TORNADO", fatalities=0.6),
        make_row("1/2/2000 0:00:00", "TORNADO", injuries=3),
    ])
    report = DataQualityReport()
    df = check_numeric_values(normalize_columns(raw), report)
    assert df["injuries"].tolist() == [3]
    assert report.invalid_numeric["fatalities"] == 1
    assert report.rows_rejected == 1


def test_check_numeric_values_rejects_negative_damage(make_row):
    raw = pd.DataFrame([
        make_row("1/1/2000 0:00:00", "HAIL", fatalities=2, propdmg=-5, propexp="K"),
        make_row("1/2/2000 0:00:00", "HAIL", propdmg=5, propexp="K"),
    ])
    report = DataQualityReport()
    df = check_numeric_values(normalize_columns(raw), report)
    assert df["property_damage"].tolist() == [5.0]
    assert report.invalid_numeric == {
        "fatalities": 0, "injuries": 0, "property_damage": 1, "crop_damage": 0,
    }


def test_check_numeric_values_fractional_damage_is_valid(make_row):
    raw = pd.DataFrame([make_row("1/1/2000 0:00:00", "HAIL", propdmg=2.5, propexp="K")])
    df = normalize_columns(raw)
    assert check_numeric_values(df, DataQualityReport()) is df


def test_check_numeric_values_strict_raises(make_row):
    raw = pd.DataFrame([make_row("1/1/2000 0:00:00", "FLOOD", cropdmg=-1)])
    with pytest.raises(InvalidNumericFieldError) as exc:
        check_numeric_values(normalize_columns(raw), DataQualityReport(), strict=True)
    assert exc.value.count == 1
    assert "crop_damage=1" in str(exc.value)


def test_fractional_casualty_row_is_counted_not_lost(make_row):
    from storm_impact.data.store import StormStore

    raw = pd.DataFrame([
        make_row("1/1/2000 0:00:00", "TORNADO", fatalities=0.6),
        make_row("1/2/2000 0:00:00", "TORNADO", fatalities=2, propdmg=-5, propexp="K"),
        make_row("1/3/2000 0:00:00", "TORNADO", fatalities=1),
    ])
    store = StormStore(cutoff_year=1993).load_frame(raw)
    assert store.report.rows_rejected == 2
    assert store.impact["fatalities"].tolist() == [1]
    assert (store.impact["economic_loss"] >= 0).all()
    rows = {r["metric"]: r["value"] for r in store.report.as_rows()}
    assert rows["Invalid fatalities"] == 1
    assert rows["Invalid property_damage"] == 1
