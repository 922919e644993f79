import pandas as pd
import pytest

from storm_impact.config import CATEGORY_LABELS, OTHER_CATEGORY
from storm_impact.data.filters import apply_filters
from storm_impact.data.normalize import resolve_damage
from storm_impact.analytics.impact import (
    category_summary,
    category_totals,
    ranked,
    summary_rows,
    impact_totals,
    yearly_event_counts,
    unmatched_event_types,
)


@pytest.fixture
def impact(records):
    return resolve_damage(apply_filters(records, 1993))


def test_end_to_end_scenario(raw_frame):
    from storm_impact.data.store import StormStore

    store = StormStore(cutoff_year=1993).load_frame(raw_frame)
    summary = category_summary(store.impact)

    assert store.is_loaded
    assert store.row_count() == 2
    wind = category_totals(summary, "Wind")
    flood = category_totals(summary, "Flood")
    heat = category_totals(summary, "Heat")
    assert (wind.casualties, wind.economic_loss) == (1, 10_000)
    assert (flood.casualties, flood.economic_loss) == (2, 5_000_000)
    assert (heat.events, heat.casualties) == (0, 0)


def test_summary_has_every_label(impact):
    summary = category_summary(impact)
    assert list(summary.index) == CATEGORY_LABELS
    assert summary.loc["Tornado", "events"] == 0


def test_summary_sum_invariant(impact):
    summary = category_summary(impact)
    assert summary["casualties"].sum() == impact["casualties"].sum()
    assert summary["economic_loss"].sum() == pytest.approx(impact["economic_loss"].sum())
    assert summary["events"].sum() == len(impact)


def test_summary_with_plain_string_categories(impact):
    impact = impact.assign(category=impact["category"].astype(str))
    summary = category_summary(impact)
    assert list(summary.index) == CATEGORY_LABELS
    assert summary.loc["Winter Storm", "casualties"] == 4


def test_category_totals_unknown_label(impact):
    with pytest.raises(KeyError, match="Sharknado"):
        category_totals(category_summary(impact), "Sharknado")


def test_ranked(impact):
    summary = category_summary(impact)
    assert list(ranked(summary, "casualties", top_n=3).index) == ["Winter Storm", "Flood", "Wind"]
    assert ranked(summary, "economic_loss").index[0] == "Winter Storm"


def test_summary_rows_shares(impact):
    rows = {r["category"]: r for r in summary_rows(category_summary(impact))}
    assert rows["Flood"]["casualty_share"] == pytest.approx(28.6)
    assert rows["Avalanche"]["loss_share"] == 0.0
    assert sum(r["casualties"] for r in rows.values()) == 7


def test_impact_totals(impact):
    totals = impact_totals(impact)
    assert totals["events"] == 3
    assert totals["casualties"] == 7
    assert totals["first_year"] == 1994
    assert totals["last_year"] == 2001


def test_impact_totals_empty(impact):
    assert impact_totals(impact.iloc[0:0])["events"] == 0


def test_yearly_event_counts(records):
    counts = yearly_event_counts(records)
    assert counts["year"].tolist() == [1990, 1994, 1995, 2000, 2001]
    assert counts["events"].tolist() == [1, 1, 1, 1, 1]


def test_unmatched_event_types(records):
    df = resolve_damage(pd.concat([records, records.iloc[[3]]], ignore_index=True))
    out = unmatched_event_types(df)
    assert out.to_dict("records") == [{"event_type": "FUNNEL CLOUD", "events": 2}]
    assert (df["category"] == OTHER_CATEGORY).sum() == 2
