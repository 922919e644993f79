"""
Impact analytics — casualties and economic loss by storm category.
"""
from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from storm_impact.config import CATEGORY_LABELS, OTHER_CATEGORY
from storm_impact.analytics.common import pct_of_total


SUMMARY_COLUMNS = [
    "events",
    "casualties",
    "fatalities",
    "injuries",
    "property_damage_dollars",
    "crop_damage_dollars",
    "economic_loss",
]


@dataclass
class CategoryTotals:
    """One category's row of the category summary."""
    category: str
    events: int
    casualties: int
    economic_loss: float


# ---------------------------------------------------------------------------
# Category summary
# ---------------------------------------------------------------------------

def category_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Sum casualties and losses per category.

    Indexed by category label; every label is present, with zeros where no
    record fell into it.
    """
    grouped = df.groupby("category", observed=False).agg(
        events=("event_type", "size"),
        casualties=("casualties", "sum"),
        fatalities=("fatalities", "sum"),
        injuries=("injuries", "sum"),
        property_damage_dollars=("property_damage_dollars", "sum"),
        crop_damage_dollars=("crop_damage_dollars", "sum"),
        economic_loss=("economic_loss", "sum"),
    )
    grouped.index = grouped.index.astype(str)
    grouped = grouped.reindex(CATEGORY_LABELS, fill_value=0)
    grouped.index.name = "category"
    return grouped[SUMMARY_COLUMNS]


def category_totals(summary: pd.DataFrame, category: str) -> CategoryTotals:
    """Look up one category by label. Unknown labels raise KeyError."""
    if category not in summary.index:
        raise KeyError(f"Unknown category {category!r}; expected one of {list(summary.index)}")
    row = summary.loc[category]
    return CategoryTotals(
        category=category,
        events=int(row["events"]),
        casualties=int(row["casualties"]),
        economic_loss=float(row["economic_loss"]),
    )


def ranked(summary: pd.DataFrame, column: str, top_n: int | None = None) -> pd.DataFrame:
    """Categories sorted by column, largest first (ties keep label order)."""
    out = summary.sort_values(column, ascending=False, kind="stable")
    if top_n is not None:
        out = out.head(top_n)
    return out


def summary_rows(summary: pd.DataFrame) -> list[dict]:
    """Summary as row dicts with each category's share of the totals."""
    total_casualties = summary["casualties"].sum()
    total_loss = summary["economic_loss"].sum()
    rows = []
    for category, r in summary.iterrows():
        rows.append({
            "category": category,
            "events": int(r["events"]),
            "fatalities": int(r["fatalities"]),
            "injuries": int(r["injuries"]),
            "casualties": int(r["casualties"]),
            "casualty_share": round(pct_of_total(r["casualties"], total_casualties), 1),
            "property_damage_dollars": float(r["property_damage_dollars"]),
            "crop_damage_dollars": float(r["crop_damage_dollars"]),
            "economic_loss": float(r["economic_loss"]),
            "loss_share": round(pct_of_total(r["economic_loss"], total_loss), 1),
        })
    return rows


# ---------------------------------------------------------------------------
# Totals and supporting tables
# ---------------------------------------------------------------------------

def impact_totals(df: pd.DataFrame) -> dict:
    """Overall totals for the analysis frame."""
    if df.empty:
        return {
            "events": 0, "fatalities": 0, "injuries": 0, "casualties": 0,
            "property_damage_dollars": 0.0, "crop_damage_dollars": 0.0,
            "economic_loss": 0.0, "first_year": None, "last_year": None,
        }
    return {
        "events": int(len(df)),
        "fatalities": int(df["fatalities"].sum()),
        "injuries": int(df["injuries"].sum()),
        "casualties": int(df["casualties"].sum()),
        "property_damage_dollars": float(df["property_damage_dollars"].sum()),
        "crop_damage_dollars": float(df["crop_damage_dollars"].sum()),
        "economic_loss": float(df["economic_loss"].sum()),
        "first_year": int(df["year"].min()),
        "last_year": int(df["year"].max()),
    }


def yearly_event_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Number of records per year, oldest first."""
    counts = df.groupby("year").size().rename("events").reset_index()
    counts["year"] = counts["year"].astype(int)
    return counts.sort_values("year").reset_index(drop=True)


def unmatched_event_types(df: pd.DataFrame, top_n: int = 20) -> pd.DataFrame:
    """Most frequent raw event types that no category rule matched."""
    other = df.loc[df["category"] == OTHER_CATEGORY, "event_type"]
    counts = other.value_counts().head(top_n)
    return pd.DataFrame({"event_type": counts.index.astype(str), "events": counts.values.astype(int)})
