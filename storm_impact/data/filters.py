"""
Record filters: damage-reported and analysis-window (cutoff year).
"""
from __future__ import annotations

import pandas as pd

from storm_impact.config import CUTOFF_YEAR
from storm_impact.data.quality import DataQualityReport


def damage_reported(df: pd.DataFrame) -> pd.DataFrame:
    """Keep records with any fatalities, injuries, property or crop damage."""
    mask = (
        (df["fatalities"] > 0)
        | (df["injuries"] > 0)
        | (df["property_damage"] > 0)
        | (df["crop_damage"] > 0)
    )
    return df[mask]


def since_year(df: pd.DataFrame, cutoff_year: int = CUTOFF_YEAR) -> pd.DataFrame:
    """Keep records from cutoff_year onward."""
    return df[df["year"] >= cutoff_year]


def apply_filters(
    df: pd.DataFrame,
    cutoff_year: int = CUTOFF_YEAR,
    report: DataQualityReport | None = None,
) -> pd.DataFrame:
    """Apply both filters in order, preserving row order."""
    damaged = damage_reported(df)
    recent = since_year(damaged, cutoff_year)
    if report is not None:
        report.rows_after_damage_filter = len(damaged)
        report.rows_after_year_filter = len(recent)
    print(f"  {len(damaged):,} rows with reported damage, {len(recent):,} from {cutoff_year} onward")
    return recent
