"""
Storm data loading: read, normalise, quality-check, minimise memory.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from storm_impact.config import SOURCE_FILE, COLUMN_MAP, COUNT_COLS
from storm_impact.data.normalize import normalize_columns
from storm_impact.data.quality import (
    DataQualityReport,
    check_dates,
    check_numeric_fields,
    check_numeric_values,
)


def read_source(filepath: Path = SOURCE_FILE) -> pd.DataFrame:
    """Read the raw columns we use from the compressed CSV (compression inferred)."""
    usecols = list(COLUMN_MAP.keys())
    return pd.read_csv(
        filepath,
        usecols=lambda c: c in usecols,
        dtype={"BGN_DATE": str, "EVTYPE": str, "PROPDMGEXP": str, "CROPDMGEXP": str},
        low_memory=False,
    )


def _downcast_numerics(df: pd.DataFrame) -> pd.DataFrame:
    """Shrink integer columns once NA rows are gone (~900k rows in the full file)."""
    if "year" in df.columns:
        df["year"] = df["year"].astype("int16")
    for col in COUNT_COLS:
        if col in df.columns:
            df[col] = df[col].astype("int32")
    for col in ["property_damage_exp", "crop_damage_exp"]:
        if col in df.columns:
            df[col] = df[col].astype("category")
    return df


def prepare_records(
    raw: pd.DataFrame,
    report: DataQualityReport | None = None,
    strict: bool = False,
) -> pd.DataFrame:
    """Normalise a raw frame and drop (or raise on) rows failing quality checks."""
    if report is None:
        report = DataQualityReport()
    report.rows_loaded = len(raw)

    df = normalize_columns(raw)
    df = check_dates(df, raw["BGN_DATE"], report, strict=strict)
    df = check_numeric_fields(df, report, strict=strict)
    df = check_numeric_values(df, report, strict=strict)
    return _downcast_numerics(df)


def load_records(
    filepath: Path = SOURCE_FILE,
    report: DataQualityReport | None = None,
    strict: bool = False,
) -> pd.DataFrame:
    """Load the storm data file into a normalised, quality-checked frame."""
    raw = read_source(filepath)
    print(f"  Loaded {len(raw):,} rows from {Path(filepath).name}")
    df = prepare_records(raw, report, strict=strict)
    print(f"  {len(df):,} rows after quality checks")
    return df
