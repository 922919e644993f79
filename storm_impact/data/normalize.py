"""
Column mapping, date parsing, event-type classification, damage magnitude resolution.
"""
from __future__ import annotations

import pandas as pd

from storm_impact.config import (
    COLUMN_MAP, NUMERIC_COLS, CATEGORICAL_COLS, DATE_FORMAT,
    EVENT_CATEGORY_RULES, OTHER_CATEGORY, CATEGORY_LABELS,
    MAGNITUDE_RULES, DEFAULT_MULTIPLIER,
)

CATEGORY_DTYPE = pd.CategoricalDtype(CATEGORY_LABELS)


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw NOAA columns, parse types, add the year column.

    Unparseable dates become NaT and unparseable figures become NA; the
    quality checks decide what happens to those rows.
    """
    missing = [c for c in COLUMN_MAP if c not in df.columns]
    if missing:
        raise KeyError(f"Missing required column(s): {missing}. Available={list(df.columns)}")

    df = df[list(COLUMN_MAP)].rename(columns=COLUMN_MAP).copy()

    # "4/18/1950 0:00:00" → "4/18/1950"
    date_token = _text(df["begin_date"]).str.strip().str.split(" ", n=1).str[0]
    df["begin_date"] = pd.to_datetime(date_token, format=DATE_FORMAT, errors="coerce")
    df["year"] = df["begin_date"].dt.year.astype("Int64")

    for col in NUMERIC_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df["event_type"] = _text(df["event_type"]).str.strip()
    df["property_damage_exp"] = _text(df["property_damage_exp"]).str.strip()
    df["crop_damage_exp"] = _text(df["crop_damage_exp"]).str.strip()

    for col in CATEGORICAL_COLS:
        df[col] = df[col].astype("category")

    return df


def _text(s: pd.Series) -> pd.Series:
    """Object-dtype strings with NA as ''. Works for categorical input too."""
    return s.astype(object).where(s.notna(), "").astype(str)


# ---------------------------------------------------------------------------
# Event-type classification
# ---------------------------------------------------------------------------

def classify_event_type(event_type) -> str:
    """Map a free-text EVTYPE to a category label.

    Every rule whose pattern occurs in the text overwrites the label, so the
    last matching rule in EVENT_CATEGORY_RULES decides: "ICE STORM/WIND"
    matches WIND first and ICE later, and ends up as Winter Storm.
    """
    if event_type is None or pd.isna(event_type):
        return OTHER_CATEGORY
    text = str(event_type).upper()
    label = OTHER_CATEGORY
    for pattern, rule_label in EVENT_CATEGORY_RULES:
        if pattern in text:
            label = rule_label
    return label


def classify_event_types(event_types: pd.Series) -> pd.Series:
    """Vectorized classify_event_type — masks applied in rule order."""
    text = _text(event_types).str.upper()
    result = pd.Series(OTHER_CATEGORY, index=event_types.index, dtype=object)
    for pattern, label in EVENT_CATEGORY_RULES:
        result[text.str.contains(pattern, regex=False)] = label
    return result.astype(CATEGORY_DTYPE)


def matching_rules(event_type: str) -> list[tuple[int, str, str]]:
    """Return (rule_number, pattern, label) for every rule the text matches."""
    text = str(event_type).upper()
    return [
        (i, pattern, label)
        for i, (pattern, label) in enumerate(EVENT_CATEGORY_RULES, 1)
        if pattern in text
    ]


# ---------------------------------------------------------------------------
# Damage magnitude
# ---------------------------------------------------------------------------

def unit_multiplier(code) -> int:
    """Dollar multiplier for a PROPDMGEXP/CROPDMGEXP code.

    Absent or unrecognized codes give 1. K, M and B are checked in that
    order and a later match overwrites an earlier one.
    """
    multiplier = DEFAULT_MULTIPLIER
    if code is None or pd.isna(code):
        return multiplier
    text = str(code).upper()
    for letter, value in MAGNITUDE_RULES:
        if letter in text:
            multiplier = value
    return multiplier


def unit_multipliers(codes: pd.Series) -> pd.Series:
    """Vectorized unit_multiplier."""
    text = _text(codes).str.upper()
    result = pd.Series(DEFAULT_MULTIPLIER, index=codes.index, dtype="int64")
    for letter, value in MAGNITUDE_RULES:
        result[text.str.contains(letter, regex=False)] = value
    return result


def resolve_damage(df: pd.DataFrame) -> pd.DataFrame:
    """Add category, dollar damage, casualties and economic loss.

    Returns a new frame; the input is left untouched.
    """
    out = df.copy()
    out["category"] = classify_event_types(out["event_type"])
    out["property_damage_dollars"] = (
        out["property_damage"].astype("float64") * unit_multipliers(out["property_damage_exp"])
    )
    out["crop_damage_dollars"] = (
        out["crop_damage"].astype("float64") * unit_multipliers(out["crop_damage_exp"])
    )
    out["casualties"] = out["fatalities"] + out["injuries"]
    out["economic_loss"] = out["property_damage_dollars"] + out["crop_damage_dollars"]
    return out
