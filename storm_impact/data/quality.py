"""
Data-quality checks: malformed dates, missing numeric fields and invalid figures.

The source file has no guarantee that every record carries a parseable begin
date or all four damage/casualty figures. Rather than trusting that, each
check counts the offending rows into a DataQualityReport and drops them, or
raises when strict=True.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from storm_impact.config import NUMERIC_COLS, COUNT_COLS


class MalformedDateError(ValueError):
    """One or more records have an absent or unparseable begin date."""

    def __init__(self, count: int, examples: list[str] | None = None) -> None:
        self.count = count
        self.examples = examples or []
        msg = f"{count:,} record(s) with malformed begin date"
        if self.examples:
            msg += f" (e.g. {', '.join(repr(e) for e in self.examples)})"
        super().__init__(msg)


class MissingNumericFieldError(ValueError):
    """One or more records are missing a fatalities/injuries/damage figure."""

    def __init__(self, count: int, by_column: dict[str, int]) -> None:
        self.count = count
        self.by_column = by_column
        detail = ", ".join(f"{col}={n:,}" for col, n in by_column.items() if n)
        super().__init__(f"{count:,} record(s) with missing numeric fields ({detail})")


class InvalidNumericFieldError(ValueError):
    """Figures present but impossible: negative, or a fractional casualty count."""

    def __init__(self, count: int, by_column: dict[str, int]) -> None:
        self.count = count
        self.by_column = by_column
        detail = ", ".join(f"{col}={n:,}" for col, n in by_column.items() if n)
        super().__init__(f"{count:,} record(s) with invalid numeric fields ({detail})")


@dataclass
class DataQualityReport:
    """Row counts collected while loading and filtering the dataset."""
    rows_loaded: int = 0
    malformed_dates: int = 0
    missing_numeric: dict[str, int] = field(default_factory=dict)
    invalid_numeric: dict[str, int] = field(default_factory=dict)
    rows_rejected: int = 0
    rows_after_damage_filter: int = 0
    rows_after_year_filter: int = 0

    def as_rows(self) -> list[dict]:
        """Flatten into (metric, value) rows for tables."""
        rows = [
            {"metric": "Rows loaded", "value": self.rows_loaded},
            {"metric": "Malformed begin dates (rejected)", "value": self.malformed_dates},
        ]
        for col, n in self.missing_numeric.items():
            rows.append({"metric": f"Missing {col}", "value": n})
        for col, n in self.invalid_numeric.items():
            rows.append({"metric": f"Invalid {col}", "value": n})
        rows += [
            {"metric": "Rows rejected", "value": self.rows_rejected},
            {"metric": "Rows with reported damage", "value": self.rows_after_damage_filter},
            {"metric": "Rows in analysis window", "value": self.rows_after_year_filter},
        ]
        return rows


def check_dates(
    df: pd.DataFrame,
    raw_dates: pd.Series,
    report: DataQualityReport,
    strict: bool = False,
) -> pd.DataFrame:
    """Reject rows whose begin_date failed to parse.

    raw_dates is the unparsed column, used only to show examples.
    """
    bad = df["begin_date"].isna()
    count = int(bad.sum())
    report.malformed_dates += count
    if count == 0:
        return df

    if strict:
        examples = raw_dates[bad].astype(str).head(3).tolist()
        raise MalformedDateError(count, examples)

    print(f"  Rejected {count:,} rows with malformed begin date")
    report.rows_rejected += count
    return df[~bad].copy()


def check_numeric_fields(
    df: pd.DataFrame,
    report: DataQualityReport,
    strict: bool = False,
) -> pd.DataFrame:
    """Reject rows missing any of the four casualty/damage figures.

    Missing figures are never read as zero.
    """
    missing = df[NUMERIC_COLS].isna()
    by_column = {col: int(missing[col].sum()) for col in NUMERIC_COLS}
    bad = missing.any(axis=1)
    count = int(bad.sum())

    for col, n in by_column.items():
        report.missing_numeric[col] = report.missing_numeric.get(col, 0) + n
    if count == 0:
        return df

    if strict:
        raise MissingNumericFieldError(count, by_column)

    print(f"  Rejected {count:,} rows with missing numeric fields")
    report.rows_rejected += count
    return df[~bad].copy()


def check_numeric_values(
    df: pd.DataFrame,
    report: DataQualityReport,
    strict: bool = False,
) -> pd.DataFrame:
    """Reject rows with a negative figure or a fractional fatality/injury count.

    Runs after check_numeric_fields (no NA left) and before the integer
    downcast, which would otherwise truncate 0.6 fatalities to 0.
    """
    invalid = pd.DataFrame(
        {
            col: (df[col] < 0) | ((df[col] % 1 != 0) if col in COUNT_COLS else False)
            for col in NUMERIC_COLS
        },
        index=df.index,
    )
    by_column = {col: int(invalid[col].sum()) for col in NUMERIC_COLS}
    bad = invalid.any(axis=1)
    count = int(bad.sum())

    for col, n in by_column.items():
        report.invalid_numeric[col] = report.invalid_numeric.get(col, 0) + n
    if count == 0:
        return df

    if strict:
        raise InvalidNumericFieldError(count, by_column)

    print(f"  Rejected {count:,} rows with negative or fractional figures")
    report.rows_rejected += count
    return df[~bad].copy()
