"""
StormStore — the loaded dataset plus the filtered, classified analysis frame.

Loaded once per run; the report and CLI read from it.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from storm_impact.config import SOURCE_FILE, CUTOFF_YEAR
from storm_impact.data.fetch import fetch_source
from storm_impact.data.filters import apply_filters, damage_reported
from storm_impact.data.loader import load_records, prepare_records
from storm_impact.data.normalize import resolve_damage
from storm_impact.data.quality import DataQualityReport


class StormStore:
    """In-memory storm records with the cutoff-filtered, monetized view cached."""

    def __init__(self, cutoff_year: int = CUTOFF_YEAR) -> None:
        self.cutoff_year = cutoff_year
        self.records: pd.DataFrame = pd.DataFrame()
        self.impact: pd.DataFrame = pd.DataFrame()
        self.report = DataQualityReport()
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        source: Path = SOURCE_FILE,
        fetch: bool = True,
        strict: bool = False,
    ) -> "StormStore":
        """Fetch (if missing) and load the source file, then filter and resolve."""
        print("Loading storm data...")
        if fetch:
            source = fetch_source(source)
        self.records = load_records(source, self.report, strict=strict)
        return self._build()

    def load_frame(self, raw: pd.DataFrame, strict: bool = False) -> "StormStore":
        """Load from an already-read raw frame (same columns as the source file)."""
        self.records = prepare_records(raw, self.report, strict=strict)
        return self._build()

    def _build(self) -> "StormStore":
        filtered = apply_filters(self.records, self.cutoff_year, self.report)
        self.impact = resolve_damage(filtered)
        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def damaging_records(self) -> pd.DataFrame:
        """All damage-reporting records regardless of year."""
        return damage_reported(self.records)

    def row_count(self) -> int:
        return len(self.impact)
