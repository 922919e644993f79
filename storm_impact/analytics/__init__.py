"""Aggregations over the resolved storm records."""
from .impact import (
    CategoryTotals,
    category_summary,
    category_totals,
    ranked,
    summary_rows,
    impact_totals,
    yearly_event_counts,
    unmatched_event_types,
)
