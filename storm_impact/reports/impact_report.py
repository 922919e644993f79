"""
Storm Impact Report — casualties and economic loss by storm category.

Summary sheet (KPIs, narrative, category table, two bar charts), events by
year, the category rule list, and data-quality counts.
"""
from __future__ import annotations

import json
from pathlib import Path

from storm_impact.config import EVENT_CATEGORY_RULES, CATEGORY_LEGEND, OTHER_CATEGORY
from storm_impact.data.store import StormStore
from storm_impact.analytics.common import format_dollars, pct_of_total, sanitize_for_json
from storm_impact.analytics.impact import (
    category_summary,
    category_totals,
    ranked,
    summary_rows,
    impact_totals,
    yearly_event_counts,
    unmatched_event_types,
)
from storm_impact.excel.writer import ExcelWriter, Column
from storm_impact.excel.styles import CASUALTY_COLOR, LOSS_COLOR, YEAR_COLOR


CATEGORY_COLUMNS = [
    Column("category", "Category"),
    Column("events", "Events", "number"),
    Column("fatalities", "Fatalities", "number"),
    Column("injuries", "Injuries", "number"),
    Column("casualties", "Casualties", "number"),
    Column("casualty_share", "% of Casualties", "percent"),
    Column("property_damage_dollars", "Property Damage", "currency"),
    Column("crop_damage_dollars", "Crop Damage", "currency"),
    Column("economic_loss", "Economic Loss", "currency"),
    Column("loss_share", "% of Loss", "percent"),
]


# ---------------------------------------------------------------------------
# Narrative
# ---------------------------------------------------------------------------

def build_narrative(
    summary,
    totals: dict,
    by_year,
    cutoff_year: int,
    quality: dict,
) -> list[tuple[str, str]]:
    """Return (title, body) pairs describing the results.

    Every category figure is looked up by label, never by row position.
    """
    if totals["events"] == 0:
        return [("No data", f"No damage-reporting storm events from {cutoff_year} onward.")]

    items = [(
        "Overview",
        f"From {totals['first_year']} to {totals['last_year']}, {totals['events']:,} storm events "
        f"with reported damage caused {totals['casualties']:,} casualties "
        f"({totals['fatalities']:,} deaths and {totals['injuries']:,} injuries) and "
        f"{format_dollars(totals['economic_loss'])} in property and crop damage.",
    )]

    top_cas = category_totals(summary, ranked(summary, "casualties").index[0])
    top_loss = category_totals(summary, ranked(summary, "economic_loss").index[0])
    items.append((
        "Most harmful to population health",
        f"{top_cas.category} caused the most casualties: {top_cas.casualties:,} "
        f"({pct_of_total(top_cas.casualties, totals['casualties']):.1f}% of the total) "
        f"across {top_cas.events:,} events.",
    ))
    items.append((
        "Greatest economic consequences",
        f"{top_loss.category} caused the largest economic loss: {format_dollars(top_loss.economic_loss)} "
        f"({pct_of_total(top_loss.economic_loss, totals['economic_loss']):.1f}% of the total).",
    ))

    tornado = category_totals(summary, "Tornado")
    heat = category_totals(summary, "Heat")
    items.append((
        "Tornadoes and heat",
        f"Tornadoes account for {tornado.casualties:,} casualties and "
        f"{format_dollars(tornado.economic_loss)} in damage; heat accounts for "
        f"{heat.casualties:,} casualties but only {format_dollars(heat.economic_loss)} in damage.",
    ))

    counts = dict(zip(by_year["year"], by_year["events"]))
    before, after = counts.get(cutoff_year - 1), counts.get(cutoff_year)
    if before is not None and after is not None:
        items.append((
            f"Why {cutoff_year} onward",
            f"Damage-reporting records jump from {before:,} in {cutoff_year - 1} to {after:,} in "
            f"{cutoff_year}, when NOAA began recording many more event types. Earlier years are "
            f"excluded so reporting changes are not mistaken for changes in storm frequency.",
        ))

    other = category_totals(summary, OTHER_CATEGORY)
    items.append((
        "Data quality",
        f"{quality['rows_rejected']:,} of {quality['rows_loaded']:,} records were rejected "
        f"({quality['malformed_dates']:,} with malformed dates). {other.events:,} analysed events "
        f"matched no category rule and are grouped as '{OTHER_CATEGORY}'.",
    ))
    return items


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def generate_json(store: StormStore) -> dict:
    impact = store.impact
    summary = category_summary(impact)
    totals = impact_totals(impact)
    by_year = yearly_event_counts(store.damaging_records())
    quality = {
        "rows_loaded": store.report.rows_loaded,
        "malformed_dates": store.report.malformed_dates,
        "missing_numeric": dict(store.report.missing_numeric),
        "invalid_numeric": dict(store.report.invalid_numeric),
        "rows_rejected": store.report.rows_rejected,
        "rows_after_damage_filter": store.report.rows_after_damage_filter,
        "rows_after_year_filter": store.report.rows_after_year_filter,
    }
    return {
        "cutoff_year": store.cutoff_year,
        "totals": totals,
        "categories": summary_rows(summary),
        "narrative": [
            {"title": t, "body": b}
            for t, b in build_narrative(summary, totals, by_year, store.cutoff_year, quality)
        ],
        "by_year": by_year.to_dict("records"),
        "rules": [
            {"order": i, "pattern": p, "category": c}
            for i, (p, c) in enumerate(EVENT_CATEGORY_RULES, 1)
        ],
        "data_quality": quality,
        "quality_rows": store.report.as_rows(),
        "unmatched_event_types": unmatched_event_types(impact).to_dict("records"),
    }


def write_json(store: StormStore, output_path: str | Path) -> Path:
    """Write generate_json output, sanitised, to output_path."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(sanitize_for_json(generate_json(store)), f, indent=2, default=str)
    return path


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def generate_excel(store: StormStore, output_path: str | Path) -> Path:
    data = generate_json(store)
    totals = data["totals"]
    ew = ExcelWriter()

    # Summary
    ws = ew.sheet("Summary")
    span = (
        f"{totals['first_year']}–{totals['last_year']}" if totals["first_year"] is not None
        else f"{data['cutoff_year']} onward"
    )
    ew.title_block(ws, "U.S. STORM IMPACT", f"Casualties and economic loss by storm category  |  {span}")
    row = ew.kpi_row(ws, 4, [
        (totals["events"], "Damaging Events", "number"),
        (totals["casualties"], "Casualties", "number"),
        (totals["fatalities"], "Fatalities", "number"),
        (totals["economic_loss"], "Economic Loss", "currency"),
    ])
    row = ew.section(ws, row, "KEY FINDINGS")
    row = ew.findings(ws, row, data["narrative"])
    row = ew.section(ws, row, "BY CATEGORY")
    by_category = ew.table(
        ws, row, CATEGORY_COLUMNS,
        sorted(data["categories"], key=lambda r: r["casualties"], reverse=True),
        highlight=lambda i, r: "gold" if i == 0 else None,
        total_label="TOTAL",
    )
    chart_row = by_category.end_row + 1

    # Chart data, each table ranked by its own metric
    ws_chart = ew.sheet("Chart Data")
    casualties = ew.table(
        ws_chart, 1,
        [Column("category", "Category"), Column("casualties", "Casualties", "number")],
        sorted(data["categories"], key=lambda r: r["casualties"], reverse=True),
    )
    losses = ew.table(
        ws_chart, casualties.end_row + 1,
        [Column("category", "Category"), Column("economic_loss", "Economic Loss", "currency")],
        sorted(data["categories"], key=lambda r: r["economic_loss"], reverse=True),
    )
    ew.bar_chart(
        ws, f"A{chart_row}", casualties, "casualties",
        title="Total Casualties by Storm Category", y_title="Fatalities + injuries",
        color=CASUALTY_COLOR,
    )
    ew.bar_chart(
        ws, f"F{chart_row}", losses, "economic_loss",
        title="Total Economic Loss by Storm Category", y_title="Property + crop damage (USD)",
        color=LOSS_COLOR, number_format='"$"#,##0,,"M"',
    )

    # Events by year
    ws_year = ew.sheet("By Year")
    ew.title_block(ws_year, "EVENTS BY YEAR", "Damage-reporting records per year, all years", width=4)
    years = ew.table(
        ws_year, 4,
        [Column("year", "Year", "year"), Column("events", "Events", "number")],
        data["by_year"],
        highlight=lambda i, r: "blue" if r["year"] >= data["cutoff_year"] else None,
        freeze=True,
    )
    if data["by_year"]:
        ew.bar_chart(
            ws_year, "D4", years, "events",
            title="Damage-Reporting Events per Year", y_title="Events", color=YEAR_COLOR,
        )

    # Category rules
    ws_rules = ew.sheet("Category Rules")
    ew.title_block(ws_rules, "CATEGORY RULES",
                   "Case-insensitive substring rules; when several match, the LAST one wins",
                   width=3)
    rules = ew.table(ws_rules, 4, [
        Column("order", "Order", "number"),
        Column("pattern", "EVTYPE contains"),
        Column("category", "Category"),
    ], data["rules"])
    row = ew.section(ws_rules, rules.end_row + 1, "CATEGORY KEY")
    ew.legend(ws_rules, row, CATEGORY_LEGEND)

    # Data quality
    ws_q = ew.sheet("Data Quality")
    ew.title_block(ws_q, "DATA QUALITY", "Records rejected and unmatched event types", width=3)
    checks = ew.table(ws_q, 4, [
        Column("metric", "Check"),
        Column("value", "Rows", "number"),
    ], data["quality_rows"])
    if data["unmatched_event_types"]:
        row = ew.section(ws_q, checks.end_row + 1, f"MOST COMMON '{OTHER_CATEGORY.upper()}' EVENT TYPES")
        ew.table(ws_q, row, [
            Column("event_type", "Event Type"),
            Column("events", "Events", "number"),
        ], data["unmatched_event_types"])

    return ew.save(output_path)
