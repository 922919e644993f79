#!/usr/bin/env python3
"""
Storm Impact CLI — fetch the NOAA storm data, summarise it, build the report.

USAGE:
  python -m storm_impact.cli fetch                          # Download StormData.csv.bz2 if missing
  python -m storm_impact.cli fetch --force                  # Re-download

  python -m storm_impact.cli summary                        # Print the category table
  python -m storm_impact.cli summary --cutoff 1996 --sort economic_loss

  python -m storm_impact.cli report                         # Excel + JSON report in <data dir>/reports
  python -m storm_impact.cli report --strict                # Fail on malformed dates / missing figures

  python -m storm_impact.cli classify "TSTM WIND/HAIL"      # Show which rules match
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from storm_impact.config import SOURCE_FILE, REPORTS_FOLDER, CUTOFF_YEAR, OTHER_CATEGORY


def _load_store(args):
    from storm_impact.data.store import StormStore
    return StormStore(cutoff_year=args.cutoff).load(
        Path(args.source), fetch=not args.no_fetch, strict=args.strict,
    )


def cmd_fetch(args):
    """Download the source file."""
    from storm_impact.data.fetch import fetch_source
    fetch_source(Path(args.source), force=args.force)


def cmd_summary(args):
    """Print casualties and economic loss per category."""
    from storm_impact.analytics.impact import category_summary, ranked, impact_totals
    from storm_impact.analytics.common import format_dollars

    store = _load_store(args)
    summary = ranked(category_summary(store.impact), args.sort)
    totals = impact_totals(store.impact)

    print(f"\nSTORM IMPACT BY CATEGORY ({args.cutoff} onward, sorted by {args.sort}):\n")
    print(f"{'Category':<20}{'Events':>10}{'Casualties':>14}{'Economic Loss':>18}")
    print("-" * 62)
    for category, r in summary.iterrows():
        print(f"{category:<20}{int(r['events']):>10,}{int(r['casualties']):>14,}"
              f"{format_dollars(r['economic_loss']):>18}")
    print("-" * 62)
    print(f"{'TOTAL':<20}{totals['events']:>10,}{totals['casualties']:>14,}"
          f"{format_dollars(totals['economic_loss']):>18}\n")


def cmd_report(args):
    """Generate the Excel + JSON impact report."""
    from storm_impact.reports.impact_report import generate_excel, write_json

    print("\n" + "=" * 70)
    print("  STORM IMPACT — REPORT")
    print("=" * 70)
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

    store = _load_store(args)
    output_folder = Path(args.output)
    output_folder.mkdir(parents=True, exist_ok=True)
    stem = f"storm_impact_{args.cutoff}"

    xlsx = generate_excel(store, output_folder / f"{stem}.xlsx")
    print(f"   {xlsx.name}")
    js = write_json(store, output_folder / f"{stem}.json")
    print(f"   {js.name}")

    print(f"\n  Reports saved to: {output_folder}")
    print("=" * 70 + "\n")


def cmd_classify(args):
    """Show the category for event type strings and every rule they match."""
    from storm_impact.data.normalize import classify_event_type, matching_rules

    for event_type in args.event_types:
        label = classify_event_type(event_type)
        print(f"{event_type!r} -> {label}")
        matches = matching_rules(event_type)
        if not matches:
            print(f"    no rule matches; defaults to '{OTHER_CATEGORY}'")
        for i, pattern, rule_label in matches:
            print(f"    rule {i:>2}: {pattern:<10} -> {rule_label}")


def _add_load_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--source", default=str(SOURCE_FILE), help=f"Source file (default {SOURCE_FILE})")
    p.add_argument("--cutoff", type=int, default=CUTOFF_YEAR, help=f"First year analysed (default {CUTOFF_YEAR})")
    p.add_argument("--no-fetch", action="store_true", help="Do not download the source file if missing")
    p.add_argument("--strict", action="store_true", help="Raise on malformed dates or missing figures")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Storm Impact — casualties and economic loss by storm category",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # fetch subcommand
    fetch_parser = subparsers.add_parser("fetch", help="Download the source data file")
    fetch_parser.add_argument("--source", default=str(SOURCE_FILE), help="Destination path")
    fetch_parser.add_argument("--force", action="store_true", help="Download even if cached")
    fetch_parser.set_defaults(func=cmd_fetch)

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Print the category summary")
    _add_load_args(summary_parser)
    summary_parser.add_argument("--sort", choices=["casualties", "economic_loss", "events"],
                                default="casualties", help="Sort column")
    summary_parser.set_defaults(func=cmd_summary)

    # report subcommand
    report_parser = subparsers.add_parser("report", help="Generate the Excel + JSON report")
    _add_load_args(report_parser)
    report_parser.add_argument("--output", default=str(REPORTS_FOLDER), help=f"Output folder (default {REPORTS_FOLDER})")
    report_parser.set_defaults(func=cmd_report)

    # classify subcommand
    classify_parser = subparsers.add_parser("classify", help="Classify event type strings")
    classify_parser.add_argument("event_types", nargs="+", help="EVTYPE value(s)")
    classify_parser.set_defaults(func=cmd_classify)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
