#!/usr/bin/env python
"""
Build the workforce utilisation table and write it as CSV.

Usage:
    python scripts/build_table.py
    python scripts/build_table.py --period 2024-08 --output table.csv
    python scripts/build_table.py --source /path/to/source-data.json --quarter Q3
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import COLUMN_LABELS, config, reporting_settings_from_env
from src.data.loader import read_source_records
from src.metrics.workforce import build_workforce_table, workforce_frame


def main():
    parser = argparse.ArgumentParser(description="Build the workforce utilisation table")
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="Path to the source JSON file"
    )
    parser.add_argument(
        "--period",
        type=str,
        default=None,
        help="Reporting period (YYYY-MM)"
    )
    parser.add_argument(
        "--quarter",
        type=str,
        default=None,
        help="Revenue quarter label (default: derived from period)"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write CSV here instead of stdout"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = reporting_settings_from_env()
    if args.period:
        try:
            settings = settings.with_period(args.period, args.quarter)
        except ValueError as e:
            parser.error(str(e))
    elif args.quarter:
        settings = settings.with_period(settings.target_period, args.quarter)

    source = Path(args.source) if args.source else config.source_path
    records = read_source_records(source)
    if records is None:
        print(f"✗ Source file not found: {source}", file=sys.stderr)
        sys.exit(1)

    table = build_workforce_table(records, settings)
    df = workforce_frame(table).rename(columns=COLUMN_LABELS)

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"✓ Wrote {len(df):,} rows ({len(table.months)} month columns) to {args.output}")
    else:
        df.to_csv(sys.stdout, index=False)


if __name__ == "__main__":
    main()
