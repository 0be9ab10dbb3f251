#!/usr/bin/env python
"""
Validate the source data file against the record schema.

Usage:
    python scripts/validate_inputs.py
    python scripts/validate_inputs.py --data-dir /path/to/data
    python scripts/validate_inputs.py --source /path/to/source-data.json
"""
import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config
from src.data.loader import read_raw_records
from src.data.schema import validate_records


def validate_file(filepath: Path) -> dict:
    """Validate a single source file."""
    result = {
        "exists": filepath.exists(),
        "valid": False,
        "report": None,
        "errors": [],
    }

    if not result["exists"]:
        result["errors"].append(f"File not found: {filepath}")
        return result

    try:
        raw = read_raw_records(filepath)
    except (OSError, json.JSONDecodeError) as e:
        result["errors"].append(f"Failed to load: {e}")
        return result

    report = validate_records(raw, strict=False)
    result["report"] = report
    result["valid"] = report["is_valid"]
    result["errors"].extend(report["errors"])

    return result


def main():
    parser = argparse.ArgumentParser(description="Validate the source data file")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Override data directory"
    )
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="Path to the source JSON file (overrides --data-dir)"
    )

    args = parser.parse_args()

    if args.source:
        filepath = Path(args.source)
    elif args.data_dir:
        filepath = Path(args.data_dir) / config.source_file
    else:
        filepath = config.source_path

    print("=" * 60)
    print("Source Data Validation")
    print("=" * 60)
    print(f"Source file: {filepath}")
    print()

    result = validate_file(filepath)
    report = result["report"]

    if report is not None:
        print(f"  Records: {report['total_records']:,}")
        print(f"    Active: {report['active_records']:,}")
        print(f"    Inactive: {report['inactive_records']:,}")
        if report["missing_role"]:
            print(f"  ⚠ No employee/external payload: {report['missing_role']}")
        if report["both_roles"]:
            print(f"  ⚠ Both roles populated: {report['both_roles']}")
        if report["missing_workforce"]:
            print(f"  ⚠ Missing workforceUtilisation: {report['missing_workforce']}")
        if report["missing_costs"]:
            print(f"  ⚠ Missing costsByMonth: {report['missing_costs']}")

    for err in result["errors"]:
        print(f"  ✗ Error: {err}")

    print()
    print("=" * 60)
    if result["valid"]:
        print("✓ All validations passed")
        sys.exit(0)
    else:
        print("✗ Validation failed - see errors above")
        sys.exit(1)


if __name__ == "__main__":
    main()
