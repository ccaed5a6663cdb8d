#!/usr/bin/env python
"""Run an allocation import against the reference ledger."""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sam_ledger.console import SamConsole
from sam_ledger.exceptions import ImportParseError
from sam_ledger.seed import build_reference_store
from sam_ledger.utils.file_parser import (
    decode_content,
    missing_required_columns,
    parse_csv_text,
    suggest_column_mapping,
)


async def import_csv(path: Path, commit: bool = False) -> bool:
    """Import a CSV file into a freshly seeded ledger and print the outcome."""
    console = SamConsole(build_reference_store())

    try:
        columns = parse_csv_text(decode_content(path.read_bytes()))["columns"]
    except (OSError, ImportParseError) as e:
        print(f"Cannot read {path}: {e}")
        return False

    mapping = suggest_column_mapping(columns)
    missing = missing_required_columns(mapping)
    if missing:
        print(f"Could not map required columns: {', '.join(missing)}")
        return False

    for field_id, header in mapping.items():
        print(f"  {field_id:<12} <- {header}")

    result = await console.import_data_from_csv(path, mapping, dry_run=not commit)

    mode = "Imported" if commit else "Dry run"
    print(
        f"{mode}: {result.ok} ok, {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings, {len(result.duplicates)} duplicates"
    )
    for label, issues in (("error", result.errors), ("warning", result.warnings), ("duplicate", result.duplicates)):
        for issue in issues:
            print(f"  row {issue.row_index} {label}: {issue.message}")

    if commit:
        inconsistent = console.allocation_service.check_pool_consistency()
        print(f"Pools: {len(console.pools)} ({len(inconsistent)} inconsistent)")
    return not result.errors


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Import license allocations from a CSV export")
    parser.add_argument("file", type=Path, help="CSV file with a header row")
    parser.add_argument("--commit", action="store_true", help="Apply the import (default is a dry run)")
    args = parser.parse_args()

    ok = asyncio.run(import_csv(args.file, args.commit))
    sys.exit(0 if ok else 1)
