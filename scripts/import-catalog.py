#!/usr/bin/env python3
"""
Catalog import CLI for the eSIM shop

Loads a JSON batch of countries and plans and merges it into the
configured document store, the same way the admin import endpoint does.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.db import StoreError, get_store, init_db
from app.services.importer import ImportPayloadError, import_catalog


def print_section(label, result):
    updated = f", updated {result.updated}" if hasattr(result, "updated") else ""
    print(f"{label}: added {result.added}{updated}, skipped {result.skipped}")
    for error in result.errors:
        print(f"   - {error}")


def main():
    parser = argparse.ArgumentParser(description="Import countries and plans from a JSON file")
    parser.add_argument("file", help="JSON file with 'countries' and/or 'plans' arrays")
    parser.add_argument("--update-existing", action="store_true",
                        help="Overwrite plans whose id already exists instead of adding copies")
    args = parser.parse_args()

    try:
        payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Cannot read {args.file}: {e}")
        sys.exit(1)

    if args.update_existing and isinstance(payload, dict):
        payload["updateExisting"] = True

    init_db()
    try:
        report = import_catalog(get_store(), payload)
    except (ImportPayloadError, StoreError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print_section("Countries", report.countries)
    print_section("Plans", report.plans)
    if report.countries.errors or report.plans.errors:
        sys.exit(2)


if __name__ == "__main__":
    main()
