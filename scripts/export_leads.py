#!/usr/bin/env python3
"""
Lead Export Script

Exports leads from the Supabase database to CSV for follow-up outside the
admin dashboard. Text fields that a spreadsheet would run as formulas are quoted.

Usage:
    python export_leads.py --output leads_export.csv
    python export_leads.py --status new --output new_leads.csv
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.lead import ALL_STATUSES, LeadStatus
from services.lead_export_service import CSV_COLUMNS, write_leads_csv
from services.lead_service import list_leads


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Export leads from Supabase database to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export all leads
  python export_leads.py --output all_leads.csv

  # Export only leads nobody has contacted yet
  python export_leads.py --status new --output new_leads.csv
        """
    )

    parser.add_argument(
        "--output",
        "-o",
        required=True,
        help="Path to output CSV file"
    )

    parser.add_argument(
        "--status",
        "-s",
        choices=[ALL_STATUSES] + [status.value for status in LeadStatus],
        default=ALL_STATUSES,
        help="Filter by lead status (default: all)"
    )

    args = parser.parse_args(argv)

    try:
        print("Fetching leads from database...")
        print(f"  Status filter: {args.status}")
        print()

        leads = list_leads(args.status)

        if not leads:
            print("No leads found matching the specified filters")
            return 1

        print(f"Exporting {len(leads)} leads to {args.output}")
        print(f"CSV will contain {len(CSV_COLUMNS)} columns")

        with open(args.output, "w", newline="", encoding="utf-8") as f:
            write_leads_csv(leads, f)

        print()
        print("=" * 60)
        print("EXPORT SUMMARY")
        print("=" * 60)
        print(f"Total leads exported: {len(leads)}")

        by_status = Counter(lead.status for lead in leads)
        for status in LeadStatus:
            print(f"  {status.value:<12} {by_status[status]}")
        print()
        print(f"Output file: {args.output}")
        print("=" * 60)

        return 0

    except KeyboardInterrupt:
        print("\n\nExport interrupted by user")
        return 130

    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
