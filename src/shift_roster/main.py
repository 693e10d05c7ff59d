"""
Main entry point for the shift roster application.
"""

import sys
import argparse
import logging
import random

from .allocator import SchedulingError, ShiftAllocator
from .config import ConfigLoader, ConfigurationError, InvalidDateFormatError
from .exporters import CSVExporter, TSVExporter, default_filename
from .ingest import IngestionError, load_requests_csv
from .reporter import ScheduleReporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shift-roster",
        description="Build a monthly day/night shift roster from off-requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full report with all details
  shift-roster config/roster.yaml --requests requests.csv

  # Another month, minimal output
  shift-roster config/roster.yaml --month 2025-02 --quiet

  # Export the grid for spreadsheets
  shift-roster config/roster.yaml --export-tsv roster.tsv
        """,
    )

    parser.add_argument("config", type=str, help="Path to YAML configuration file")
    parser.add_argument(
        "--requests", type=str, help="CSV file with ID,Name,Date,Priority rows"
    )
    parser.add_argument("--month", type=str, help="Override target month (YYYY-MM)")
    parser.add_argument(
        "--export-tsv",
        nargs="?",
        const="",
        help="Export grid to TSV file (default name: シフト表_YYYY-MM.tsv)",
    )
    parser.add_argument(
        "--export-csv",
        nargs="?",
        const="",
        help="Export grid to CSV file (default name: シフト表_YYYY-MM.csv)",
    )
    parser.add_argument(
        "--export-assignments",
        type=str,
        help="Export one Date,Worker,ID,Shift row per assignment to CSV",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Break ties between equally loaded workers randomly with this seed",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress detailed output (only show schedule and warnings)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        # Load configuration
        print(f"Loading configuration from: {args.config}")
        loader = ConfigLoader(args.config)
        settings = loader.load(month_override=args.month)

        print("✓ Configuration loaded successfully")
        print(loader.get_summary())
        print()

        # Load requests
        requests_path = args.requests or settings.requests_csv
        workers = []
        if requests_path:
            print(f"Loading requests from: {requests_path}")
            workers = load_requests_csv(requests_path)
            print(f"✓ {len(workers)} worker(s) loaded")
            print()

        config = settings.build_config(workers)

        # Run allocation
        print("Generating roster...")
        rng = random.Random(args.seed) if args.seed is not None else None
        result = ShiftAllocator(config, rng=rng).allocate()
        print("✓ Roster generated")
        print()

        reporter = ScheduleReporter(result)
        reporter.print_report(args.quiet)

        if args.export_tsv is not None:
            TSVExporter(result).export(
                args.export_tsv or default_filename(config, "tsv")
            )
        if args.export_csv is not None:
            CSVExporter(result).export(
                args.export_csv or default_filename(config, "csv")
            )
        if args.export_assignments:
            reporter.export_to_csv(args.export_assignments)

        # Exit with appropriate code
        sys.exit(1 if result.has_shortfall else 0)

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except InvalidDateFormatError as e:
        print(f"Date Format Error: {e}", file=sys.stderr)
        print(
            "\n Tip: Use ISO 8601 format (YYYY-MM-DD) for all dates.", file=sys.stderr
        )
        print("   Example: 2025-01-13", file=sys.stderr)
        sys.exit(1)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        sys.exit(1)

    except IngestionError as e:
        print(f"Request File Error: {e}", file=sys.stderr)
        sys.exit(1)

    except SchedulingError as e:
        print(f"Cannot generate roster: {e}", file=sys.stderr)
        sys.exit(1)

    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
